import ipaddress

import pytest

from coremark.printf import printf, sprintf


@pytest.mark.parametrize(
    "fmt, value",
    [
        ("%d", 42),
        ("%d", -42),
        ("%5d", 42),
        ("%-5d|", 42),
        ("%05d", -42),
        ("%+d", 5),
        ("% d", 5),
        ("%.5d", 42),
        ("%x", 255),
        ("%X", 255),
        ("%#x", 255),
        ("%o", 8),
        ("%u", 123456),
        ("%i", -7),
        ("%ld", 100000),
        ("%lu", 4000000000),
    ],
)
def test_integers_match_standard_formatting(fmt, value):
    assert sprintf(fmt, value) == fmt.replace("l", "").replace("u", "d") % value


def test_unsigned_wraps_to_32_bits():
    assert sprintf("%u", -1) == "4294967295"


def test_signed_wraps_to_32_bits():
    assert sprintf("%d", 0x80000000) == "-2147483648"


def test_uppercase_hex_prefix_stays_lowercase():
    assert sprintf("%#X", 255) == "0xFF"


def test_pointer_defaults_to_zero_padded_width():
    assert sprintf("%p", 0x1234) == "%08x" % 0x1234


@pytest.mark.parametrize("fmt", ["%s|", "%10s|", "%-10s|", "%.3s|", "%10.2s|"])
def test_strings_match_standard_formatting(fmt):
    assert sprintf(fmt, "abcdef") == fmt % "abcdef"


def test_null_string():
    assert sprintf("%s", None) == "<NULL>"


def test_character_and_padding():
    assert sprintf("%c", 65) == "A"
    assert sprintf("%3c|%-3c|", 66, 67) == "%3c|%-3c|" % ("B", "C")


def test_star_width_and_precision():
    assert sprintf("%*d", 6, 42) == "%6d" % 42
    assert sprintf("%*d", -6, 42) == "%-6d" % 42
    assert sprintf("%.*f", 2, 1.5) == "%.2f" % 1.5


def test_ip_address():
    addr = bytes([192, 168, 0, 1])
    assert sprintf("%a", addr) == str(ipaddress.IPv4Address(addr))
    assert sprintf("%20a", addr) == str(ipaddress.IPv4Address(addr)).rjust(20)


def test_hardware_address():
    addr = bytes([0x02, 0x00, 0x00, 0xAB, 0xCD, 0x01])
    assert sprintf("%la", addr) == addr.hex(":")
    assert sprintf("%lA", addr) == addr.hex(":").upper()


def test_short_address_rejected():
    with pytest.raises(ValueError):
        sprintf("%la", bytes(4))


def test_percent_and_unknown_conversions():
    assert sprintf("100%%") == "100%"
    assert sprintf("%q") == "%q"
    assert sprintf("%5q") == "%q"
    assert sprintf("%e", 1.0) == "%e"
    assert sprintf("end%") == "end%"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        sprintf("%d %d", 1)


def test_wrong_argument_type_raises():
    with pytest.raises(TypeError):
        sprintf("%d", "x")


def test_printf_writes_and_counts(capsys):
    count = printf("seedcrc          : 0x%04x\n", 0x8A02)
    out = capsys.readouterr().out
    assert out == "seedcrc          : 0x%04x\n" % 0x8A02
    assert count == len(out)


def test_printf_stops_at_nul(capsys):
    assert sprintf("a%cb", 0) == "a\0b"
    assert printf("a%cb", 0) == 1
    assert capsys.readouterr().out == "a"