"""A small printf: integer, string, character, address and fixed-point conversions."""

from __future__ import annotations

import enum
import operator
import re
import sys

from coremark.cvt import fcvt

_LOWER = "0123456789abcdefghijklmnopqrstuvwxyz"
_UPPER = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_MASK32 = 0xFFFFFFFF
_POINTER_WIDTH = 8

_SPEC = re.compile(
    r"%(?P<flags>[-+ #0]*)(?P<width>\d+|\*)?(?P<dot>\.(?P<prec>\d+|\*)?)?(?P<qual>[lL])?(?P<conv>.?)",
    re.ASCII | re.DOTALL,
)


class _Flags(enum.IntFlag):
    NONE = 0
    ZEROPAD = 1 << 0
    SIGN = 1 << 1
    PLUS = 1 << 2
    SPACE = 1 << 3
    LEFT = 1 << 4
    HEX_PREP = 1 << 5
    UPPERCASE = 1 << 6


_FLAG_CHARS = {
    "-": _Flags.LEFT,
    "+": _Flags.PLUS,
    " ": _Flags.SPACE,
    "#": _Flags.HEX_PREP,
    "0": _Flags.ZEROPAD,
}


def _to_s32(value: int) -> int:
    return ((value + 0x80000000) & _MASK32) - 0x80000000


def _layout(sign: str, body: str, size: int, flags: _Flags) -> str:
    """Place sign and body in a field of size characters (size already reduced by both)."""
    pad = max(size, 0)
    if flags & _Flags.LEFT:
        return sign + body + " " * pad
    if flags & _Flags.ZEROPAD:
        return sign + "0" * pad + body
    return " " * pad + sign + body


def _justify(text: str, width: int, flags: _Flags) -> str:
    if flags & _Flags.LEFT:
        return text.ljust(width)
    return text.rjust(width)


def _number(num: int, base: int, size: int, precision: int, flags: _Flags) -> str:
    digits = _UPPER if flags & _Flags.UPPERCASE else _LOWER
    if flags & _Flags.LEFT:
        flags &= ~_Flags.ZEROPAD
    value = num & _MASK32
    sign = ""
    if flags & _Flags.SIGN:
        signed = _to_s32(value)
        if signed < 0:
            sign = "-"
            value = (-signed) & _MASK32
        elif flags & _Flags.PLUS:
            sign = "+"
        elif flags & _Flags.SPACE:
            sign = " "
    prefix = ""
    if flags & _Flags.HEX_PREP:
        if base == 16:
            prefix = "0x"
        elif base == 8:
            prefix = "0"

    body_digits = []
    while value:
        value, remainder = divmod(value, base)
        body_digits.append(digits[remainder])
    body = "".join(reversed(body_digits)) or "0"
    precision = max(precision, len(body))
    body = "0" * (precision - len(body)) + body
    size -= len(sign) + len(prefix) + precision
    pad = max(size, 0)
    if flags & _Flags.LEFT:
        return sign + prefix + body + " " * pad
    if flags & _Flags.ZEROPAD:
        return sign + prefix + "0" * pad + body
    return " " * pad + sign + prefix + body


def _mac_address(addr: bytes, width: int, flags: _Flags) -> str:
    if len(addr) < 6:
        raise ValueError("a hardware address needs 6 bytes")
    digits = _UPPER if flags & _Flags.UPPERCASE else _LOWER
    text = ":".join(digits[byte >> 4] + digits[byte & 0x0F] for byte in addr[:6])
    return _justify(text, width, flags)


def _ip_address(addr: bytes, width: int, flags: _Flags) -> str:
    if len(addr) < 4:
        raise ValueError("an IP address needs 4 bytes")
    text = ".".join(str(byte) for byte in addr[:4])
    return _justify(text, width, flags)


def _parse_float(value: float, precision: int) -> str:
    digits, decpt, negative = fcvt(value, precision)
    sign = "-" if negative else ""
    if not digits:
        return sign + "0" + ("." + "0" * precision if precision > 0 else "")
    if decpt <= 0:
        return sign + "0." + "0" * (-decpt) + digits
    if decpt < len(digits):
        return sign + digits[:decpt] + "." + digits[decpt:]
    return sign + digits


def _flt(num: float, size: int, precision: int, flags: _Flags) -> str:
    if flags & _Flags.LEFT:
        flags &= ~_Flags.ZEROPAD
    sign = ""
    if num < 0.0:
        sign = "-"
        num = -num
    elif flags & _Flags.PLUS:
        sign = "+"
    elif flags & _Flags.SPACE:
        sign = " "
    if precision < 0:
        precision = 6
    text = _parse_float(num, precision)
    if flags & _Flags.HEX_PREP and precision == 0 and "." not in text:
        text += "."
    size -= len(sign) + len(text)
    return _layout(sign, text, size, flags)


def _as_bytes(value: object) -> bytes:
    if isinstance(value, str):
        raise TypeError("an address must be given as bytes")
    return bytes(value)


def _as_text(value: object) -> str:
    if value is None:
        return "<NULL>"
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("latin-1")
    if not isinstance(value, str):
        raise TypeError("%s needs a string argument")
    return value.split("\0", 1)[0]


def _as_char(value: object) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c needs a single character")
        return value
    return chr(operator.index(value) & 0xFF)


def sprintf(fmt: str, *args: object) -> str:
    """Format args according to fmt and return the text."""
    values = iter(args)

    def take() -> object:
        try:
            return next(values)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    def convert(match: re.Match[str]) -> str:
        flags = _Flags.NONE
        for char in match["flags"]:
            flags |= _FLAG_CHARS[char]

        width = -1
        if match["width"] == "*":
            width = operator.index(take())
            if width < 0:
                width = -width
                flags |= _Flags.LEFT
        elif match["width"]:
            width = int(match["width"])

        precision = -1
        if match["dot"]:
            if match["prec"] == "*":
                precision = operator.index(take())
            elif match["prec"]:
                precision = int(match["prec"])
            precision = max(precision, 0)

        qualifier = match["qual"]
        conv = match["conv"]

        if conv == "c":
            return _justify(_as_char(take()), width, flags)
        if conv == "s":
            text = _as_text(take())
            if precision >= 0:
                text = text[:precision]
            return _justify(text, width, flags)
        if conv == "p":
            if width == -1:
                width = _POINTER_WIDTH
                flags |= _Flags.ZEROPAD
            return _number(operator.index(take()), 16, width, precision, flags)
        if conv in ("a", "A"):
            if conv == "A":
                flags |= _Flags.UPPERCASE
            addr = _as_bytes(take())
            if qualifier == "l":
                return _mac_address(addr, width, flags)
            return _ip_address(addr, width, flags)
        if conv == "f":
            return _flt(float(take()), width, precision, flags | _Flags.SIGN)
        if conv in ("o", "x", "X", "d", "i", "u"):
            base = 10
            if conv == "o":
                base = 8
            elif conv in ("x", "X"):
                base = 16
                if conv == "X":
                    flags |= _Flags.UPPERCASE
            elif conv in ("d", "i"):
                flags |= _Flags.SIGN
            return _number(operator.index(take()), base, width, precision, flags)
        return ("" if conv == "%" else "%") + conv

    return _SPEC.sub(convert, fmt.split("\0", 1)[0])


def printf(fmt: str, *args: object) -> int:
    """Format and write to standard output up to the first NUL; return the characters written."""
    text = sprintf(fmt, *args).split("\0", 1)[0]
    sys.stdout.write(text)
    return len(text)