"""Convert floating-point values to digit strings (ecvt/fcvt style)."""

from __future__ import annotations

import math

_BUF_SIZE = 80
_ZERO = ord("0")
_NINE = ord("9")
_ONE = ord("1")


def _text(buf: list[int]) -> str:
    return bytes(buf).split(b"\0", 1)[0].decode("ascii")


def _cvt(arg: float, ndigits: int, eflag: bool) -> tuple[str, int, bool]:
    arg = float(arg)
    if not math.isfinite(arg):
        raise ValueError("cannot convert a non-finite value")
    ndigits = min(max(ndigits, 0), _BUF_SIZE - 2)
    buf = [0] * (_BUF_SIZE + 1)
    r2 = 0
    negative = arg < 0
    if negative:
        arg = -arg
    arg, whole = math.modf(arg)
    pos = 0

    if whole != 0:
        int_digits: list[int] = []
        while whole != 0:
            frac, whole = math.modf(whole / 10)
            int_digits.append(_ZERO + int((frac + 0.03) * 10))
            r2 += 1
        if r2 > _BUF_SIZE:
            raise ValueError("value has too many integer digits to convert")
        int_digits.reverse()
        buf[:r2] = int_digits
        pos = r2
    elif arg > 0:
        while (scaled := arg * 10) < 1:
            arg = scaled
            r2 -= 1

    last = ndigits if eflag else ndigits + r2
    decpt = r2
    if last < 0:
        return "", decpt, negative

    while pos <= last and pos < _BUF_SIZE:
        arg, digit = math.modf(arg * 10)
        buf[pos] = _ZERO + int(digit)
        pos += 1

    if last >= _BUF_SIZE:
        buf[_BUF_SIZE - 1] = 0
        return _text(buf), decpt, negative

    pos = last
    buf[last] += 5
    while buf[last] > _NINE:
        buf[last] = _ZERO
        if last > 0:
            last -= 1
            buf[last] += 1
        else:
            buf[last] = _ONE
            decpt += 1
            if not eflag:
                if pos > 0:
                    buf[pos] = _ZERO
                pos += 1
    buf[pos] = 0
    return _text(buf), decpt, negative


def ecvt(arg: float, ndigits: int) -> tuple[str, int, bool]:
    """Return (digits, decimal point position, negative) with ndigits significant digits."""
    return _cvt(arg, ndigits, eflag=True)


def fcvt(arg: float, ndigits: int) -> tuple[str, int, bool]:
    """Return (digits, decimal point position, negative) with ndigits digits after the point."""
    return _cvt(arg, ndigits, eflag=False)