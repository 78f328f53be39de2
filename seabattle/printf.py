"""Minimal printf-style formatting used for the game's console output.

Supported conversions: ``d i u b o x X c s S p`` and ``%%``.  A conversion
may be preceded by ``#`` (alternate form) and a decimal field width; padding
is always done with spaces on the left.  Integers behave like 32-bit C
integers, pointers like 64-bit addresses.
"""

from __future__ import annotations

import operator
import sys
from typing import Any, Callable, Iterator

_UINT32 = 0xFFFFFFFF
_UINT64 = 0xFFFFFFFFFFFFFFFF


def _as_int32(value: Any) -> int:
    number = operator.index(value) & _UINT32
    return number - (1 << 32) if number >= (1 << 31) else number


def _as_uint32(value: Any) -> int:
    return operator.index(value) & _UINT32


def _to_base(number: int, base: int, digits: str) -> str:
    if number == 0:
        return digits[0]
    out = []
    while number:
        number, rem = divmod(number, base)
        out.append(digits[rem])
    return "".join(reversed(out))


_UPPER = "0123456789ABCDEF"
_LOWER = "0123456789abcdef"


def _decimal(alternate: bool, width: int, value: Any) -> str:
    return str(_as_int32(value)).rjust(width)


def _unsigned(alternate: bool, width: int, value: Any) -> str:
    return str(_as_uint32(value)).rjust(width)


def _based(base: int, digits: str, prefix: str) -> Callable[[bool, int, Any], str]:
    def convert(alternate: bool, width: int, value: Any) -> str:
        number = _as_uint32(value)
        body = _to_base(number, base, digits)
        if alternate and number != 0:
            body = prefix + body
        return body.rjust(width)

    return convert


def _char(alternate: bool, width: int, value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c requires a single character")
        char = value
    else:
        char = chr(operator.index(value) & 0xFF)
    return char.rjust(width)


def _text(value: Any) -> str:
    return "(null)" if value is None else str(value)


def _pad_for(raw: str, width: int) -> str:
    return " " * max(0, width - len(raw.encode("utf-8")))


def _string(alternate: bool, width: int, value: Any) -> str:
    raw = _text(value)
    return _pad_for(raw, width) + raw


def _octal_escape(code: int) -> str:
    digits = _to_base(code & _UINT32, 8, _UPPER)
    if code <= 7:
        return "\\00" + digits
    if code < 32:
        return "\\0" + digits
    return "\\" + digits


def _escaped_string(alternate: bool, width: int, value: Any) -> str:
    raw = _text(value)
    pieces = []
    for byte in raw.encode("utf-8"):
        code = byte - 256 if byte > 127 else byte
        if code < 32 or code > 126:
            pieces.append(_octal_escape(code))
        else:
            pieces.append(chr(code))
    return _pad_for(raw, width) + "".join(pieces)


def _pointer(alternate: bool, width: int, value: Any) -> str:
    if value is None:
        address = 0
    elif isinstance(value, int):
        address = value & _UINT64
    else:
        address = id(value)
    if address == 0:
        return "(nil)".rjust(width)
    return ("0x" + _to_base(address, 16, _LOWER)).rjust(width)


_CONVERSIONS: dict[str, Callable[[bool, int, Any], str]] = {
    "d": _decimal,
    "i": _decimal,
    "u": _unsigned,
    "b": _based(2, _UPPER, "0b"),
    "o": _based(8, _UPPER, "0"),
    "x": _based(16, _LOWER, "0x"),
    "X": _based(16, _UPPER, "0X"),
    "c": _char,
    "s": _string,
    "S": _escaped_string,
    "p": _pointer,
}


def _next_arg(args: Iterator[Any]) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def format_message(fmt: str, *args: Any) -> str:
    """Return ``fmt`` with its conversions replaced by ``args``.

    An unknown conversion is echoed back: ``%`` followed by the conversion
    character and as many following characters as the flag/width prefix
    was long. Surplus arguments are ignored; missing ones raise TypeError.
    """
    values = iter(args)
    out: list[str] = []
    pos = 0
    end = len(fmt)
    while pos < end:
        char = fmt[pos]
        if char != "%":
            out.append(char)
            pos += 1
            continue
        pos += 1
        start = pos
        alternate = pos < end and fmt[pos] == "#"
        if alternate:
            pos += 1
        digits_start = pos
        while pos < end and "0" <= fmt[pos] <= "9":
            pos += 1
        width = int(fmt[digits_start:pos] or "0")
        prefix_len = pos - start
        conversion = fmt[pos] if pos < end else ""
        handler = _CONVERSIONS.get(conversion) if conversion else None
        if handler is not None:
            out.append(handler(alternate, width, _next_arg(values)))
        elif conversion == "%":
            out.append("%")
        else:
            out.append("%")
            out.append(fmt[pos:pos + prefix_len + 1])
            if not conversion:
                break
        pos += 1
    return "".join(out)


def printf(fmt: str, *args: Any) -> None:
    """Format like :func:`format_message` and write the result to stdout."""
    sys.stdout.write(format_message(fmt, *args))
    sys.stdout.flush()