"""Number and text helpers used by the game and its signal protocol."""

from __future__ import annotations


def decimal_to_binary(decimal: int) -> int:
    """Return ``decimal`` written in base 2, read back as a base-10 number.

    ``5`` becomes ``101``. Zero and negative values give ``0``.
    """
    binary = 0
    weight = 1
    while decimal > 0:
        decimal, bit = divmod(decimal, 2)
        binary += bit * weight
        weight *= 10
    return binary


def binary_to_decimal(binary: int) -> int:
    """Inverse of :func:`decimal_to_binary`.

    Each base-10 digit of ``binary`` is weighted by the matching power of
    two. Zero and negative values give ``0``.
    """
    decimal = 0
    weight = 1
    while binary > 0:
        binary, digit = divmod(binary, 10)
        decimal += digit * weight
        weight *= 2
    return decimal


def parse_int(text: str) -> int:
    """Parse a leading integer from ``text``.

    Any run of ``+`` and ``-`` signs comes first; an odd number of ``-``
    makes the result negative. Parsing stops at the first non-digit and
    text without digits gives ``0``.
    """
    pos = 0
    negatives = 0
    while pos < len(text) and text[pos] in "+-":
        if text[pos] == "-":
            negatives += 1
        pos += 1
    start = pos
    while pos < len(text) and "0" <= text[pos] <= "9":
        pos += 1
    number = int(text[start:pos]) if pos > start else 0
    return -number if negatives % 2 else number


def split_words(text: str, sep: str) -> list[str]:
    """Split ``text`` on runs of ``sep``, dropping empty words."""
    return [word for word in text.split(sep) if word]