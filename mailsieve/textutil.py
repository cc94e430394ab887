"""Small string helpers with C library semantics: strtol, strpbrk, strlcpy, strlcat."""

from __future__ import annotations

__all__ = ["strtol", "strpbrk", "strlcpy", "strlcat"]

_WHITESPACE = " \t\n\v\f\r"


def _digit_value(c: str) -> int | None:
    if "0" <= c <= "9":
        return ord(c) - ord("0")
    if "A" <= c <= "Z":
        return ord(c) - ord("A") + 10
    if "a" <= c <= "z":
        return ord(c) - ord("a") + 10
    return None


def strtol(text: str, base: int = 0) -> tuple[int, int]:
    """Parse a leading integer from ``text``.

    Returns ``(value, end)`` where ``end`` is the index just past the digits
    consumed.  When no digits were found ``end`` is 0, or the index just past
    a lone leading zero.  A ``base`` of 0 selects hexadecimal for a ``0x``
    prefix, octal for a leading zero and decimal otherwise.  There is no
    range checking.  A base outside 0..35 raises ValueError.
    """
    if base < 0 or base >= 36:
        raise ValueError(f"invalid base {base}")
    n = len(text)
    pos = 0
    while pos < n and text[pos] in _WHITESPACE:
        pos += 1
    negative = False
    if pos < n and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1
    fallback = 0
    if pos < n and text[pos] == "0":
        pos += 1
        fallback = pos
        if pos < n and text[pos] in "xX":
            if base not in (0, 16):
                return 0, fallback
            base = 16
            pos += 1
        elif base == 0:
            base = 8
    elif base == 0:
        base = 10
    result = 0
    found = False
    while pos < n:
        digit = _digit_value(text[pos])
        if digit is None or digit >= base:
            break
        result = result * base + digit
        found = True
        pos += 1
    value = -result if negative else result
    return value, (pos if found else fallback)


def strpbrk(text: str, chars: str) -> int | None:
    """Return the index of the first character of ``text`` found in ``chars``."""
    wanted = set(chars)
    return next((index for index, c in enumerate(text) if c in wanted), None)


def strlcpy(src: str, size: int) -> tuple[str, int]:
    """Copy ``src`` into a buffer of ``size`` slots (one kept for the terminator).

    Returns the copied text and the length of ``src``.
    """
    if size <= 0:
        return "", len(src)
    copied = src[: size - 1]
    return copied, len(copied) + len(src) - len(copied)


def strlcat(dst: str, src: str, size: int) -> tuple[str, int]:
    """Append ``src`` to ``dst`` within a buffer of ``size`` slots.

    ``dst`` itself is cut down to the buffer when it does not fit.  Returns
    the resulting text and its length plus the length of what of ``src``
    could not be copied.
    """
    if size <= 0:
        return dst, len(src)
    room = size - 1
    kept = dst[:room]
    room -= len(kept)
    appended = src[:room]
    result = kept + appended
    return result, len(result) + len(src) - len(appended)