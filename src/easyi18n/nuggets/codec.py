"""
Escape Codec — Reversible transform between display text and text that is
safe to splice into a quoted string literal of the output asset.

Some transpilers and minifiers emit non-ASCII characters as escapes
(`don\\u2019t` instead of `don’t`). If a translation carrying such an escape
went straight through `escape_for_embedding`, the backslash would be doubled
and the final asset would show a literal `\\u2019`. Decoding first restores
the real character, which is not one of the guarded characters and is
therefore left alone.
"""

__all__ = [
    "decode_literal_escapes",
    "escape_for_embedding",
    "escape_translation",
]

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Escape introducer -> number of hex digits that follow it
_ESCAPE_WIDTHS = {
    "u": 4,
    "x": 2,
}


def _read_hex(value: str, start: int, width: int) -> int | None:
    digits = value[start:start + width]
    if len(digits) != width or not all(c in _HEX_DIGITS for c in digits):
        return None
    return int(digits, 16)


def decode_literal_escapes(value: str) -> str:
    """Decode `\\uXXXX` and `\\xXX` sequences into real characters.

    Only those two forms are decoded. A backslash immediately preceded by
    another backslash never starts an escape: `\\\\u2019` means the author
    wanted the sequence itself to stay visible. Every other backslash is
    kept as is.

    Args:
        value: Text possibly containing literal escape sequences.

    Returns:
        The text with the recognized sequences decoded.
    """
    out: list[str] = []
    i = 0
    length = len(value)
    while i < length:
        ch = value[i]
        if ch != "\\" or (i > 0 and value[i - 1] == "\\"):
            out.append(ch)
            i += 1
            continue

        kind = value[i + 1] if i + 1 < length else ""
        width = _ESCAPE_WIDTHS.get(kind)
        code = _read_hex(value, i + 2, width) if width else None
        if code is None:
            out.append(ch)
            i += 1
            continue

        i += 2 + width
        # A high/low surrogate pair is a single character in Python
        if 0xD800 <= code <= 0xDBFF and value[i:i + 2] == "\\u":
            low = _read_hex(value, i + 2, 4)
            if low is not None and 0xDC00 <= low <= 0xDFFF:
                code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                i += 6
        out.append(chr(code))

    return "".join(out)


def escape_for_embedding(value: str) -> str:
    """Escape backslashes, single quotes and double quotes.

    Backslashes go first, otherwise the backslashes added for the quotes
    would be doubled as well.
    """
    return (
        value
        .replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace('"', '\\"')
    )


def escape_translation(value: str) -> str:
    """Prepare a resolved translation for splicing: decode, then escape."""
    return escape_for_embedding(decode_literal_escapes(value))
