"""
Nugget Scanner — Finds translation nuggets in a block of text.

Grammar (delimiters are bit-exact):

    "[[[" KEY ( "|||" ARG )* ( "///" COMMENT )? "]]]"

Python's `re` only keeps the last repetition of a quantified capturing
group, so `(?:\\|\\|\\|(.+?))*` cannot report every ARG. Extraction is
done in two stages instead:

1. A coarse non-greedy pattern isolates the whole nugget and captures KEY
   and COMMENT.
2. The raw region between the end of KEY and the start of the comment
   (or the closing `]]]`) is split on the literal `|||` separator.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

__all__ = [
    "NUGGET_OPEN",
    "NUGGET_CLOSE",
    "ARG_SEPARATOR",
    "COMMENT_SEPARATOR",
    "NUGGET_PATTERN",
    "Nugget",
    "iter_nuggets",
    "normalize_key",
    "scan_nuggets",
]

NUGGET_OPEN = "[[["
NUGGET_CLOSE = "]]]"
ARG_SEPARATOR = "|||"
COMMENT_SEPARATOR = "///"

# Any character that does not start a closing "]]]"
_SEGMENT = r"(?:(?!\]\]\]).)+?"

# Stage 1. No segment may run past the first "]]]". The argument group is
# non-capturing: only its span matters, the arguments come from stage 2.
NUGGET_PATTERN = re.compile(
    rf"\[\[\[(?P<key>{_SEGMENT})(?:\|\|\|{_SEGMENT})*(?:///(?P<comment>{_SEGMENT}))?\]\]\]",
    re.DOTALL,
)


@dataclass(frozen=True)
class Nugget:
    """One translatable unit found in a text.

    Attributes:
        raw: Exact substring including delimiters.
        start: Offset of the opening `[[[` in the scanned text.
        end: Offset just past the closing `]]]`.
        text: The KEY segment exactly as written.
        key: `text` with CRLF normalized to LF; used for table lookups.
        format_args: Literal arguments, verbatim and in order.
        comment: Translator comment, if any. Never used for resolution.
    """

    raw: str
    start: int
    end: int
    text: str
    key: str
    format_args: tuple[str, ...] = ()
    comment: str | None = None


def normalize_key(text: str) -> str:
    """Normalize line endings the way gettext catalogs store msgids."""
    return text.replace("\r\n", "\n")


def _split_format_args(region: str) -> tuple[str, ...]:
    """Split the raw argument region (`|||a|||b`) on the literal separator."""
    if not region.startswith(ARG_SEPARATOR):
        return ()
    return tuple(region[len(ARG_SEPARATOR):].split(ARG_SEPARATOR))


def iter_nuggets(text: str) -> Iterator[Nugget]:
    """Yield every nugget in `text`, left to right, without overlaps.

    An unterminated `[[[` is simply not matched; the text around it is
    left for the caller to pass through.
    """
    for match in NUGGET_PATTERN.finditer(text):
        key_text = match.group("key")
        if match.group("comment") is not None:
            # Start of the "///" that introduces the comment
            args_end = match.start("comment") - len(COMMENT_SEPARATOR)
        else:
            args_end = match.end() - len(NUGGET_CLOSE)

        yield Nugget(
            raw=match.group(0),
            start=match.start(),
            end=match.end(),
            text=key_text,
            key=normalize_key(key_text),
            format_args=_split_format_args(text[match.end("key"):args_end]),
            comment=match.group("comment"),
        )


def scan_nuggets(text: str) -> list[Nugget]:
    """Return the ordered list of nuggets found in `text`."""
    return list(iter_nuggets(text))
