"""
Placeholder Formatter — Positional `%N` substitution.
"""

import re
from collections.abc import Sequence

__all__ = ["PLACEHOLDER_PATTERN", "format_placeholders"]

PLACEHOLDER_PATTERN = re.compile(r"%(\d+)")


def format_placeholders(template: str, args: Sequence[str]) -> str:
    """Replace `%0`, `%1`, ... with the matching argument.

    Arguments are inserted verbatim: they are never escaped nor decoded.
    Tokens whose index is out of range stay as literal text.

    Args:
        template: Text containing zero or more `%<digits>` tokens.
        args: Ordered argument strings (0-based).

    Returns:
        The formatted text.

    Example:
        >>> format_placeholders("%0 of %1 (%2)", ["1", "3"])
        '1 of 3 (%2)'
    """
    if not args:
        return template

    def _substitute(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index < len(args):
            return args[index]
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_substitute, template)
