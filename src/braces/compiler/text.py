"""Text normalization and quote escaping for generated string literals."""

import re

HTML_COMMENT = re.compile(r"<!--[\s\S]*?-->")
BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
LINE_COMMENT = re.compile(r"\n\s*//.*")
LEADING_SPACE = re.compile(r"(\r|\n)[\t ]+")
TRAILING_SPACE = re.compile(r"[\t ]+(\r|\n)")
BREAKS = re.compile(r"\r|\n|\t")


def reduce(text: str) -> str:
    """Strip comments, indentation and line breaks from template text.

    Must run after partials and blocks are resolved so their markers survive,
    and before escaping.

    Example:
        >>> reduce("<p>\\n    hi <!-- note -->\\n</p>")
        '<p>hi</p>'
    """
    text = text.strip()
    text = HTML_COMMENT.sub("", text)
    text = BLOCK_COMMENT.sub("", text)
    text = LINE_COMMENT.sub("", text)
    text = LEADING_SPACE.sub("", text)
    text = TRAILING_SPACE.sub("", text)
    return BREAKS.sub("", text)


def escape(text: str) -> str:
    """Escape backslashes and single quotes for a single-quoted literal."""
    return text.replace("\\", "\\\\").replace("'", "\\'")


def unescape(code: str) -> str:
    """Undo single-quote escaping on a code fragment.

    Doubled backslashes are kept as they are.
    """
    return code.replace("\\'", "'")
