"""Free-variable inference for embedded code fragments.

Template authors write bare field names (`price * qty`) instead of qualifying
them with the data record. Every top-level identifier found in the fragments
is therefore aliased from the record before the template body runs, whether
the fragment reads it, assigns it, or both.

This is a lexical filter, not a parser. Known limitations:
- keyword argument names, lambda parameters and comprehension targets are
  aliased too (harmless, they are rebound locally);
- names shadowing a Python built-in are aliased with the built-in as the
  fallback, so `len(xs)` works and a data field named `id` still wins.
"""

from __future__ import annotations

import builtins
import keyword
import re
from typing import Iterable, List

from braces.compiler.spec import BUILTINS, DATA, INTERNAL_NAMES

# String literals (with an optional prefix) and `#` comments
LITERAL = re.compile(
    r"(?P<prefix>\b[rRbBuUfF]{1,2})?"
    r"(?P<string>\"(?:[^\"\\]|\\[\s\S])*\"|'(?:[^'\\]|\\[\s\S])*')"
    r"|#[^\n]*"
)
FORMAT_FIELD = re.compile(r"\{([^{}]*)\}")
MEMBER = re.compile(r"\s*\.\s*[\w.]+")
SPLIT = re.compile(r"\W+")

BUILTIN_NAMES = frozenset(
    name for name in dir(builtins) if not name.startswith("__")
)

# Never aliased: keywords, dunder module attributes and generated names
RESERVED = (
    frozenset(keyword.kwlist)
    | frozenset(name for name in dir(builtins) if name.startswith("__"))
    | INTERNAL_NAMES
)


def strip_literals(code: str) -> str:
    """Blank out comments and string literal contents.

    The replacement fields of f-strings are kept, since they are code.
    """

    def replace(match: re.Match[str]) -> str:
        prefix = match.group("prefix") or ""
        if "f" in prefix.lower():
            fields = FORMAT_FIELD.findall(match.group("string"))
            return " " + " ".join(strip_literals(field) for field in fields) + " "
        return " "

    return LITERAL.sub(replace, code)


def infer_variables(fragments: Iterable[str]) -> List[str]:
    """Return the identifiers to alias from the data record.

    Args:
        fragments: Code fragments in order of appearance.

    Returns:
        Deduplicated names in first-seen order.

    Example:
        >>> infer_variables(["total = price * qty", "user.name", "len(items)"])
        ['total', 'price', 'qty', 'user', 'len', 'items']
    """
    code = strip_literals("\n".join(fragments))
    code = MEMBER.sub("", code)

    names: List[str] = []
    seen: set[str] = set()
    for token in SPLIT.split(code):
        if not token or token in RESERVED or token[0].isdigit():
            continue
        if token not in seen:
            seen.add(token)
            names.append(token)
    return names


def declare(names: Iterable[str]) -> List[str]:
    """Build the prologue lines aliasing each name from the data record.

    Names of built-ins fall back to the built-in when the record lacks them.
    """
    lines = []
    for name in names:
        if name in BUILTIN_NAMES:
            lines.append(f"{name} = {DATA}.get({name!r}, {BUILTINS}.{name})")
        else:
            lines.append(f"{name} = {DATA}.get({name!r})")
    return lines
