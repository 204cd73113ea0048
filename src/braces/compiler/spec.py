"""Compiler IR spec - tag instructions produced by the tag passes."""

from dataclasses import dataclass, field
from typing import List, Optional

# Instruction kinds
INTERPOLATE = "interpolate"
IF = "if"
ELIF = "elif"
ELSE = "else"
END_IF = "end_if"
EACH = "each"
END_EACH = "end_each"
EVALUATE = "evaluate"

# Marker left in the rewritten text in place of a compiled tag
MARKER = "\x00{}\x00"

# Names used by the generated render function itself
DATA = "__data"
OUT = "__out"
EMIT = "__emit"
TO_STR = "__str"
BUILTINS = "__builtins"
INTERNAL_NAMES = frozenset({DATA, OUT, EMIT, TO_STR, BUILTINS})


@dataclass
class Instruction:
    """A single compiled tag."""

    kind: str  # one of the kinds above
    code: str = ""  # unescaped expression or statement, empty for closers
    value: Optional[str] = None  # loop value name (each only)
    index: Optional[str] = None  # loop index name (each only)


@dataclass
class TagProgram:
    """Result of the tag passes.

    `text` is the escaped template text with each tag replaced by a marker
    pointing into `instructions`.
    """

    text: str
    instructions: List[Instruction] = field(default_factory=list)
    fragments: List[str] = field(
        default_factory=list
    )  # code fragments in order of first occurrence in `text`


@dataclass
class GeneratedSource:
    """Python source generated for one template, before instantiation."""

    source: str
    variables: List[str] = field(default_factory=list)  # aliased data fields
    problems: List[str] = field(default_factory=list)  # unbalanced tag reports
