"""Tag compiler - rewrites template tags into instructions.

The passes run in a fixed order, each over the whole text before the next
begins:

1. interpolation  {{= expr }}
2. conditional    {{? cond }} {{?? cond }} {{?? }} {{? }}
3. iterative      {{~ items:item:index }} {{~ }}
4. evaluation     {{ stmt }}

Generic evaluation matches almost any brace content, so it always runs last
and only sees tags the specific families did not claim.
"""

from __future__ import annotations

import re
from typing import List

from braces import syntax
from braces.compiler import spec
from braces.compiler.spec import Instruction, TagProgram
from braces.compiler.text import unescape

MARKER_PATTERN = re.compile(r"\x00(\d+)\x00")


class TagCompiler:
    """Runs the tag passes over normalized, escaped template text."""

    def __init__(self) -> None:
        self.instructions: List[Instruction] = []

    def compile(self, text: str) -> TagProgram:
        """Rewrite every tag in `text` and collect its instructions.

        Args:
            text: Normalized and escaped template text.

        Returns:
            TagProgram with the marked text, the instructions and the code
            fragments in order of appearance.
        """
        self.instructions = []

        text = syntax.INTERPOLATE.sub(self._interpolate, text)
        text = syntax.CONDITIONAL.sub(self._conditional, text)
        text = syntax.ITERATIVE.sub(self._iterative, text)
        text = syntax.EVALUATE.sub(self._evaluate, text)

        fragments = [
            self.instructions[int(index)].code
            for index in MARKER_PATTERN.findall(text)
            if self.instructions[int(index)].code
        ]
        return TagProgram(
            text=text, instructions=self.instructions, fragments=fragments
        )

    def _emit(self, instruction: Instruction) -> str:
        self.instructions.append(instruction)
        return spec.MARKER.format(len(self.instructions) - 1)

    def _interpolate(self, match: re.Match[str]) -> str:
        code = unescape(match.group(1)).strip()
        return self._emit(Instruction(spec.INTERPOLATE, code))

    def _conditional(self, match: re.Match[str]) -> str:
        else_case, code = match.group(1), match.group(2)
        if not code:
            return self._emit(Instruction(spec.ELSE if else_case else spec.END_IF))
        kind = spec.ELIF if else_case else spec.IF
        return self._emit(Instruction(kind, unescape(code)))

    def _iterative(self, match: re.Match[str]) -> str:
        items, value, index = match.group(1), match.group(2), match.group(3)
        if not items:
            return self._emit(Instruction(spec.END_EACH))
        return self._emit(
            Instruction(spec.EACH, unescape(items).strip(), value=value, index=index)
        )

    def _evaluate(self, match: re.Match[str]) -> str:
        code = unescape(match.group(1)).strip()
        return self._emit(Instruction(spec.EVALUATE, code))


def compile_tags(text: str) -> TagProgram:
    """Run the tag passes over `text` with a fresh TagCompiler."""
    return TagCompiler().compile(text)


def split_program(program: TagProgram) -> List[str | Instruction]:
    """Split the marked text into literal segments and instructions, in order.

    Empty literal segments are dropped.
    """
    parts = MARKER_PATTERN.split(program.text)
    result: List[str | Instruction] = []
    for position, part in enumerate(parts):
        if position % 2:
            result.append(program.instructions[int(part)])
        elif part:
            result.append(part)
    return result

