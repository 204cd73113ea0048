"""Code builder - turns a TagProgram into the source of a render function."""

from __future__ import annotations

import builtins
from typing import Any, Callable, Dict, List, Optional, Union

from braces.compiler import spec
from braces.compiler.spec import Instruction, TagProgram
from braces.compiler.tags import split_program
from braces.compiler.variables import declare
from braces.errors import TemplateCompileError

FUNCTION_NAME = "render_template"


class CodeBuilder:
    """Build source code conveniently."""

    INDENT_STEP = 4

    def __init__(self, indent: int = 0):
        self.code: List[Union[str, "CodeBuilder"]] = []
        self.indent_level = indent

    def __str__(self) -> str:
        return "".join(str(c) for c in self.code)

    def add_line(self, line: str) -> None:
        """Add a line of source to the code.

        Indentation and newline will be added for you, don't provide them.
        """
        self.code.extend([" " * self.indent_level, line, "\n"])

    def add_section(self) -> "CodeBuilder":
        """Add a section, a sub-CodeBuilder."""
        section = CodeBuilder(self.indent_level)
        self.code.append(section)
        return section

    def indent(self) -> None:
        """Increase the current indent for following lines."""
        self.indent_level += self.INDENT_STEP

    def dedent(self) -> None:
        """Decrease the current indent for following lines."""
        self.indent_level -= self.INDENT_STEP


class FunctionBuilder:
    """Emits the body of a render function from template instructions.

    Blocks opened by conditional and iterative tags are tracked on a stack.
    Closing tags that do not match are recorded as problems rather than
    raised, so the failure is reported together with the whole generated
    source when the function is instantiated.
    """

    def __init__(self) -> None:
        self.code = CodeBuilder()
        self.blocks: List[str] = []
        self.problems: List[str] = []

    def build(self, program: TagProgram, variables: List[str]) -> str:
        """Generate the render function source.

        Args:
            program: Output of the tag passes.
            variables: Names to alias from the data record.

        Returns:
            Python source defining `render_template(__data, __str)`.
        """
        code = self.code
        code.add_line(f"def {FUNCTION_NAME}({spec.DATA}, {spec.TO_STR}):")
        code.indent()
        prologue = code.add_section()
        for line in declare(variables):
            prologue.add_line(line)
        code.add_line(f"{spec.OUT} = []")
        code.add_line(f"{spec.EMIT} = {spec.OUT}.append")

        for part in split_program(program):
            if isinstance(part, Instruction):
                self._instruction(part)
            else:
                code.add_line(f"{spec.EMIT}('{part}')")

        for kind in reversed(self.blocks):
            self.problems.append(f"unclosed {kind} block")
        code.add_line(f"return ''.join({spec.OUT})")
        code.dedent()
        return str(code)

    def _open(self, kind: str, line: str) -> None:
        self.code.add_line(line)
        self.code.indent()
        self.code.add_line("pass")
        self.blocks.append(kind)

    def _close(self, kind: str) -> bool:
        if not self.blocks:
            self.problems.append(f"closing {kind} tag without an open block")
            return False
        if self.blocks[-1] != kind:
            self.problems.append(
                f"closing {kind} tag inside an open {self.blocks[-1]} block"
            )
        self.blocks.pop()
        self.code.dedent()
        return True

    def _instruction(self, ins: Instruction) -> None:
        code = self.code
        if ins.kind == spec.INTERPOLATE:
            code.add_line(f"{spec.EMIT}({spec.TO_STR}(({ins.code})))")
        elif ins.kind == spec.IF:
            self._open(spec.IF, f"if {ins.code}:")
        elif ins.kind in (spec.ELIF, spec.ELSE):
            if self._close(spec.IF):
                line = f"elif {ins.code}:" if ins.kind == spec.ELIF else "else:"
                self._open(spec.IF, line)
        elif ins.kind == spec.END_IF:
            self._close(spec.IF)
        elif ins.kind == spec.EACH:
            self._open(spec.EACH, f"if {ins.code}:")
            if ins.index:
                code.add_line(f"{ins.index} = -1")
            code.add_line(f"for {ins.value} in {ins.code}:")
            code.indent()
            if ins.index:
                code.add_line(f"{ins.index} += 1")
            else:
                code.add_line("pass")
        elif ins.kind == spec.END_EACH:
            if self._close(spec.EACH):
                code.dedent()
        elif ins.kind == spec.EVALUATE:
            if ins.code:
                code.add_line(ins.code)
        else:
            raise ValueError(f"Unknown instruction kind: {ins.kind}")


def to_str(value: Any) -> str:
    """Convert an interpolated value to output text; None renders empty."""
    if value is None:
        return ""
    return str(value)


def instantiate(
    source: str,
    problems: Optional[List[str]] = None,
    namespace: Optional[Dict[str, Any]] = None,
) -> Callable[..., str]:
    """Execute generated source and return the render function it defines.

    Raises:
        TemplateCompileError: If the blocks are unbalanced or the source does
            not compile. The full source is attached to the error.
    """
    if problems:
        raise TemplateCompileError(
            "Unbalanced template tags: " + "; ".join(problems), source
        )

    global_namespace: Dict[str, Any] = {spec.BUILTINS: builtins}
    global_namespace.update(namespace or {})
    try:
        code = compile(source, "<template>", "exec")
    except SyntaxError as e:
        raise TemplateCompileError(f"Invalid template code: {e}", source) from e
    exec(code, global_namespace)
    return global_namespace[FUNCTION_NAME]
