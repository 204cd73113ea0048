"""Braces Compiler - transforms template text into Python render functions."""

from braces.compiler.compiler import Compiler
from braces.compiler.renderer import Renderer
from braces.compiler.spec import GeneratedSource, Instruction, TagProgram

__all__ = ["Compiler", "Renderer", "GeneratedSource", "Instruction", "TagProgram"]
