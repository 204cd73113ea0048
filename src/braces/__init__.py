"""Braces - a compact template compiler.

Templates embed Python in `{{ }}` tags:

    {{= expr }}                       interpolation
    {{? cond }} {{?? cond }} {{?? }} {{? }}   conditionals
    {{~ items:item:index }} {{~ }}    iteration
    {{ stmt }}                        evaluation
    {{< name }} ... {{< }}            block definition
    {{> name }}                       block placeholder
    {{@ file }}                       partial (file templates only)
"""

from braces.compiler import Compiler, Renderer
from braces.config import EngineOptions, load_options
from braces.engine import Engine, compile, get_engine, render
from braces.errors import (
    BracesError,
    ConfigError,
    PartialCycleError,
    TemplateCompileError,
    TemplateNotFoundError,
    TemplateReadError,
)
from braces.loader import FileLoader, PartialLoader
from braces.record import Record

from ._version import __version__

__all__ = [
    "BracesError",
    "Compiler",
    "ConfigError",
    "Engine",
    "EngineOptions",
    "FileLoader",
    "PartialCycleError",
    "PartialLoader",
    "Record",
    "Renderer",
    "TemplateCompileError",
    "TemplateNotFoundError",
    "TemplateReadError",
    "__version__",
    "compile",
    "get_engine",
    "load_options",
    "render",
]
