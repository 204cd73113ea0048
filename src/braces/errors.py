"""Braces Exceptions

Custom exceptions for the braces template compiler.
"""

from __future__ import annotations

from collections.abc import Sequence


class BracesError(Exception):
    """Base exception for all braces errors."""

    pass


class TemplateCompileError(BracesError):
    """Raised when the generated render function cannot be instantiated.

    The template-level position of the fault is gone by the time the source is
    built, so the full generated source is kept on the exception.
    """

    def __init__(self, message: str, source: str):
        self.source = source
        super().__init__(f"{message}\n\nGenerated source:\n{source}")


class TemplateNotFoundError(BracesError, FileNotFoundError):
    """Raised when a template or partial file cannot be read."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Template not found: {path}")


class TemplateReadError(BracesError):
    """Raised when a template file exists but cannot be read as UTF-8 text."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read template {path}: {reason}")


class PartialCycleError(BracesError):
    """Raised when partial inclusion does not settle within the pass limit."""

    def __init__(self, pending: Sequence[str], passes: int):
        self.pending = list(pending)
        self.passes = passes
        names = ", ".join(self.pending)
        super().__init__(
            f"Partial inclusion did not settle after {passes} passes "
            f"(cycle suspected): {names}"
        )


class ConfigError(BracesError):
    """Raised when an engine configuration file is invalid."""

    pass
