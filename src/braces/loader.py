"""Loader - reads template files and splices partials into them.

Partials are resolved pass by pass: every `{{@ file }}` tag present in the
text is loaded concurrently, all loads are awaited, then the tags are
replaced left to right and the text is scanned again. Nested partials are
therefore resolved one level per pass.

A partial that (directly or through others) includes itself never runs out
of tags, so the number of passes is capped.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from braces.errors import PartialCycleError, TemplateNotFoundError, TemplateReadError
from braces.syntax import PARTIAL

log = logging.getLogger(__name__)

DEFAULT_MAX_INCLUDE_DEPTH = 32


class TextLoader(Protocol):
    """Anything that can read template text by path."""

    async def read_text(self, path: str) -> str: ...


class FileLoader:
    """Reads templates from disk, relative to a root directory."""

    def __init__(self, root: Union[str, Path, None] = None):
        """Initialize loader with optional root directory for relative paths.

        Args:
            root: Base directory for template paths. Defaults to cwd.
        """
        self.root = Path(root) if root is not None else Path.cwd()

    def resolve_path(self, path: str) -> Path:
        """Resolve a template path against the root (absolute paths as-is)."""
        return self.root / path

    async def read_text(self, path: str) -> str:
        """Read a template file as UTF-8 text off the event loop.

        Raises:
            TemplateNotFoundError: If the file does not exist.
            TemplateReadError: If the file cannot be read or is not UTF-8.
        """
        resolved = self.resolve_path(path)
        try:
            return await asyncio.to_thread(resolved.read_text, encoding="utf-8")
        except FileNotFoundError as exc:
            raise TemplateNotFoundError(str(resolved)) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateReadError(str(resolved), str(exc)) from exc


class PartialLoader:
    """Loads template files and resolves their partial-inclusion tags."""

    def __init__(
        self,
        loader: Optional[TextLoader] = None,
        max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
    ):
        self.loader: TextLoader = loader or FileLoader()
        self.max_include_depth = max_include_depth

    async def include(self, path: str) -> str:
        """Load the raw text of one file."""
        return await self.loader.read_text(path)

    async def resolve(self, text: str) -> str:
        """Replace partial tags with file contents until none remain.

        Raises:
            TemplateNotFoundError: If a referenced partial does not exist.
            TemplateReadError: If a referenced partial cannot be read.
            PartialCycleError: If tags remain after `max_include_depth` passes.
        """
        passes = 0
        while True:
            paths = PARTIAL.findall(text)
            if not paths:
                return text
            if passes >= self.max_include_depth:
                raise PartialCycleError(sorted(set(paths)), passes)
            passes += 1
            log.debug("Partial pass %d: %s", passes, ", ".join(paths))

            contents = iter(await asyncio.gather(*(self.include(p) for p in paths)))
            text = PARTIAL.sub(lambda _match: next(contents), text)

    async def load(self, path: str) -> str:
        """Load a template file with all its partials spliced in."""
        return await self.resolve(await self.include(path))
