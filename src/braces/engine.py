"""Engine - public surface of the template compiler.

An Engine owns its options, its global attributes and its cache of compiled
file templates:

    engine = Engine()
    engine.set_root("templates")
    engine.set_globals({"site": "example.org"})

    engine.render("Hello {{= name }}", {"name": "Ann"})
    await engine.view("index.html", {"items": [1, 2, 3]})
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from braces.compiler import Compiler, Renderer
from braces.config import EngineOptions
from braces.loader import FileLoader, PartialLoader, TextLoader

log = logging.getLogger(__name__)


class Engine:
    """Compiles, renders and caches templates.

    The cache is keyed by file path and never invalidated on its own; call
    `reset()` to drop it. Concurrent first views of the same path may each
    compile; the last one stored wins, which only wastes work.
    """

    def __init__(
        self,
        options: Optional[EngineOptions] = None,
        loader: Optional[TextLoader] = None,
    ):
        self.options = EngineOptions()
        self.globals: Dict[str, Any] = {}
        self.cache: Dict[str, Renderer] = {}
        self._custom_loader = loader
        self.compiler = Compiler(self.globals)
        self.partials = self._make_partial_loader()
        if options is not None:
            self.init(options)

    def _make_partial_loader(self) -> PartialLoader:
        loader = self._custom_loader or FileLoader(self.options.root)
        return PartialLoader(loader, self.options.max_include_depth)

    def init(self, options: EngineOptions) -> None:
        """Apply engine options: root, global imports and include depth."""
        self.options = options.model_copy()
        self.set_globals(self.options.imports)
        self.partials = self._make_partial_loader()
        log.info("Template root: %s", self.options.root)

    def set_root(self, root: Union[str, Path]) -> None:
        """Set the directory that template and partial paths are relative to."""
        self.options.root = Path(root)
        self.partials = self._make_partial_loader()
        log.info("Template root: %s", self.options.root)

    def set_globals(self, attributes: Mapping[str, Any]) -> None:
        """Replace the global attributes merged under every render's data.

        Updated in place, so renderers compiled earlier see the new values.
        Meant for setup; changing globals while renders run is unsynchronized.
        """
        self.globals.clear()
        self.globals.update(attributes)

    def reset(self) -> None:
        """Drop every cached renderer."""
        self.cache.clear()

    def compile(self, text: str) -> Renderer:
        """Compile template text into a Renderer (not cached)."""
        return self.compiler.compile(text)

    def render(self, text: str, data: Optional[Any] = None) -> str:
        """Render template text with data; always recompiles."""
        return self.compile(text)(data)

    async def load(self, path: str) -> str:
        """Load a template file with its partials resolved."""
        return await self.partials.load(path)

    async def view(self, path: str, data: Optional[Any] = None) -> str:
        """Render a template file, compiling it on first use.

        Raises:
            TemplateNotFoundError: If the file or one of its partials is missing.
            TemplateReadError: If a file exists but cannot be read as UTF-8.
            PartialCycleError: If partial inclusion does not settle.
            TemplateCompileError: If the generated source is invalid.
        """
        renderer = self.cache.get(path)
        if renderer is None:
            log.debug("Template cache miss: %s", path)
            renderer = self.compile(await self.load(path))
            self.cache[path] = renderer
        else:
            log.debug("Template cache hit: %s", path)
        return renderer(data)


_default_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Return the process-wide default engine, creating it on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = Engine()
    return _default_engine


def compile(text: str) -> Renderer:
    """Compile template text with the default engine."""
    return get_engine().compile(text)


def render(text: str, data: Optional[Any] = None) -> str:
    """Render template text with the default engine."""
    return get_engine().render(text, data)
