"""Compiler - turns template text into a Renderer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from braces.compiler.blocks import resolve_blocks
from braces.compiler.builder import FunctionBuilder, instantiate
from braces.compiler.renderer import Renderer
from braces.compiler.spec import GeneratedSource
from braces.compiler.tags import TagCompiler
from braces.compiler.text import escape, reduce
from braces.compiler.variables import infer_variables

log = logging.getLogger(__name__)


class Compiler:
    """Compiles template text to Renderers.

    Pipeline:
    1. Resolve named blocks
    2. Normalize (comments, indentation, line breaks)
    3. Escape quotes for the generated string literals
    4. Run the tag passes and collect code fragments
    5. Infer the free variables aliased from the data record
    6. Generate and instantiate the render function

    Partials are not handled here; file-based templates arrive with their
    partials already spliced in by the loader.
    """

    def __init__(self, defaults: Optional[Mapping[str, Any]] = None):
        """Initialize compiler with the global defaults renderers merge under data.

        Args:
            defaults: Mapping read on every render (not copied).
        """
        self.defaults: Mapping[str, Any] = defaults if defaults is not None else {}

    def generate(self, text: str) -> GeneratedSource:
        """Generate the render function source for `text` without running it.

        Args:
            text: Template text with partials already resolved.

        Returns:
            GeneratedSource with the source, inferred variables and any
            unbalanced-tag problems.
        """
        text = escape(reduce(resolve_blocks(text)))
        program = TagCompiler().compile(text)
        variables = infer_variables(program.fragments)
        log.debug("Template variables: %s", ", ".join(variables) or "(none)")

        builder = FunctionBuilder()
        source = builder.build(program, variables)
        return GeneratedSource(
            source=source, variables=variables, problems=builder.problems
        )

    def compile(self, text: str) -> Renderer:
        """Compile template text into a Renderer.

        Raises:
            TemplateCompileError: If the generated source cannot be
                instantiated; the error carries the full source.
        """
        generated = self.generate(text)
        function = instantiate(generated.source, generated.problems)
        return Renderer(
            function,
            source=generated.source,
            variables=generated.variables,
            defaults=self.defaults,
        )

    def render(self, text: str, data: Optional[Any] = None) -> str:
        """Compile and render in one step, without caching."""
        return self.compile(text)(data)
