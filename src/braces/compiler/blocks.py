"""Block resolver - named block definitions and their placeholders."""

from __future__ import annotations

import logging
import re

from braces.syntax import BLOCK_DEFINE, BLOCK_HOLDER

log = logging.getLogger(__name__)


def collect_blocks(text: str) -> tuple[str, dict[str, str]]:
    """Remove every block definition from `text` and record its body.

    A name defined twice keeps its last body.

    Returns:
        The text without definitions, and the name -> body map.
    """
    blocks: dict[str, str] = {}

    def define(match: re.Match[str]) -> str:
        name, body = match.group(1), match.group(2)
        if name in blocks:
            log.debug("Block %r redefined, keeping the last definition", name)
        blocks[name] = body
        return ""

    return BLOCK_DEFINE.sub(define, text), blocks


def fill_blocks(text: str, blocks: dict[str, str]) -> str:
    """Replace block placeholders with their bodies, or nothing if undefined."""

    def hold(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in blocks:
            log.debug("Block %r is not defined, rendering it empty", name)
        return blocks.get(name, "")

    return BLOCK_HOLDER.sub(hold, text)


def resolve_blocks(text: str) -> str:
    """Resolve blocks in two passes so placeholders may precede definitions."""
    text, blocks = collect_blocks(text)
    return fill_blocks(text, blocks)
