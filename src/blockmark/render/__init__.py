"""Rendering engine: inline run merging and block tree formatting."""

from blockmark.render.blocks import render_block, render_blocks
from blockmark.render.context import BlockContext, build_contexts
from blockmark.render.inline import render_inline
from blockmark.render.registry import (
    BlockRegistry,
    BlockType,
    ExtractorRegistry,
    Registries,
    StyleKind,
    StyleRegistry,
    block_registry,
    extractor_registry,
    merge,
    style_registry,
)

__all__ = [
    "BlockContext",
    "BlockRegistry",
    "BlockType",
    "ExtractorRegistry",
    "Registries",
    "StyleKind",
    "StyleRegistry",
    "block_registry",
    "build_contexts",
    "extractor_registry",
    "merge",
    "render_block",
    "render_blocks",
    "render_inline",
    "style_registry",
]
