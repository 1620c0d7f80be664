"""Blockmark - render block-structured documents as HTML or Markdown.

This package turns a tree of typed content blocks, each optionally carrying
runs of independently styled text, into a markup string using pluggable
render functions per block type and per inline style.

Key features:
- Minimal nesting of inline styles (longest style span is wrapped first)
- Sibling and parent aware block rendering (list grouping, table headers)
- HTML and Markdown defaults, overridable per block type or style kind
- Front matter from document properties, as YAML or JSON

Example:
    >>> from blockmark import ContentNode, RendererBuilder, StyledRun
    >>> renderer = RendererBuilder(flavor="markdown").build()
    >>> node = ContentNode(type="paragraph", runs=[StyledRun(text="Hi", styles={"bold": True})])
    >>> renderer.render([node])
    '\\n**Hi**\\n'
"""

__version__ = "0.1.0"

from blockmark.builder import Renderer, RendererBuilder
from blockmark.models.document import ContentNode, Document, RichText, StyledRun
from blockmark.render import BlockContext, Registries, render_block, render_blocks, render_inline

__all__ = [
    "BlockContext",
    "ContentNode",
    "Document",
    "Registries",
    "Renderer",
    "RendererBuilder",
    "RichText",
    "StyledRun",
    "render_block",
    "render_blocks",
    "render_inline",
]
