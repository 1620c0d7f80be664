"""Renderer configuration: a mutable builder finalized into a frozen renderer.

The builder only has setters. Calling build() validates the configuration
and produces a Renderer, which only renders. A renderer never changes after
it is built; configure a new builder to get a different one.

Example:
    >>> renderer = (
    ...     RendererBuilder(flavor="markdown")
    ...     .set_block_renderer("divider", lambda content, body, context: "\\n***\\n")
    ...     .import_property("Title", "title")
    ...     .build()
    ... )
    >>> renderer.render_document(document)
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from blockmark.errors import ConfigurationError, MissingRendererError
from blockmark.front_matter import (
    DATA_FORMATTERS,
    DataFormatter,
    SchemaEntry,
    build_front_matter,
    format_yaml,
    validate_schema,
)
from blockmark.models.config import RenderConfig
from blockmark.models.document import ContentNode, Document
from blockmark.render.blocks import render_blocks
from blockmark.render.context import BlockContext
from blockmark.render.registry import FLAVORS, Registries
from blockmark.utils.logging import get_logger


logger = get_logger(__name__)

Plugin = Callable[["RendererBuilder"], Any]


class RendererBuilder:
    """Collects render configuration and builds a Renderer from it."""

    def __init__(self, flavor: str = "html"):
        self._flavor = "html"
        self._styles: dict[str, Callable] = {}
        self._blocks: dict[str, Callable] = {}
        self._extractors: dict[str, Callable] = {}
        self._schema: list[SchemaEntry] = []
        self._data_formatter: DataFormatter = format_yaml
        self._skip_unsupported = False
        self.set_flavor(flavor)

    @classmethod
    def from_config(cls, config: RenderConfig) -> "RendererBuilder":
        """
        Create a builder preconfigured from a RenderConfig.

        Args:
            config: Validated render configuration

        Returns:
            Builder with flavor, front matter and properties applied
        """
        builder = cls(flavor=config.flavor)
        builder.set_data_formatter(config.front_matter)
        builder.skip_unsupported(config.skip_unsupported)
        for prop in config.properties:
            builder.import_property(prop.name, list(prop.path))
        return builder

    def use(self, plugin: Plugin) -> "RendererBuilder":
        """Apply a plugin: a function that configures this builder."""
        if not callable(plugin):
            raise ConfigurationError("A plugin must be a function receiving the builder")
        plugin(self)
        return self

    def set_flavor(self, flavor: str) -> "RendererBuilder":
        """Select the default render functions (html or markdown)."""
        if flavor not in FLAVORS:
            raise ConfigurationError(
                f"Unknown flavor '{flavor}'. Expected one of: {', '.join(FLAVORS)}"
            )
        self._flavor = flavor
        return self

    def set_style_renderer(self, kind: str, render: Callable[[str, Optional[str]], str]) -> "RendererBuilder":
        """Register or replace the render function of an inline style kind."""
        self._styles[_key(kind, "style kind")] = _callable(render, kind)
        return self

    def set_block_renderer(self, block_type: str, render: Callable[[str, str, BlockContext], str]) -> "RendererBuilder":
        """Register or replace the render function of a block type."""
        self._blocks[_key(block_type, "block type")] = _callable(render, block_type)
        return self

    def set_field_extractor(self, block_type: str, extractor: Callable) -> "RendererBuilder":
        """Register or replace the field extractor of a block type."""
        self._extractors[_key(block_type, "block type")] = _callable(extractor, block_type)
        return self

    def set_data_formatter(self, formatter: str | DataFormatter) -> "RendererBuilder":
        """Set the front matter formatter, by name (json, yaml, none) or function."""
        if isinstance(formatter, str):
            if formatter not in DATA_FORMATTERS:
                raise ConfigurationError(
                    f"Unknown front matter format '{formatter}'. "
                    f"Expected one of: {', '.join(DATA_FORMATTERS)}"
                )
            formatter = DATA_FORMATTERS[formatter]
        self._data_formatter = _callable(formatter, "front matter")
        return self

    def import_property(self, name: str, rename: Optional[str | Sequence[str]] = None) -> "RendererBuilder":
        """Include a document property in the front matter.

        Args:
            name: Name of the document property
            rename: Front matter key, or sequence of keys for a nested
                location (defaults to the property name)
        """
        if not isinstance(name, str) or not name:
            raise ConfigurationError("The property name must be a non-empty string")
        if rename is None:
            path = (name,)
        elif isinstance(rename, str):
            path = (rename,)
        else:
            path = tuple(rename)
        self._schema.append((name, path))
        return self

    def skip_unsupported(self, enabled: bool = True) -> "RendererBuilder":
        """Omit blocks without a renderer (with a warning) instead of failing."""
        self._skip_unsupported = bool(enabled)
        return self

    def build(self) -> "Renderer":
        """
        Validate the configuration and create a Renderer.

        Returns:
            Frozen Renderer

        Raises:
            ConfigurationError: If the front matter schema is invalid
        """
        schema = tuple(self._schema)
        validate_schema(schema)

        registries = Registries.for_flavor(
            self._flavor,
            inline=self._styles,
            block=self._blocks,
            extractors=self._extractors,
        )

        logger.info(
            "renderer_built",
            flavor=self._flavor,
            style_overrides=sorted(self._styles),
            block_overrides=sorted(self._blocks),
            properties=len(schema),
        )

        return Renderer(
            flavor=self._flavor,
            registries=registries,
            schema=schema,
            data_formatter=self._data_formatter,
            skip_unsupported=self._skip_unsupported,
        )


@dataclass(frozen=True)
class Renderer:
    """Renders block trees and documents with a fixed configuration."""

    flavor: str
    registries: Registries
    schema: tuple[SchemaEntry, ...] = ()
    data_formatter: DataFormatter = format_yaml
    skip_unsupported: bool = False

    def render(self, nodes: Sequence[ContentNode]) -> str:
        """Render a list of sibling blocks."""
        on_missing = _omit_block if self.skip_unsupported else None
        return render_blocks(nodes, self.registries, on_missing=on_missing)

    def front_matter(self, document: Document) -> Mapping[str, Any]:
        """Build the document's front matter from the property schema."""
        return build_front_matter(document.properties, self.schema)

    def render_document(self, document: Document) -> str:
        """
        Render a document: formatted front matter followed by its content.

        Front matter is omitted when no properties are imported.

        Args:
            document: Document to render

        Returns:
            Rendered output
        """
        header = ""
        if self.schema:
            header = self.data_formatter(self.front_matter(document))

        content = self.render(document.blocks)

        logger.info(
            "document_rendered",
            flavor=self.flavor,
            blocks=len(document.blocks),
            length=len(header) + len(content),
        )
        return header + content


def _omit_block(error: MissingRendererError, context: BlockContext) -> str:
    logger.warning("block_omitted", block_type=error.name, depth=context.depth, index=context.index)
    return ""


def _key(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"The {what} must be a non-empty string, got {value!r}")
    return value


def _callable(value: Any, name: str) -> Callable:
    if not callable(value):
        raise ConfigurationError(f"The renderer for '{name}' must be callable")
    return value
