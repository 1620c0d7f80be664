"""Registries mapping block types and style kinds to render functions.

A registry is an immutable mapping from a tag to a callable. Registries are
built by merging a flavor's defaults with user overrides; overrides replace
defaults with the same key and every other default is kept.

Looking up a tag that has no entry raises MissingRendererError naming the
tag. There is no silent fallback.
"""

from collections.abc import Callable, Iterator, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

from blockmark.errors import ConfigurationError, MalformedOverrideError, MissingRendererError

if TYPE_CHECKING:
    from blockmark.render.context import BlockContext, FieldExtractor


StyleRenderFn = Callable[[str, Optional[str]], str]
BlockRenderFn = Callable[[str, str, "BlockContext"], str]


class StyleKind(str, Enum):
    """Inline style kinds with built-in support."""

    LINK = "link"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    UNDERLINE = "underline"
    CODE = "code"
    COLOR = "color"

    def __str__(self) -> str:
        return self.value


# Kinds whose annotation carries a value rather than plain presence
VALUE_STYLES = frozenset({StyleKind.LINK.value, StyleKind.COLOR.value})


class BlockType(str, Enum):
    """Block types with built-in field extractors or render functions."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    QUOTE = "quote"
    SYNCED = "synced"
    CODE = "code"
    CALLOUT = "callout"
    DIVIDER = "divider"
    TABLE = "table"
    TABLE_ROW = "table_row"
    IMAGE = "image"
    VIDEO = "video"
    PDF = "pdf"
    FILE = "file"
    EMBED = "embed"
    BOOKMARK = "bookmark"
    LINK_PREVIEW = "link_preview"
    EQUATION = "equation"
    CHILD_PAGE = "child_page"
    CHILD_DATABASE = "child_database"

    def __str__(self) -> str:
        return self.value


class Registry(Mapping):
    """Immutable mapping from a tag to a render function.

    Keys are normalized to plain strings, so built-in enum members and
    user-defined strings address the same entries.
    """

    name = "render"

    def __init__(self, entries: Optional[Mapping[str, Callable]] = None):
        self._entries: dict[str, Callable] = {}
        for key, fn in (entries or {}).items():
            self._entries[_tag(key)] = fn

    def __getitem__(self, key: str) -> Callable:
        try:
            return self._entries[_tag(key)]
        except KeyError:
            raise MissingRendererError(self.name, _tag(key)) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _tag(key) in self._entries

    def get(self, key: str, default: Any = None) -> Any:
        return self._entries.get(_tag(key), default)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self._entries)!r})"

    def merge(self, overrides: Any) -> "Registry":
        """Return a new registry of the same kind with overrides applied."""
        return merge(self, overrides)


class StyleRegistry(Registry):
    """Maps style kinds to (content, value) -> str functions."""

    name = "style"


class BlockRegistry(Registry):
    """Maps block types to (content, body, context) -> str functions."""

    name = "block"


class ExtractorRegistry(Registry):
    """Maps block types to field extractors.

    Unlike the other registries, a type without an extractor is normal;
    callers use get() and fall back to an empty field map.
    """

    name = "field extractor"


def merge(defaults: Registry, overrides: Any) -> Registry:
    """Merge user overrides into a registry of defaults.

    Args:
        defaults: Registry with the default entries
        overrides: Mapping of tag to callable, or None for no overrides

    Returns:
        A new registry of the same class as ``defaults``

    Raises:
        MalformedOverrideError: If overrides is not a mapping, or holds
            entries that are not callable

    Examples:
        >>> styles = merge(style_registry("html"), {"bold": lambda c, v: f"<b>{c}</b>"})
        >>> styles["bold"]("x", None)
        '<b>x</b>'
    """
    if overrides is None:
        return type(defaults)(defaults)
    if not isinstance(overrides, Mapping):
        raise MalformedOverrideError(defaults.name, overrides)

    for key, fn in overrides.items():
        if not isinstance(key, str) or not key:
            raise MalformedOverrideError(
                defaults.name, overrides,
                f"The {defaults.name} overrides must be keyed by non-empty strings, got {key!r}",
            )
        if not callable(fn):
            raise MalformedOverrideError(
                defaults.name, overrides,
                f"The {defaults.name} override for '{key}' must be callable",
            )

    entries = dict(defaults)
    entries.update({_tag(key): fn for key, fn in overrides.items()})
    return type(defaults)(entries)


def style_registry(flavor: str, overrides: Any = None) -> StyleRegistry:
    """Build the style registry for a flavor, with optional overrides."""
    styles, _ = _flavor_defaults(flavor)
    return merge(StyleRegistry(styles), overrides)


def block_registry(flavor: str, overrides: Any = None) -> BlockRegistry:
    """Build the block registry for a flavor, with optional overrides."""
    _, blocks = _flavor_defaults(flavor)
    return merge(BlockRegistry(blocks), overrides)


def extractor_registry(overrides: Any = None) -> ExtractorRegistry:
    """Build the field extractor registry, with optional overrides."""
    from blockmark.render.context import DEFAULT_EXTRACTORS

    return merge(ExtractorRegistry(DEFAULT_EXTRACTORS), overrides)


class Registries(NamedTuple):
    """The registries used for one render."""

    inline: StyleRegistry
    block: BlockRegistry
    extractors: ExtractorRegistry

    @classmethod
    def for_flavor(
        cls,
        flavor: str,
        inline: Any = None,
        block: Any = None,
        extractors: Any = None,
    ) -> "Registries":
        """Build all registries for a flavor, each with optional overrides.

        Example:
            >>> registries = Registries.for_flavor("markdown", block={"divider": lambda *_: "***"})
        """
        return cls(
            inline=style_registry(flavor, inline),
            block=block_registry(flavor, block),
            extractors=extractor_registry(extractors),
        )


FLAVORS = ("html", "markdown")


def _flavor_defaults(flavor: str) -> tuple[dict, dict]:
    """Return the (styles, blocks) default sets of a flavor."""
    if flavor == "html":
        from blockmark.render import html

        return html.STYLES, html.BLOCKS
    if flavor == "markdown":
        from blockmark.render import markdown

        return markdown.STYLES, markdown.BLOCKS
    raise ConfigurationError(
        f"Unknown flavor '{flavor}'. Expected one of: {', '.join(FLAVORS)}"
    )


def _tag(key: Any) -> str:
    if isinstance(key, Enum):
        return key.value
    return key
