"""Per-block contexts: sibling and parent awareness for render functions.

Render functions often need to know about a block's neighbours. A bulleted
list item only opens a list when the previous block is not a list item, a
table row is a header row only when it comes first in a table that has a
column header, and so on. A BlockContext carries exactly that information.

Contexts for a list of siblings are built in two passes. The first pass
creates every context in order, wiring ``previous`` and ``parent`` and
extracting type-specific fields. The second pass links ``next`` once every
sibling's context exists.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Optional

from blockmark.errors import RenderError, StructuralError
from blockmark.models.document import ContentNode, RichText, StyledRun
from blockmark.render.inline import render_inline

if TYPE_CHECKING:
    from blockmark.render.registry import Registries


RichTextFn = Callable[[Any], RichText]
FieldExtractor = Callable[[Mapping[str, Any], RichTextFn], Mapping[str, Any]]

_UNLINKED = object()
_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, eq=False)
class BlockContext:
    """Read-only view of a block's position in the tree.

    Attributes:
        type: Block type tag
        previous: Context of the previous sibling (None if first)
        parent: Context of the parent block (None at the top level)
        fields: Type-specific fields produced by the type's extractor
        index: Position among its siblings
        depth: Nesting depth (0 for top-level blocks)
    """

    type: str
    previous: Optional["BlockContext"] = field(default=None, repr=False)
    parent: Optional["BlockContext"] = field(default=None, repr=False)
    fields: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    index: int = 0
    depth: int = 0
    _next: Any = field(default=_UNLINKED, repr=False)

    @property
    def next(self) -> Optional["BlockContext"]:
        """Context of the next sibling (None if last)."""
        if self._next is _UNLINKED:
            raise StructuralError(
                f"The next sibling of a '{self.type}' block was requested "
                f"before its sibling list was linked"
            )
        return self._next

    def get(self, key: str, default: Any = None) -> Any:
        """Get a type-specific field, or default if absent."""
        return self.fields.get(key, default)

    @property
    def is_first_of_type(self) -> bool:
        """True if the previous sibling is absent or of another type."""
        return self.previous is None or self.previous.type != self.type

    @property
    def is_last_of_type(self) -> bool:
        """True if the next sibling is absent or of another type."""
        following = self.next
        return following is None or following.type != self.type

    @property
    def index_of_type(self) -> int:
        """Position within the run of consecutive same-type siblings.

        Example:
            For siblings [paragraph, numbered, numbered, numbered] the
            numbered items have index_of_type 0, 1 and 2.
        """
        count = 0
        sibling = self.previous
        while sibling is not None and sibling.type == self.type:
            count += 1
            sibling = sibling.previous
        return count


def build_contexts(
    nodes: Sequence[ContentNode],
    registries: "Registries",
    parent: Optional[BlockContext] = None,
) -> list[BlockContext]:
    """Build the contexts for a list of sibling nodes.

    Args:
        nodes: Sibling nodes in document order
        registries: Registries providing field extractors and inline styles
        parent: Context of the parent node (None at the top level)

    Returns:
        One fully linked context per node, in the same order
    """
    depth = 0 if parent is None else parent.depth + 1

    def rich(value: Any) -> RichText:
        return render_inline(_as_runs(value), registries.inline)

    contexts: list[BlockContext] = []
    previous = None
    for index, node in enumerate(nodes):
        extractor = registries.extractors.get(node.type)
        fields = _EMPTY if extractor is None else MappingProxyType(dict(extractor(node.fields, rich)))
        context = BlockContext(
            type=node.type,
            previous=previous,
            parent=parent,
            fields=fields,
            index=index,
            depth=depth,
        )
        contexts.append(context)
        previous = context

    for context, following in zip(contexts, [*contexts[1:], None]):
        object.__setattr__(context, "_next", following)

    return contexts


def _as_runs(value: Any) -> list[StyledRun]:
    """Coerce a rich-text field (list of runs or run dicts) into runs."""
    if value is None:
        return []
    if isinstance(value, str):
        return [StyledRun(text=value)]
    return [run if isinstance(run, StyledRun) else StyledRun.model_validate(run) for run in value]


def _require(fields: Mapping[str, Any], key: str, block_type: str) -> Any:
    if key not in fields or fields[key] is None:
        raise RenderError(f"A '{block_type}' block requires the '{key}' field")
    return fields[key]


def _to_do(fields, rich):
    return {"checked": bool(fields.get("checked", False))}


def _color(fields, rich):
    return {"color": fields.get("color") or "default"}


def _title(block_type: str) -> FieldExtractor:
    def extract(fields, rich):
        return {"title": _require(fields, "title", block_type)}
    return extract


def _equation(fields, rich):
    return {"expression": _require(fields, "expression", "equation")}


def _code(fields, rich):
    return {
        "language": fields.get("language") or "plain text",
        "caption": rich(fields.get("caption")),
    }


def _table(fields, rich):
    return {
        "width": int(fields.get("width", 0)),
        "has_column_header": bool(fields.get("has_column_header", False)),
        "has_row_header": bool(fields.get("has_row_header", False)),
    }


def _table_row(fields, rich):
    return {"cells": [rich(cell) for cell in fields.get("cells", [])]}


def _captioned(block_type: str) -> FieldExtractor:
    def extract(fields, rich):
        return {
            "url": _require(fields, "url", block_type),
            "caption": rich(fields.get("caption")),
        }
    return extract


def _link_preview(fields, rich):
    return {"url": _require(fields, "url", "link_preview")}


DEFAULT_EXTRACTORS: dict[str, FieldExtractor] = {
    "to_do": _to_do,
    "toggle": _color,
    "callout": _color,
    "child_page": _title("child_page"),
    "child_database": _title("child_database"),
    "equation": _equation,
    "code": _code,
    "table": _table,
    "table_row": _table_row,
    "embed": _captioned("embed"),
    "bookmark": _captioned("bookmark"),
    "image": _captioned("image"),
    "video": _captioned("video"),
    "pdf": _captioned("pdf"),
    "file": _captioned("file"),
    "link_preview": _link_preview,
}
