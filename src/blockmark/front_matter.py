"""Front matter: document properties written ahead of the rendered content.

A schema lists which document properties to include and under which key
path. Nested paths such as ("seo", "description") produce nested mappings.
The front matter is built bottom-up into read-only mappings; schemas whose
paths overlap (one path being a prefix of another) are rejected up front.
"""

import json
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

import yaml
from pydantic_core import to_jsonable_python

from blockmark.errors import FrontMatterError


SchemaEntry = tuple[str, tuple[str, ...]]
DataFormatter = Callable[[Mapping[str, Any]], str]


def validate_schema(schema: Sequence[SchemaEntry]) -> None:
    """Reject empty paths and paths that overlap.

    Args:
        schema: (property name, key path) pairs

    Raises:
        FrontMatterError: If a path is empty, or if two paths are equal or
            one is a prefix of the other

    Example:
        >>> validate_schema([("Title", ("title",)), ("SEO", ("title", "seo"))])
        Traceback (most recent call last):
        FrontMatterError: Front matter paths 'title' and 'title.seo' overlap
    """
    for name, path in schema:
        if not path or any(not key for key in path):
            raise FrontMatterError(f"Property '{name}' has an empty front matter path")

    for i, (_, path) in enumerate(schema):
        for _, other in schema[i + 1:]:
            shorter, longer = sorted((path, other), key=len)
            if longer[:len(shorter)] == shorter:
                raise FrontMatterError(
                    f"Front matter paths '{'.'.join(path)}' and '{'.'.join(other)}' overlap"
                )


def build_front_matter(
    properties: Mapping[str, Any],
    schema: Sequence[SchemaEntry],
) -> Mapping[str, Any]:
    """Build the front matter for a document.

    Args:
        properties: The document's properties
        schema: (property name, key path) pairs, in output order

    Returns:
        Read-only nested mapping

    Raises:
        FrontMatterError: If the schema is invalid or a property is missing

    Example:
        >>> fm = build_front_matter({"SEO": "About"}, [("SEO", ("seo", "description"))])
        >>> fm["seo"]["description"]
        'About'
    """
    validate_schema(schema)

    entries = []
    for name, path in schema:
        if name not in properties:
            raise FrontMatterError(f"Document property '{name}' not found")
        entries.append((tuple(path), properties[name]))

    return _build(entries)


def _build(entries: list[tuple[tuple[str, ...], Any]]) -> Mapping[str, Any]:
    """Assemble leaves into nested read-only mappings, deepest first."""
    slots: dict[str, Any] = {}
    nested: set[str] = set()
    for path, value in entries:
        head, rest = path[0], path[1:]
        if rest:
            slots.setdefault(head, []).append((rest, value))
            nested.add(head)
        else:
            slots[head] = value

    return MappingProxyType({
        key: _build(value) if key in nested else value
        for key, value in slots.items()
    })


def thaw(value: Any) -> Any:
    """Convert read-only mappings back into plain dicts for serialization."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


def format_json(data: Mapping[str, Any]) -> str:
    """Format front matter as a JSON block (readable by most YAML parsers).

    Dates and other non-JSON values are written in their JSON form
    (ISO 8601 for dates).
    """
    dumped = json.dumps(thaw(data), indent=2, ensure_ascii=False, default=to_jsonable_python)
    return f"---json\n{dumped}\n---\n"


def format_yaml(data: Mapping[str, Any]) -> str:
    """Format front matter as a YAML block, keeping key order."""
    dumped = yaml.safe_dump(thaw(data), sort_keys=False, allow_unicode=True)
    return f"---\n{dumped}---\n"


DATA_FORMATTERS: dict[str, DataFormatter] = {
    "json": format_json,
    "yaml": format_yaml,
    "none": lambda data: "",
}
