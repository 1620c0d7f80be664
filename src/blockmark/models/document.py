"""Document tree models: styled runs, content nodes and documents.

These models describe a document that has already been fetched from its
source. They are immutable once constructed; the renderer only ever reads
them and derives per-node contexts from them.
"""

import json
from pathlib import Path
from typing import Any, NamedTuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RichText(NamedTuple):
    """Rendered rich text alongside its unstyled text."""

    plain: str
    rich: str


class StyledRun(BaseModel):
    """A segment of text carrying a single set of inline styles.

    Styles map a style kind to either ``True`` (bold, italic, ...) or a
    value (the URL of a link, the name of a color). The order of the styles
    is kept as given; it decides which style wraps outermost when two styles
    span the same number of runs.
    """

    text: str = Field(
        default="",
        description="Plain text of the run"
    )

    type: str = Field(
        default="text",
        description="Kind of rich text; only 'text' can be rendered"
    )

    styles: dict[str, str | bool] = Field(
        default_factory=dict,
        description="Active styles, mapping style kind to True or a value"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("styles", mode="before")
    @classmethod
    def drop_inactive_styles(cls, v: Any) -> Any:
        """Remove styles annotated as False or None; they are not active."""
        if isinstance(v, dict):
            return {kind: value for kind, value in v.items() if value not in (False, None)}
        return v


class ContentNode(BaseModel):
    """One block of the document tree.

    Attributes:
        type: Block type tag (e.g. "paragraph", "bulleted_list_item")
        runs: The block's own rich text (first line of a list item, etc.)
        children: Nested blocks, in document order
        fields: Raw type-specific data (checkbox state, table cells, ...)
    """

    type: str = Field(..., min_length=1, description="Block type tag")

    runs: list[StyledRun] = Field(
        default_factory=list,
        alias="text_runs",
        description="The block's own rich text"
    )

    children: list["ContentNode"] = Field(
        default_factory=list,
        description="Child blocks in order"
    )

    fields: dict[str, Any] = Field(
        default_factory=dict,
        alias="extracted_fields",
        description="Type-specific data, parsed by field extractors"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Document(BaseModel):
    """A page: its properties (for front matter) and its top-level blocks."""

    properties: dict[str, Any] = Field(
        default_factory=dict,
        description="Page properties available to the front matter schema"
    )

    blocks: list[ContentNode] = Field(
        default_factory=list,
        description="Top-level blocks of the page"
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def load(cls, path: Path) -> "Document":
        """
        Load a document tree from a JSON or YAML file.

        Files ending in .yaml or .yml are read as YAML, anything else as JSON.

        Args:
            path: Path to the document file

        Returns:
            Validated Document instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file cannot be parsed or fails validation
        """
        text = path.read_text(encoding="utf-8")

        if path.suffix.lower() in (".yaml", ".yml"):
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        else:
            data = json.loads(text)

        # A bare list is shorthand for a document without properties
        if isinstance(data, list):
            data = {"blocks": data}

        return cls.model_validate(data)


ContentNode.model_rebuild()
