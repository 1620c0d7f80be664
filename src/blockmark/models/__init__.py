"""Pydantic data models for Blockmark."""

from blockmark.models.config import PropertyConfig, RenderConfig
from blockmark.models.document import ContentNode, Document, RichText, StyledRun

__all__ = [
    "ContentNode",
    "Document",
    "PropertyConfig",
    "RenderConfig",
    "RichText",
    "StyledRun",
]
