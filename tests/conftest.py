"""Shared test fixtures for all test modules."""

from pathlib import Path

import pytest

from blockmark.models.document import ContentNode, StyledRun
from blockmark.render.registry import Registries


@pytest.fixture
def make_run():
    """Factory for styled runs: make_run("text", bold=True, link="https://...")."""
    def make(text: str, **styles) -> StyledRun:
        return StyledRun(text=text, styles=styles)

    return make


@pytest.fixture
def make_node():
    """Factory for content nodes with plain text and type-specific fields.

    Example:
        >>> make_node("to_do", "Buy milk", checked=True)
        >>> make_node("bulleted_list_item", "Parent", children=[make_node(...)])
    """
    def make(block_type: str, text: str | None = None, children=(), runs=None, **fields) -> ContentNode:
        if runs is None:
            runs = [] if text is None else [StyledRun(text=text)]
        return ContentNode(type=block_type, runs=runs, children=list(children), fields=fields)

    return make


@pytest.fixture
def html_registries() -> Registries:
    """Default registries for HTML output."""
    return Registries.for_flavor("html")


@pytest.fixture
def markdown_registries() -> Registries:
    """Default registries for Markdown output."""
    return Registries.for_flavor("markdown")


@pytest.fixture
def fake_home(tmp_path, monkeypatch) -> Path:
    """Point Path.home() at a temporary directory (config and log files)."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    for var in (
        "BLOCKMARK_FLAVOR",
        "BLOCKMARK_FRONT_MATTER",
        "BLOCKMARK_SKIP_UNSUPPORTED",
        "BLOCKMARK_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
