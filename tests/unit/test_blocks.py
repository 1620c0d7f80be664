"""Unit tests for the recursive block renderer."""

import pytest

from blockmark.errors import MissingRendererError
from blockmark.models.document import StyledRun
from blockmark.render.blocks import render_block, render_blocks
from blockmark.render.registry import Registries


@pytest.fixture
def recording_registries():
    """Registries whose block renderers record what they receive."""
    calls = []

    def make(tag):
        def render(content, body, context):
            calls.append((context.type, content, body, context))
            return f"[{tag}:{content}|{body}]"
        return render

    registries = Registries.for_flavor(
        "html",
        block={"paragraph": make("p"), "bulleted_list_item": make("li")},
    )
    return registries, calls


class TestRenderBlocks:
    """Test rendering sibling lists."""

    def test_siblings_render_in_order(self, make_node, html_registries):
        """Test output is the concatenation of each sibling's output."""
        nodes = [make_node("paragraph", "a"), make_node("heading_1", "b"), make_node("paragraph", "c")]

        result = render_blocks(nodes, html_registries)

        assert result == "<p>a</p><h2>b</h2><p>c</p>"
        assert result == "".join(render_block(node, html_registries) for node in nodes)

    def test_empty_list(self, html_registries):
        """Test rendering no blocks yields an empty string."""
        assert render_blocks([], html_registries) == ""

    def test_rendering_is_repeatable(self, make_node, markdown_registries):
        """Test rendering the same tree twice gives the same output."""
        nodes = [
            make_node("numbered_list_item", "a", children=[make_node("bulleted_list_item", "x")]),
            make_node("numbered_list_item", "b"),
        ]

        assert render_blocks(nodes, markdown_registries) == render_blocks(nodes, markdown_registries)

    def test_content_is_rendered_inline(self, make_node, html_registries):
        """Test the node's runs are rendered with the style registry."""
        node = make_node("paragraph", runs=[StyledRun(text="hi", styles={"italic": True})])

        assert render_block(node, html_registries) == "<p><em>hi</em></p>"


class TestRenderFunctionArguments:
    """Test what block render functions receive."""

    def test_body_is_rendered_children(self, make_node, recording_registries):
        """Test children are rendered first and passed as the body."""
        registries, calls = recording_registries
        node = make_node("bulleted_list_item", "parent", children=[
            make_node("paragraph", "one"),
            make_node("paragraph", "two"),
        ])

        result = render_block(node, registries)

        assert result == "[li:parent|[p:one|][p:two|]]"
        assert [call[0] for call in calls] == ["paragraph", "paragraph", "bulleted_list_item"]

    def test_node_without_runs_has_empty_content(self, make_node, recording_registries):
        """Test content is empty when the node has no rich text."""
        registries, calls = recording_registries

        render_block(make_node("paragraph"), registries)

        assert calls[0][1] == ""

    def test_children_see_their_parent(self, make_node, recording_registries):
        """Test child contexts link to the parent's context."""
        registries, calls = recording_registries
        node = make_node("bulleted_list_item", "parent", children=[make_node("paragraph", "child")])

        render_block(node, registries)

        child_context = calls[0][3]
        parent_context = calls[1][3]
        assert child_context.parent is parent_context
        assert parent_context.parent is None

    def test_contexts_are_linked_when_rendering(self, make_node, recording_registries):
        """Test next is available to render functions."""
        registries, calls = recording_registries

        render_blocks([make_node("paragraph", "a"), make_node("bulleted_list_item", "b")], registries)

        first, second = calls[0][3], calls[1][3]
        assert first.next is second
        assert second.previous is first


class TestMissingRenderers:
    """Test blocks whose type has no render function."""

    def test_missing_renderer_raises(self, make_node, html_registries):
        """Test the error names the unsupported type."""
        with pytest.raises(MissingRendererError) as exc_info:
            render_blocks([make_node("paragraph", "a"), make_node("custom_widget")], html_registries)

        assert exc_info.value.name == "custom_widget"

    def test_missing_renderer_in_children(self, make_node, html_registries):
        """Test unsupported nested blocks also fail."""
        node = make_node("quote", "q", children=[make_node("custom_widget")])

        with pytest.raises(MissingRendererError, match="custom_widget"):
            render_block(node, html_registries)

    def test_on_missing_policy(self, make_node, html_registries):
        """Test a policy may replace the output of unsupported blocks."""
        seen = []

        def placeholder(error, context):
            seen.append((error.name, context.index))
            return f"<!-- {error.name} -->"

        nodes = [make_node("paragraph", "a"), make_node("custom_widget"), make_node("paragraph", "b")]

        result = render_blocks(nodes, html_registries, on_missing=placeholder)

        assert result == "<p>a</p><!-- custom_widget --><p>b</p>"
        assert seen == [("custom_widget", 1)]
