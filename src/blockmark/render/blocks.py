"""Recursive rendering of block trees.

Each sibling list is rendered in two phases: contexts are built for every
sibling first, then each sibling is rendered in order. Rendering a node
means rendering its own rich text (the "content"), rendering its children
as a sibling list (the "body"), and handing both, with the node's context,
to the render function registered for the node's type.

The engine never groups blocks itself. Render functions decide from
``context.previous`` and ``context.next`` whether to open or close a
wrapper such as a list.
"""

from collections.abc import Callable, Sequence
from typing import Optional

from blockmark.errors import MissingRendererError
from blockmark.models.document import ContentNode
from blockmark.render.context import BlockContext, build_contexts
from blockmark.render.inline import render_inline
from blockmark.render.registry import Registries
from blockmark.utils.logging import get_logger


logger = get_logger(__name__)

MissingRendererPolicy = Callable[[MissingRendererError, BlockContext], str]


def render_blocks(
    nodes: Sequence[ContentNode],
    registries: Registries,
    parent: Optional[BlockContext] = None,
    on_missing: Optional[MissingRendererPolicy] = None,
) -> str:
    """Render a list of sibling nodes and concatenate the results.

    Args:
        nodes: Sibling nodes in document order
        registries: Style, block and field extractor registries
        parent: Context of the parent node (None at the top level)
        on_missing: Called with the error and the node's context when a
            node's type has no block renderer; its return value replaces
            the node's output. Without it the error propagates.

    Returns:
        Rendered markup of all siblings, in order

    Raises:
        MissingRendererError: If a node's type has no block renderer and no
            on_missing policy is given
    """
    contexts = build_contexts(nodes, registries, parent)
    return "".join(
        _render_node(node, context, registries, on_missing)
        for node, context in zip(nodes, contexts)
    )


def render_block(
    node: ContentNode,
    registries: Registries,
    parent: Optional[BlockContext] = None,
    on_missing: Optional[MissingRendererPolicy] = None,
) -> str:
    """Render a single node as a sibling list of one.

    Example:
        >>> node = ContentNode(type="paragraph", runs=[StyledRun(text="Hi")])
        >>> render_block(node, Registries.for_flavor("html"))
        '<p>Hi</p>'
    """
    return render_blocks([node], registries, parent, on_missing)


def _render_node(
    node: ContentNode,
    context: BlockContext,
    registries: Registries,
    on_missing: Optional[MissingRendererPolicy],
) -> str:
    content = render_inline(node.runs, registries.inline).rich if node.runs else ""
    body = render_blocks(node.children, registries, context, on_missing)

    try:
        render = registries.block[context.type]
    except MissingRendererError as e:
        logger.debug("block_renderer_missing", block_type=context.type, depth=context.depth)
        if on_missing is None:
            raise
        return on_missing(e, context)

    return render(content, body, context)
