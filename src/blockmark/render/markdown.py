"""Default render functions for Markdown output.

Blocks render with a leading newline so that consecutive blocks are
separated by a blank line. List items nest their body under the item's
marker, indented to the marker's width. Callouts become GitHub alerts.
"""

import re

from blockmark.errors import RenderError


_TRAILING_SPACES = re.compile(r" +$", re.MULTILINE)
_NESTED_LIST = re.compile(r"\n(\d+\. |- )")

CALLOUT_TYPES = {
    "blue_background": "INFO",
    "green_background": "TIP",
    "purple_background": "IMPORTANT",
    "yellow_background": "WARNING",
    "red_background": "CAUTION",
}


def _code(content, value):
    ticks = re.findall(r"`+", content)
    if not ticks:
        return f"`{content}`"
    fence = "`" * (max(len(t) for t in ticks) + 1)
    return f"{fence} {content} {fence}"


def _color(content, color):
    return f"[{content}]{{.{color.removesuffix('_background')}}}"


STYLES = {
    "link": lambda content, url: f"[{content}]({url})",
    "bold": lambda content, value: f"**{content}**",
    "italic": lambda content, value: f"_{content}_",
    "strikethrough": lambda content, value: f"~~{content}~~",
    "underline": lambda content, value: f"_{content}_",
    "code": _code,
    "color": _color,
}


def _list_item(marker: str, content: str, body: str, first: bool) -> str:
    """Render one list item, nesting body under the marker."""
    result = content + "\n"
    if _NESTED_LIST.match(body):
        # A nested list follows the item line directly
        result += body[1:]
    else:
        result += body
    result = marker + result.replace("\n", "\n" + " " * len(marker))
    if first:
        result = "\n" + result
    return _TRAILING_SPACES.sub("", result)


def _quoted(text: str, body: str) -> str:
    """Prefix every line of text and body with a quote marker."""
    result = "\n" + text
    if body:
        result += "\n" + body.removesuffix("\n")
    result = result.replace("\n", "\n> ")
    return _TRAILING_SPACES.sub("", result) + "\n"


def paragraph(content, body, context):
    if not content.strip():
        return ""
    return f"\n{content}\n"


def bulleted_list_item(content, body, context):
    return _list_item("- ", content, body, context.is_first_of_type)


def numbered_list_item(content, body, context):
    marker = f"{context.index_of_type + 1}. "
    return _list_item(marker, content, body, context.is_first_of_type)


def to_do(content, body, context):
    marker = "- [x] " if context.get("checked") else "- [ ] "
    return _list_item(marker, content, body, context.is_first_of_type)


def code(content, body, context):
    language = context.get("language", "plain text")
    if language == "plain text":
        language = ""
    return f"\n```{language}\n{content}\n```\n"


def callout(content, body, context):
    color = context.get("color", "default")
    alert = CALLOUT_TYPES.get(color)
    if alert is None:
        raise RenderError(
            f"Unrecognized callout color '{color}'. "
            f"Expected one of: {', '.join(CALLOUT_TYPES)}"
        )
    return _quoted(f"[!{alert}]\n{content}", body)


def table_row(content, body, context):
    parent = context.parent
    if parent is None or parent.type != "table":
        raise RenderError("A 'table_row' block must be nested in a 'table' block")

    cells = [cell.rich for cell in context.get("cells", [])]
    row = "| " + " | ".join(cells) + " |\n"
    if not context.is_first_of_type:
        return row
    return row + "| " + " | ".join("---" for _ in cells) + " |\n"


def image(content, body, context):
    caption = context.get("caption")
    alt = caption.plain if caption else ""
    return f"\n![{alt}]({context.get('url')})\n"


BLOCKS = {
    "paragraph": paragraph,
    "heading_1": lambda content, body, context: f"\n## {content}\n",
    "heading_2": lambda content, body, context: f"\n### {content}\n",
    "heading_3": lambda content, body, context: f"\n#### {content}\n",
    "bulleted_list_item": bulleted_list_item,
    "numbered_list_item": numbered_list_item,
    "to_do": to_do,
    "quote": lambda content, body, context: _quoted(content, body),
    "synced": lambda content, body, context: body,
    "code": code,
    "callout": callout,
    "divider": lambda content, body, context: "\n---\n",
    "table": lambda content, body, context: "\n" + body,
    "table_row": table_row,
    "image": image,
}
