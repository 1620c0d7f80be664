"""Default render functions for HTML output.

Only styles and blocks with a clear semantic translation into HTML have a
default. Headings start at <h2>, leaving <h1> to the page title. Underlined
text becomes <b> ("bring to attention") rather than <u>.

No escaping is done here; run text is emitted as given.
"""

from blockmark.errors import RenderError


def _link(content, url):
    return f'<a href="{url}">{content}</a>'


def _color(content, color):
    color = color.removesuffix("_background")
    return f'<mark class="{color}">{content}</mark>'


STYLES = {
    "link": _link,
    "bold": lambda content, value: f"<strong>{content}</strong>",
    "italic": lambda content, value: f"<em>{content}</em>",
    "strikethrough": lambda content, value: f"<s>{content}</s>",
    "underline": lambda content, value: f"<b>{content}</b>",
    "code": lambda content, value: f"<code>{content}</code>",
    "color": _color,
}


def _grouped(tag: str):
    """Build a list item renderer that wraps runs of same-type items in tag."""
    opening = f"<{tag}>"
    closing = f"</{tag}>"

    def render(content, body, context):
        result = f"<li>{content}{body}</li>"
        if context.is_first_of_type:
            result = opening + result
        if context.is_last_of_type:
            result += closing
        return result

    return render


def paragraph(content, body, context):
    if not content.strip():
        return ""
    return f"<p>{content}</p>"


def to_do(content, body, context):
    checked = " checked" if context.get("checked") else ""
    result = f'<li><input type="checkbox" disabled{checked}> {content}{body}</li>'
    if context.is_first_of_type:
        result = '<ul class="to-do-list">' + result
    if context.is_last_of_type:
        result += "</ul>"
    return result


def code(content, body, context):
    language = context.get("language", "plain text")
    pre = f'<pre data-language="{language}"><code>{content}</code></pre>'
    caption = context.get("caption")
    if not caption or not caption.rich:
        return pre
    return f"<figure>{pre}<figcaption>{caption.rich}</figcaption></figure>"


def callout(content, body, context):
    color = context.get("color", "default").removesuffix("_background")
    header = f'<p class="callout-header">{content}</p>'
    return f'<div class="callout callout-{color}" role="note">{header}{body}</div>'


def table_row(content, body, context):
    parent = context.parent
    if parent is None or parent.type != "table":
        raise RenderError("A 'table_row' block must be nested in a 'table' block")

    cells = [cell.rich for cell in context.get("cells", [])]
    if context.is_first_of_type and parent.get("has_column_header"):
        return "<tr>" + "".join(f"<th>{cell}</th>" for cell in cells) + "</tr>"
    if not parent.get("has_row_header") or not cells:
        return "<tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>"

    first = f"<th>{cells[0]}</th>"
    others = "".join(f"<td>{cell}</td>" for cell in cells[1:])
    return f"<tr>{first}{others}</tr>"


def image(content, body, context):
    caption = context.get("caption")
    alt = caption.plain if caption else ""
    img = f'<img src="{context.get("url")}" alt="{alt}">'
    if not caption or not caption.rich:
        return img
    return f"<figure>{img}<figcaption>{caption.rich}</figcaption></figure>"


BLOCKS = {
    "paragraph": paragraph,
    "heading_1": lambda content, body, context: f"<h2>{content}</h2>",
    "heading_2": lambda content, body, context: f"<h3>{content}</h3>",
    "heading_3": lambda content, body, context: f"<h4>{content}</h4>",
    "bulleted_list_item": _grouped("ul"),
    "numbered_list_item": _grouped("ol"),
    "to_do": to_do,
    "quote": lambda content, body, context: f"<blockquote>{content}{body}</blockquote>",
    "toggle": lambda content, body, context: f"<details><summary>{content}</summary>{body}</details>",
    "synced": lambda content, body, context: body,
    "code": code,
    "callout": callout,
    "divider": lambda content, body, context: "<hr>",
    "table": lambda content, body, context: f"<table>{body}</table>",
    "table_row": table_row,
    "image": image,
}
