"""Inline rendering of styled runs.

A line of rich text arrives as a flat list of runs, each with its own set of
styles. Styles on neighbouring runs overlap freely, so wrapping every run
separately would produce one wrapper per run and style. Instead, runs are
merged so that each style span is wrapped once where possible:

1. Look at the first run that still has unapplied styles.
2. For each of its styles, count how many consecutive runs carry the same
   style with the same value (a link to another URL ends the span).
3. Pick the style with the longest span; on a tie, the style listed first
   on the run wins.
4. Render the runs inside that span recursively with the style removed,
   wrap the result once, and continue after the span.

For example "Wait!" (strikethrough, bold) followed by " Scratch that"
(strikethrough) renders as ``~~**Wait!** Scratch that~~``: the
strikethrough spans two runs, so it is applied first and the bold wrapper
nests inside it.
"""

from collections.abc import Mapping, Sequence
from typing import NamedTuple

from blockmark.errors import UnsupportedRunTypeError, UnsupportedStyleError
from blockmark.models.document import RichText, StyledRun
from blockmark.render.registry import VALUE_STYLES, StyleKind


_BOOLEAN_STYLES = frozenset(kind.value for kind in StyleKind) - VALUE_STYLES


class _Pending(NamedTuple):
    """A run's text and the styles that have yet to be applied to it."""

    text: str
    styles: dict


def render_inline(runs: Sequence[StyledRun], registry: Mapping) -> RichText:
    """Render a line of styled runs.

    Args:
        runs: Styled runs in document order
        registry: Style registry mapping style kinds to render functions

    Returns:
        RichText with the concatenated plain text and the rendered markup

    Raises:
        UnsupportedRunTypeError: If a run is not literal text
        UnsupportedStyleError: If a style value does not fit its kind
        MissingRendererError: If a style kind has no render function

    Example:
        >>> runs = [StyledRun(text="Wait!", styles={"strikethrough": True, "bold": True}),
        ...         StyledRun(text=" Scratch that", styles={"strikethrough": True})]
        >>> render_inline(runs, style_registry("markdown")).rich
        '~~**Wait!** Scratch that~~'
    """
    pending = [_to_pending(run) for run in runs]
    plain = "".join(run.text for run in runs)
    return RichText(plain=plain, rich=_format(pending, registry))


def _to_pending(run: StyledRun) -> _Pending:
    if run.type != "text":
        raise UnsupportedRunTypeError(run.type)
    for kind, value in run.styles.items():
        _check_value(kind, value)
    return _Pending(run.text, dict(run.styles))


def _check_value(kind: str, value: object) -> None:
    """Validate a style value against its kind."""
    if kind in VALUE_STYLES:
        if not isinstance(value, str) or not value:
            raise UnsupportedStyleError(kind, value)
    elif kind in _BOOLEAN_STYLES:
        if value is not True:
            raise UnsupportedStyleError(kind, value)
    elif value is not True and not (isinstance(value, str) and value):
        raise UnsupportedStyleError(kind, value)


def _format(runs: list[_Pending], registry: Mapping) -> str:
    """Render pending runs, longest style span first."""
    parts = []
    start = 0
    while start < len(runs):
        first = runs[start]
        if not first.styles:
            parts.append(first.text)
            start += 1
            continue

        kind, length = _longest_style(runs, start)
        value = first.styles[kind]
        inner = [
            _Pending(run.text, {k: v for k, v in run.styles.items() if k != kind})
            for run in runs[start:start + length]
        ]
        render = registry[kind]
        parts.append(render(_format(inner, registry), None if value is True else value))
        start += length

    return "".join(parts)


def _longest_style(runs: list[_Pending], start: int) -> tuple[str, int]:
    """Find the style of runs[start] spanning the most runs.

    Ties go to the style listed first on the run.
    """
    best_kind = ""
    best_length = 0
    for kind, value in runs[start].styles.items():
        length = _span(runs, start, kind, value)
        if length > best_length:
            best_kind, best_length = kind, length
    return best_kind, best_length


def _span(runs: list[_Pending], start: int, kind: str, value: object) -> int:
    """Count consecutive runs from start carrying kind with the same value."""
    end = start + 1
    while end < len(runs) and kind in runs[end].styles and runs[end].styles[kind] == value:
        end += 1
    return end - start
