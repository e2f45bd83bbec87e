"""HTML markup emission for parsed prompts.

This module turns a segment tree into an HTML fragment suitable for a
highlighted prompt preview. Weighted text is wrapped in inline-coloured
spans; structural tokens get one of a fixed set of CSS classes that the
caller's stylesheet may target.

Markup Roles
------------
========================  ==============================================
Class / element           Emitted for
========================  ==============================================
``prompt-bracket``        brace/bracket delimiters of weight scopes
``prompt-snippet``        ``<snippet:name>`` references
``prompt-random``         ``||`` markers around a random-choice group
``prompt-random-sep``     ``|`` between random-choice options
``prompt-mix-sep``        a bare ``|`` outside any random group
``prompt-weight-close``   the closing ``::`` of a numeric weight scope
``<br/>``                 newlines
``style="color:hsl()"``   text whose weight differs from 1
========================  ==============================================

Usage Example
-------------
    >>> from promptweight.core.config import DEFAULT_HIGHLIGHT_CONFIG
    >>> from promptweight.core.markup import render
    >>> render("a [b]", DEFAULT_HIGHLIGHT_CONFIG)  # doctest: +ELLIPSIS
    'a <span class="prompt-bracket">[</span><span style="color:hsl(208, ...)">b</span>...'
"""

import html
import logging
from collections.abc import Sequence

from promptweight.core.config import WeightHighlightConfig
from promptweight.core.parser import parse
from promptweight.core.segments import (
    LineBreak,
    Literal,
    MixSeparator,
    RandomChoice,
    Scope,
    ScopeKind,
    Segment,
    SnippetRef,
    Visit,
    walk,
)
from promptweight.core.style import color_for

logger = logging.getLogger(__name__)

BRACKET_CLASS = "prompt-bracket"
SNIPPET_CLASS = "prompt-snippet"
RANDOM_CLASS = "prompt-random"
RANDOM_SEPARATOR_CLASS = "prompt-random-sep"
MIX_SEPARATOR_CLASS = "prompt-mix-sep"
WEIGHT_CLOSE_CLASS = "prompt-weight-close"
LINE_BREAK = "<br/>"


def escape(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for embedding in HTML text."""
    return html.escape(text, quote=False)


def _structural(css_class: str, text: str) -> str:
    return f'<span class="{css_class}">{escape(text)}</span>'


def _weighted(text: str, weight: float, config: WeightHighlightConfig) -> str:
    color = color_for(weight, config)
    if color is None:
        return escape(text)
    return f'<span style="color:{color}">{escape(text)}</span>'


def _open_scope(scope: Scope, config: WeightHighlightConfig) -> str:
    if scope.kind is ScopeKind.NUMERIC_PREFIXED:
        # Coloured by the declared number alone, not the ambient weight.
        return _weighted(scope.open, scope.own_weight, config)
    return _structural(BRACKET_CLASS, scope.open)


def _close_scope(scope: Scope, config: WeightHighlightConfig) -> str:
    if scope.kind is ScopeKind.NUMERIC_PREFIXED:
        return _structural(WEIGHT_CLOSE_CLASS, scope.close)
    if scope.kind is ScopeKind.EXPLICIT_WEIGHTED:
        return _weighted(scope.suffix, scope.own_weight, config) + _structural(
            BRACKET_CLASS, scope.close
        )
    return _structural(BRACKET_CLASS, scope.close)


def _leaf(segment: Segment, config: WeightHighlightConfig) -> str:
    if isinstance(segment, Literal):
        return _weighted(segment.text, segment.weight, config)
    if isinstance(segment, SnippetRef):
        return _structural(SNIPPET_CLASS, segment.source)
    if isinstance(segment, MixSeparator):
        return _structural(MIX_SEPARATOR_CLASS, segment.text)
    if isinstance(segment, LineBreak):
        return LINE_BREAK
    raise TypeError(f"Unexpected segment type: {type(segment).__name__}")


def emit(segments: Sequence[Segment], config: WeightHighlightConfig) -> str:
    """Render a parsed segment tree to HTML.

    Output order matches source order exactly; nothing is merged or
    dropped.

    Args:
        segments: Segments from :func:`~promptweight.core.parser.parse`
        config: Highlight configuration used for colouring

    Returns:
        HTML fragment
    """
    out: list[str] = []
    for visit, segment in walk(segments):
        if visit is Visit.LEAF:
            out.append(_leaf(segment, config))
        elif isinstance(segment, RandomChoice):
            if visit is Visit.SEPARATOR:
                out.append(_structural(RANDOM_SEPARATOR_CLASS, "|"))
            else:
                out.append(_structural(RANDOM_CLASS, "||"))
        elif visit is Visit.ENTER:
            out.append(_open_scope(segment, config))
        else:
            out.append(_close_scope(segment, config))
    return "".join(out)


def render(text: str | None, config: WeightHighlightConfig) -> str:
    """Render prompt text as weight-highlighted HTML.

    This is a pure function of its arguments. It never raises for any
    input string: malformed weighting syntax degrades to literal text.

    Args:
        text: Prompt text. ``None`` or empty returns an empty string.
        config: Highlight configuration

    Returns:
        HTML fragment with weight colours and structural classes
    """
    if not text:
        return ""
    segments = parse(text, config)
    logger.debug(f"Parsed {len(text)} characters into {len(segments)} top-level segments")
    return emit(segments, config)
