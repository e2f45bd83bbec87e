"""Recursive-descent parser for weighted prompt text.

The parser reads prompt text left to right and produces a tree of
:mod:`~promptweight.core.segments`. Weight is not computed in a separate
pass: every production derives a factor for its content and the content is
parsed with ``ambient_weight * factor``, so each literal leaves the parser
already carrying its effective weight.

Productions
-----------
At every cursor position the productions below are tried in order. The
first one that matches consumes its whole span; if none match, one
character is consumed as a literal.

1. ``<snippet:name>``       snippet reference (opaque, never weighted)
2. ``||a|b||``              random-choice group, options at ambient weight
3. ``1.5::text::``          numeric scope, content at ``ambient * 1.5``
4. ``[text:0.8]``           explicit scope, content at ``ambient * 0.8``
5. ``{{text}}``             brace run, content at ``ambient * boost ** 2``
6. ``[[text]]``             bracket run, content at ``ambient * boost ** -2``
7. newline                  line break
8. ``|``                    mix separator
9. any other character      literal at ambient weight

Malformed input never raises. An unterminated ``::``, ``||`` or an
unbalanced run simply fails its production and the opening characters
fall through to the literal rule.

Scope content is parsed in place (bounded by the scope's end offset)
using an explicit frame stack rather than Python recursion, so deeply
nested prompts parse without hitting the recursion limit.

Usage Example
-------------
    >>> from promptweight.core.parser import parse
    >>> segments = parse("a {cat}")
    >>> segments[2].weight
    1.1
"""

import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass

from promptweight.core.config import DEFAULT_HIGHLIGHT_CONFIG, WeightHighlightConfig
from promptweight.core.segments import (
    LineBreak,
    Literal,
    MixSeparator,
    RandomChoice,
    Scope,
    ScopeKind,
    Segment,
    SnippetRef,
)

logger = logging.getLogger(__name__)

_SNIPPET_PATTERN = re.compile(r"<\s*snippet:([^<>\s]+)\s*>", re.IGNORECASE)
_NUMERIC_WEIGHT_PATTERN = re.compile(r"[-+]?(?:\d+(?:\.\d+)?|\.\d+)(?=::)", re.ASCII)
# Only flat [..] or {..} groups ending in :number are explicit weights.
# Plain colon tags such as "artist:foo" stay literal.
_EXPLICIT_GROUP_PATTERN = re.compile(
    r"([\[{])([^()\[\]{}]+?):\s*(-?\d+(?:\.\d+)?)([\]}])", re.ASCII
)

_RANDOM_DELIMITER = "||"
_WEIGHT_CLOSE = "::"


@dataclass(frozen=True)
class _Match:
    """A successful production.

    ``spans`` are ``(start, stop, weight)`` regions of the source that must
    be parsed before the segment can be built; ``build`` receives their
    parsed contents in order.
    """

    end: int
    build: Callable[[tuple[tuple[Segment, ...], ...]], Segment]
    spans: tuple[tuple[int, int, float], ...] = ()


def _power(base: float, exponent: int) -> float:
    """``base ** exponent`` that saturates to infinity instead of raising."""
    try:
        return base**exponent
    except OverflowError:
        return math.inf


def _run_length(text: str, start: int, end: int, char: str) -> int:
    length = 0
    while start + length < end and text[start + length] == char:
        length += 1
    return length


def _balanced_run(
    text: str, start: int, end: int, open_char: str, close_char: str
) -> tuple[int, int, int] | None:
    """Match a run of ``open_char`` against a closing run of the same length.

    Further runs of exactly the same length nest; shorter or longer runs
    of the delimiter are ordinary content.

    Returns:
        ``(depth, inner_start, inner_stop)`` or None if the run never balances
    """
    depth = _run_length(text, start, end, open_char)
    if not depth:
        return None
    open_run = open_char * depth
    close_run = close_char * depth

    level = 1
    idx = start + depth
    while idx < end:
        if text.startswith(open_run, idx, end):
            level += 1
            idx += depth
            continue
        if text.startswith(close_run, idx, end):
            level -= 1
            if level == 0:
                return depth, start + depth, idx
            idx += depth
            continue
        idx += 1
    return None


def _match_snippet(text, pos, end, weight, config) -> _Match | None:
    if text[pos] != "<":
        return None
    match = _SNIPPET_PATTERN.match(text, pos, end)
    if not match:
        return None
    snippet = SnippetRef(name=match.group(1), source=match.group(0))
    return _Match(end=match.end(), build=lambda _: snippet)


def _match_random_group(text, pos, end, weight, config) -> _Match | None:
    if not text.startswith(_RANDOM_DELIMITER, pos, end):
        return None
    inner_start = pos + len(_RANDOM_DELIMITER)
    close = text.find(_RANDOM_DELIMITER, inner_start, end)
    if close == -1:
        logger.debug(f"Unterminated random group at offset {pos}")
        return None

    spans = []
    option_start = inner_start
    while True:
        pipe = text.find("|", option_start, close)
        if pipe == -1:
            spans.append((option_start, close, weight))
            break
        spans.append((option_start, pipe, weight))
        option_start = pipe + 1

    return _Match(
        end=close + len(_RANDOM_DELIMITER),
        build=lambda options: RandomChoice(options=options),
        spans=tuple(spans),
    )


def _match_numeric_scope(text, pos, end, weight, config) -> _Match | None:
    match = _NUMERIC_WEIGHT_PATTERN.match(text, pos, end)
    if not match:
        return None
    content_start = match.end() + len(_WEIGHT_CLOSE)
    # The first "::" closes the scope, regardless of any nesting in between.
    close = text.find(_WEIGHT_CLOSE, content_start, end)
    if close == -1:
        logger.debug(f"Unterminated numeric weight at offset {pos}")
        return None

    declared = float(match.group(0))
    content_weight = weight * declared
    prefix = text[pos:content_start]

    def build(parts):
        return Scope(
            kind=ScopeKind.NUMERIC_PREFIXED,
            open=prefix,
            close=_WEIGHT_CLOSE,
            own_weight=declared,
            weight=content_weight,
            children=parts[0],
        )

    return _Match(
        end=close + len(_WEIGHT_CLOSE),
        build=build,
        spans=((content_start, close, content_weight),),
    )


def _match_explicit_scope(text, pos, end, weight, config) -> _Match | None:
    if text[pos] not in "[{":
        return None
    match = _EXPLICIT_GROUP_PATTERN.match(text, pos, end)
    if not match:
        return None

    content_weight = weight * float(match.group(3))
    # Keep any whitespace between the colon and the number.
    suffix = text[match.end(2) : match.end(3)]

    def build(parts):
        return Scope(
            kind=ScopeKind.EXPLICIT_WEIGHTED,
            open=match.group(1),
            close=match.group(4),
            own_weight=content_weight,
            weight=content_weight,
            children=parts[0],
            suffix=suffix,
        )

    return _Match(
        end=match.end(),
        build=build,
        spans=((match.start(2), match.end(2), content_weight),),
    )


def _run_scope_matcher(open_char: str, close_char: str, kind: ScopeKind, sign: int):
    def matcher(text, pos, end, weight, config) -> _Match | None:
        if text[pos] != open_char:
            return None
        block = _balanced_run(text, pos, end, open_char, close_char)
        if block is None:
            logger.debug(f"Unbalanced {open_char!r} run at offset {pos}")
            return None

        depth, inner_start, inner_stop = block
        content_weight = weight * _power(config.parenthesis_boost, sign * depth)

        def build(parts):
            return Scope(
                kind=kind,
                open=open_char * depth,
                close=close_char * depth,
                own_weight=content_weight,
                weight=content_weight,
                children=parts[0],
            )

        return _Match(
            end=inner_stop + depth,
            build=build,
            spans=((inner_start, inner_stop, content_weight),),
        )

    return matcher


def _match_control(text, pos, end, weight, config) -> _Match | None:
    char = text[pos]
    if char == "\n":
        return _Match(end=pos + 1, build=lambda _: LineBreak())
    if char == "|":
        return _Match(end=pos + 1, build=lambda _: MixSeparator())
    return None


def _match_literal(text, pos, end, weight, config) -> _Match:
    literal = Literal(text=text[pos], weight=weight)
    return _Match(end=pos + 1, build=lambda _: literal)


# Priority order matters: snippet and random-group delimiters must be seen
# before the generic run matchers, and the numeric and explicit forms are
# more specific than the brace/bracket runs that would otherwise swallow them.
_PRODUCTIONS = (
    _match_snippet,
    _match_random_group,
    _match_numeric_scope,
    _match_explicit_scope,
    _run_scope_matcher("{", "}", ScopeKind.BOOST_BRACE, 1),
    _run_scope_matcher("[", "]", ScopeKind.REDUCE_BRACKET, -1),
    _match_control,
    _match_literal,
)


class _Join:
    """Collects the parsed spans of a match and emits its segment when complete."""

    def __init__(self, match: _Match, out: list[Segment]):
        self.match = match
        self.out = out
        self.parts: list[tuple[Segment, ...]] = []

    def accept(self, part: tuple[Segment, ...]) -> None:
        self.parts.append(part)
        if len(self.parts) == len(self.match.spans):
            self.out.append(self.match.build(tuple(self.parts)))


class _Frame:
    """A region of the source being parsed at one ambient weight."""

    __slots__ = ("pos", "end", "weight", "out", "join")

    def __init__(self, pos: int, end: int, weight: float, join: _Join | None = None):
        self.pos = pos
        self.end = end
        self.weight = weight
        self.out: list[Segment] = []
        self.join = join


def parse(
    text: str,
    config: WeightHighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
    *,
    weight: float = 1.0,
) -> tuple[Segment, ...]:
    """Parse prompt text into a weighted segment tree.

    Args:
        text: Prompt text in the weighting grammar
        config: Highlight configuration (only ``parenthesis_boost`` affects
            parsing)
        weight: Ambient weight of the whole text

    Returns:
        Tuple of segments in source order. Empty for empty input.
    """
    if not text:
        return ()

    root = _Frame(0, len(text), weight)
    stack = [root]
    while stack:
        frame = stack[-1]
        if frame.pos >= frame.end:
            stack.pop()
            if frame.join is not None:
                frame.join.accept(tuple(frame.out))
            continue

        for production in _PRODUCTIONS:
            match = production(text, frame.pos, frame.end, frame.weight, config)
            if match is not None:
                break
        frame.pos = match.end

        if not match.spans:
            frame.out.append(match.build(()))
            continue

        # Push spans in reverse so they are parsed, and joined, in source order.
        join = _Join(match, frame.out)
        for start, stop, span_weight in reversed(match.spans):
            stack.append(_Frame(start, stop, span_weight, join))

    return tuple(root.out)
