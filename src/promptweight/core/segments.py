"""Segment tree produced by the prompt parser.

Every segment is a frozen dataclass. A parsed prompt is a tuple of
segments whose structure mirrors the delimiter nesting of the source
text; scopes and random-choice groups own their children directly.

Segment Types
-------------
- :class:`Literal`: one source character at its effective weight
- :class:`Scope`: a delimited region that changes the weight of its content
- :class:`RandomChoice`: a ``||a|b||`` group of alternative options
- :class:`SnippetRef`: an opaque ``<snippet:name>`` reference
- :class:`MixSeparator`: a bare ``|`` outside any random group
- :class:`LineBreak`: a newline

:func:`walk` visits a tree depth-first with an explicit stack, so
arbitrarily deep nesting never hits the interpreter's recursion limit.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ScopeKind(str, Enum):
    """How a scope derives its weight factor."""

    BOOST_BRACE = "boost_brace"  # {word}, {{word}}
    REDUCE_BRACKET = "reduce_bracket"  # [word], [[word]]
    EXPLICIT_WEIGHTED = "explicit_weighted"  # [word:0.8], {word:1.5}
    NUMERIC_PREFIXED = "numeric_prefixed"  # 1.5::word::


@dataclass(frozen=True)
class Literal:
    """A single unit of prompt text carrying its ambient weight."""

    text: str
    weight: float


@dataclass(frozen=True)
class Scope:
    """A weight-modifying region of the prompt.

    ``weight`` is the composed weight applied to ``children``.
    ``own_weight`` colours the scope's own announcement text: the
    ``n::`` prefix of a numeric scope (the declared number, independent of
    context) or the ``:n`` suffix of an explicit scope (the composed
    weight). Brace and bracket runs render their delimiters as structure
    only, so their ``own_weight`` equals ``weight``.
    """

    kind: ScopeKind
    open: str
    close: str
    own_weight: float
    weight: float
    children: tuple["Segment", ...]
    suffix: str = ""


@dataclass(frozen=True)
class RandomChoice:
    """A ``||option|option||`` group. Each option is parsed independently."""

    options: tuple[tuple["Segment", ...], ...]


@dataclass(frozen=True)
class SnippetRef:
    """Reference to a stored snippet. ``source`` is the full tag text."""

    name: str
    source: str


@dataclass(frozen=True)
class MixSeparator:
    """A bare pipe that is not part of a random-choice group."""

    text: str = "|"


@dataclass(frozen=True)
class LineBreak:
    """A newline in the source text."""


Segment = Union[Literal, Scope, RandomChoice, SnippetRef, MixSeparator, LineBreak]


class Visit(Enum):
    """Events produced by :func:`walk`."""

    LEAF = "leaf"
    ENTER = "enter"
    SEPARATOR = "separator"  # between two options of a RandomChoice
    EXIT = "exit"


_DONE = object()


def walk(segments: Sequence[Segment]) -> Iterator[tuple[Visit, Segment]]:
    """Visit a segment tree depth-first in source order.

    Scopes and random-choice groups produce an ``ENTER`` event, their
    content, then an ``EXIT`` event. Consecutive options of a random group
    are separated by a ``SEPARATOR`` event carrying the group. Every other
    segment produces a single ``LEAF`` event.

    Args:
        segments: Parsed segments (typically the output of ``parse``)

    Yields:
        ``(Visit, segment)`` pairs
    """
    stack: list[tuple[Segment | None, Iterator]] = [(None, iter(segments))]
    while stack:
        owner, items = stack[-1]
        item = next(items, _DONE)
        if item is _DONE:
            stack.pop()
            if owner is not None:
                yield Visit.EXIT, owner
            continue

        if isinstance(owner, RandomChoice):
            index, option = item
            if index:
                yield Visit.SEPARATOR, owner
            stack.append((None, iter(option)))
        elif isinstance(item, Scope):
            yield Visit.ENTER, item
            stack.append((item, iter(item.children)))
        elif isinstance(item, RandomChoice):
            yield Visit.ENTER, item
            stack.append((item, enumerate(item.options)))
        else:
            yield Visit.LEAF, item
