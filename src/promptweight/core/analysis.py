"""Read-only analysis helpers over parsed prompts.

These helpers answer questions about a prompt without rendering it: which
snippets it references, how its text is weighted, how deeply its scopes
nest. They complement the highlighted preview in the same way a token
count complements the prompt editor.
"""

import logging
import math
from collections.abc import Iterator, Sequence

from pydantic import BaseModel, Field

from promptweight.core.config import DEFAULT_HIGHLIGHT_CONFIG, WeightHighlightConfig
from promptweight.core.parser import parse
from promptweight.core.segments import (
    LineBreak,
    Literal,
    RandomChoice,
    Scope,
    Segment,
    SnippetRef,
    Visit,
    walk,
)

logger = logging.getLogger(__name__)


class PromptWeightSummary(BaseModel):
    """Structural summary of a weighted prompt.

    Attributes:
        literal_count: Number of literal characters.
        scope_counts: Number of scopes per :class:`ScopeKind` value.
        random_group_count: Number of ``||..||`` groups.
        snippet_names: Referenced snippet names in source order.
        max_depth: Deepest scope nesting (0 for flat text).
        min_weight: Lowest finite literal weight, or None.
        max_weight: Highest finite literal weight, or None.
    """

    literal_count: int = 0
    scope_counts: dict[str, int] = Field(default_factory=dict)
    random_group_count: int = 0
    snippet_names: list[str] = Field(default_factory=list)
    max_depth: int = 0
    min_weight: float | None = None
    max_weight: float | None = None


def iter_leaves(segments: Sequence[Segment]) -> Iterator[Literal]:
    """Yield every literal in source order, including those in random options."""
    for visit, segment in walk(segments):
        if visit is Visit.LEAF and isinstance(segment, Literal):
            yield segment


def weighted_runs(segments: Sequence[Segment]) -> list[tuple[str, float]]:
    """Group consecutive literals of equal weight into ``(text, weight)`` runs.

    Structural delimiters are skipped and do not break a run; a line
    break does.
    """
    runs: list[tuple[str, float]] = []
    current: list[str] = []
    current_weight: float | None = None

    def flush() -> None:
        nonlocal current, current_weight
        if current:
            runs.append(("".join(current), current_weight))
        current = []
        current_weight = None

    for visit, segment in walk(segments):
        if visit is not Visit.LEAF:
            continue
        if isinstance(segment, LineBreak):
            flush()
        elif isinstance(segment, Literal):
            if current and segment.weight != current_weight:
                flush()
            current.append(segment.text)
            current_weight = segment.weight
    flush()
    return runs


def snippet_names(segments: Sequence[Segment]) -> list[str]:
    """List referenced snippet names in source order, duplicates preserved."""
    return [
        segment.name
        for visit, segment in walk(segments)
        if visit is Visit.LEAF and isinstance(segment, SnippetRef)
    ]


def max_depth(segments: Sequence[Segment]) -> int:
    """Return the deepest scope nesting level. Random groups do not count."""
    depth = deepest = 0
    for visit, segment in walk(segments):
        if not isinstance(segment, Scope):
            continue
        if visit is Visit.ENTER:
            depth += 1
            deepest = max(deepest, depth)
        elif visit is Visit.EXIT:
            depth -= 1
    return deepest


def summarize(
    text: str | None, config: WeightHighlightConfig = DEFAULT_HIGHLIGHT_CONFIG
) -> PromptWeightSummary:
    """Parse prompt text and summarise its weighting structure.

    Args:
        text: Prompt text
        config: Highlight configuration (affects brace/bracket weights)

    Returns:
        PromptWeightSummary for the text
    """
    if not text:
        return PromptWeightSummary()

    segments = parse(text, config)
    summary = PromptWeightSummary(max_depth=max_depth(segments))
    finite_weights: list[float] = []

    for visit, segment in walk(segments):
        if visit is not Visit.ENTER and visit is not Visit.LEAF:
            continue
        if isinstance(segment, Literal):
            summary.literal_count += 1
            if math.isfinite(segment.weight):
                finite_weights.append(segment.weight)
        elif isinstance(segment, Scope):
            kind = segment.kind.value
            summary.scope_counts[kind] = summary.scope_counts.get(kind, 0) + 1
        elif isinstance(segment, RandomChoice):
            summary.random_group_count += 1
        elif isinstance(segment, SnippetRef):
            summary.snippet_names.append(segment.name)

    if finite_weights:
        summary.min_weight = min(finite_weights)
        summary.max_weight = max(finite_weights)

    logger.debug(f"Summarised prompt: {summary.literal_count} literals, depth {summary.max_depth}")
    return summary
