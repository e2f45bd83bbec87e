"""Core prompt weighting pipeline.

This module provides the components behind the highlighted prompt preview:

- **WeightHighlightConfig**: Immutable colour/weight parameters
- **HighlightSettings**: Environment-driven defaults (``PROMPTWEIGHT_`` prefix)
- **parse**: Priority-ordered parser producing a weighted segment tree
- **color_for**: Weight to HSL colour mapping
- **render**: Text to highlighted HTML, the main entry point

Architecture Overview
---------------------
The pipeline is a single pass over one input string:

1. **Parser** (parser.py):
   - Recognises snippet references, random groups, numeric and explicit
     weight scopes, brace/bracket runs, newlines and pipes
   - Threads the ambient weight through nested scopes

2. **Style Mapper** (style.py):
   - Pure ``weight -> colour`` function parameterised by the config

3. **Markup Emission** (markup.py):
   - Escapes text and wraps it in coloured or structural spans

Nothing here holds state between calls, so every function is safe to call
concurrently on independent inputs.

Usage Example
-------------
    from promptweight.core import DEFAULT_HIGHLIGHT_CONFIG, render

    html = render("a {{castle}} at [night:0.8]", DEFAULT_HIGHLIGHT_CONFIG)
"""

from promptweight.core.analysis import PromptWeightSummary, snippet_names, summarize, weighted_runs
from promptweight.core.config import (
    DEFAULT_HIGHLIGHT_CONFIG,
    HighlightSettings,
    WeightHighlightConfig,
)
from promptweight.core.markup import emit, render
from promptweight.core.parser import parse
from promptweight.core.style import HslColor, color_for

__all__ = [
    "DEFAULT_HIGHLIGHT_CONFIG",
    "HighlightSettings",
    "HslColor",
    "PromptWeightSummary",
    "WeightHighlightConfig",
    "color_for",
    "emit",
    "parse",
    "render",
    "snippet_names",
    "summarize",
    "weighted_runs",
]
