"""Promptweight - weight-aware highlighting for image-generation prompts."""

__version__ = "0.1.0"

from promptweight.core.config import (
    DEFAULT_HIGHLIGHT_CONFIG,
    HighlightSettings,
    WeightHighlightConfig,
)
from promptweight.core.markup import render
from promptweight.core.parser import parse

__all__ = [
    "DEFAULT_HIGHLIGHT_CONFIG",
    "HighlightSettings",
    "WeightHighlightConfig",
    "parse",
    "render",
]
