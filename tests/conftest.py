"""Shared pytest fixtures for promptweight tests."""

import html
import os
import random
import re
from pathlib import Path

import pytest

from promptweight.core.config import DEFAULT_HIGHLIGHT_CONFIG, WeightHighlightConfig

_TAG_PATTERN = re.compile(r"<[^>]+>")


@pytest.fixture
def highlight_config() -> WeightHighlightConfig:
    """Reference highlight configuration.

    Returns:
        WeightHighlightConfig with the documented defaults
    """
    return DEFAULT_HIGHLIGHT_CONFIG


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove any PROMPTWEIGHT_* variables from the environment.

    Returns:
        The monkeypatch fixture, for further overrides
    """
    for key in list(os.environ):
        if key.upper().startswith("PROMPTWEIGHT_"):
            monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def prompt_file(tmp_path: Path) -> Path:
    """Create a prompt file exercising every production.

    Returns:
        Path to the prompt file
    """
    path = tmp_path / "prompt.txt"
    path.write_text(
        "{{castle}}, [fog:0.6], 1.5::moon::\n||red|blue|| <snippet:style> a|b",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def fuzz_prompts() -> list[str]:
    """Seeded random prompts built from grammar-significant characters.

    Returns:
        List of prompt strings
    """
    rng = random.Random(1234)
    alphabet = list("{}[]()|:<>.-+0123456789ab \n&") + ["::", "||", "<snippet:x>", "{{", "]]"]
    return ["".join(rng.choice(alphabet) for _ in range(rng.randint(0, 40))) for _ in range(400)]


@pytest.fixture
def strip_markup():
    """Return a function that removes tags and decodes entities.

    Returns:
        Callable mapping rendered markup to its visible text
    """

    def _strip(markup: str) -> str:
        return html.unescape(_TAG_PATTERN.sub("", markup))

    return _strip
