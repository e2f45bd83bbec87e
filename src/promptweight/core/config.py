"""Configuration for prompt weight highlighting.

This module defines the style parameters that map an effective prompt
weight onto a display colour. Two classes are provided:

- :class:`WeightHighlightConfig` is the immutable record every render call
  receives explicitly. It is a frozen Pydantic model, so instances are
  hashable and cannot be changed after construction.
- :class:`HighlightSettings` loads the same fields from environment
  variables (``PROMPTWEIGHT_`` prefix) or a ``.env`` file, for callers such
  as the command-line preview that want deployment-level overrides.

There is no global mutable configuration. Callers that do not care about
customisation pass :data:`DEFAULT_HIGHLIGHT_CONFIG`.

Example .env file:
    PROMPTWEIGHT_PARENTHESIS_BOOST=1.05
    PROMPTWEIGHT_MAX_DELTA_FOR_INTENSITY=2
    PROMPTWEIGHT_UP_HUE=0

Usage Example
-------------
    from promptweight.core.config import DEFAULT_HIGHLIGHT_CONFIG, HighlightSettings

    # Reference defaults
    cfg = DEFAULT_HIGHLIGHT_CONFIG

    # Derive a variant
    softer = cfg.model_copy(update={"intensity_exponent": 1.0})

    # Environment-driven
    cfg = HighlightSettings().to_highlight_config()
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WeightHighlightConfig(BaseModel):
    """Immutable style parameters for weight highlighting.

    Attributes
    ----------
    parenthesis_boost : float
        Per-level factor for generic brace/bracket runs. ``{x}`` multiplies
        by ``parenthesis_boost``, ``[x]`` divides by it.
    max_delta_for_intensity : float
        Distance from weight 1 at which colour intensity saturates.
    up_hue, down_hue : float
        Hue angles (degrees) for boosted and reduced weights.
    saturation, saturation_boost : float
        Base saturation and the extra saturation added at full intensity
        (percentages).
    base_lightness, lightness_delta : float
        Base lightness and the amount removed at full intensity
        (percentages).
    intensity_exponent : float
        Curve applied to the normalised delta before it drives the colour.
    neutral_color, colon_color : str
        Colour tokens for the caller's stylesheet. The mapper never reads
        them; they travel with the config so a stylesheet can be generated
        from the same record.
    """

    model_config = ConfigDict(frozen=True)

    parenthesis_boost: float = Field(default=1.1, gt=0)
    max_delta_for_intensity: float = Field(default=3.0, gt=0)
    up_hue: float = 12.0
    down_hue: float = 208.0
    saturation: float = 68.0
    saturation_boost: float = 18.0
    base_lightness: float = 56.0
    lightness_delta: float = 26.0
    intensity_exponent: float = Field(default=0.7, gt=0)
    neutral_color: str = "#6b7280"
    colon_color: str = "#16a34a"


class HighlightSettings(BaseSettings):
    """Environment-backed highlight settings.

    Values are loaded in the following priority order:
    1. Keyword arguments
    2. Environment variables (``PROMPTWEIGHT_*``)
    3. ``.env`` file in the working directory
    4. Defaults (identical to :class:`WeightHighlightConfig`)

    Invalid values raise :class:`pydantic.ValidationError` at construction.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROMPTWEIGHT_",
        case_sensitive=False,
        extra="ignore",
    )

    parenthesis_boost: float = Field(
        default=1.1,
        gt=0,
        description="Weight factor per repeated brace or bracket",
    )
    max_delta_for_intensity: float = Field(
        default=3.0,
        gt=0,
        description="Weight distance from 1 at which colour intensity saturates",
    )
    up_hue: float = Field(default=12.0, description="Hue for boosted text")
    down_hue: float = Field(default=208.0, description="Hue for reduced text")
    saturation: float = Field(default=68.0, description="Base saturation (%)")
    saturation_boost: float = Field(default=18.0, description="Saturation added at full intensity")
    base_lightness: float = Field(default=56.0, description="Base lightness (%)")
    lightness_delta: float = Field(default=26.0, description="Lightness removed at full intensity")
    intensity_exponent: float = Field(
        default=0.7,
        gt=0,
        description="Curve exponent applied to the normalised weight delta",
    )
    neutral_color: str = Field(default="#6b7280", description="Structural markup colour")
    colon_color: str = Field(default="#16a34a", description="Weight suffix colour")

    def to_highlight_config(self) -> WeightHighlightConfig:
        """Freeze the loaded settings into a :class:`WeightHighlightConfig`."""
        return WeightHighlightConfig(**self.model_dump())


# Reference defaults. Immutable, so sharing a single instance is safe.
DEFAULT_HIGHLIGHT_CONFIG = WeightHighlightConfig()
