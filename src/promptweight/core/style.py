"""Map effective prompt weights to display colours."""

import math
from dataclasses import dataclass

from promptweight.core.config import WeightHighlightConfig


def _format_number(value: float) -> str:
    """Format a colour component, dropping the fraction of integral values."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class HslColor:
    """An HSL colour. Hue in degrees, saturation and lightness in percent."""

    hue: float
    saturation: float
    lightness: float

    def __str__(self) -> str:
        return (
            f"hsl({_format_number(self.hue)}, "
            f"{_format_number(self.saturation)}%, "
            f"{_format_number(self.lightness)}%)"
        )


def color_for(weight: float, config: WeightHighlightConfig) -> HslColor | None:
    """Return the highlight colour for a weight, or ``None`` for neutral text.

    Weights of exactly 1 and non-finite weights (from pathological nesting)
    are neutral. Otherwise the distance from 1 is capped at
    ``max_delta_for_intensity``, normalised to ``[0, 1]`` and shaped by
    ``intensity_exponent``. Boosted weights take ``up_hue`` and reduced
    weights ``down_hue``; stronger weights become darker and more
    saturated.

    Args:
        weight: Effective weight of the text being styled
        config: Highlight parameters

    Returns:
        The colour to apply, or None when no colour should be applied
    """
    if not math.isfinite(weight) or weight == 1:
        return None

    delta = min(abs(weight - 1), config.max_delta_for_intensity)
    normalized = min(delta / config.max_delta_for_intensity, 1.0)
    intensity = normalized**config.intensity_exponent

    hue = config.up_hue if weight > 1 else config.down_hue
    lightness = config.base_lightness - intensity * config.lightness_delta
    saturation = config.saturation + intensity * config.saturation_boost
    return HslColor(hue=hue, saturation=saturation, lightness=lightness)
