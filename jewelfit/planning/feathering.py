# SPDX-License-Identifier: Apache-2.0
"""Feathering parameters for softening the placement mask edge."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from jewelfit.anatomy.categories import AccessoryCategory
from jewelfit.config import EngineConfig

COMPLEXITY_PADDING_GAIN = 0.5
COMPLEXITY_OPACITY_LOSS = 0.3


class QualityBucket(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# padding multiplier, extra blur px
QUALITY_ADJUSTMENTS = {
    QualityBucket.LOW: (0.75, 1.0),
    QualityBucket.MEDIUM: (0.9, 0.0),
    QualityBucket.HIGH: (1.0, 0.0),
}


@dataclass(frozen=True)
class FeatheringSpec:
    """Radial-gradient stops and blur an external renderer applies to the mask.

    Opacity is 1.0 from the center to ``inner_stop_percent``, falls to
    ``mid_opacity`` at ``mid_stop_percent`` and to ``outer_opacity`` at the
    gradient radius.
    """

    inner_stop_percent: float
    mid_stop_percent: float
    mid_opacity: float
    outer_opacity: float
    blur_radius_px: float
    radius_percent: float = 50.0
    padding_multiplier: float = 1.0

    def stops(self) -> list[tuple[float, float]]:
        """``(offset_percent, opacity)`` pairs from center to edge."""
        return [
            (0.0, 1.0),
            (self.inner_stop_percent, 1.0),
            (self.mid_stop_percent, self.mid_opacity),
            (100.0, self.outer_opacity),
        ]


def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def feather(
    category: AccessoryCategory | str,
    config: EngineConfig,
    quality: Optional[QualityBucket | str] = None,
    complexity: Optional[float] = None,
) -> FeatheringSpec:
    """Feathering for ``category``, nudged by optional image-quality signals.

    Cluttered images (high ``complexity``) get wider padding and a softer
    outer edge so the seam is harder to see. Low-quality images get less
    padding and a little more blur so compression artifacts at the seam
    are not enlarged.
    """
    profile = config.profile(category).feathering
    padding = 1.0
    blur = profile.blur_radius_px
    mid_opacity = profile.mid_opacity
    outer_opacity = profile.outer_opacity

    if complexity is not None:
        if not 0.0 <= complexity <= 1.0:
            raise ValueError(f"complexity must be within [0, 1], got {complexity}")
        padding *= 1.0 + COMPLEXITY_PADDING_GAIN * complexity
        outer_opacity *= 1.0 - COMPLEXITY_OPACITY_LOSS * complexity

    if quality is not None:
        padding_scale, extra_blur = QUALITY_ADJUSTMENTS[QualityBucket(quality)]
        padding *= padding_scale
        blur += extra_blur

    mid_opacity = _clamp(mid_opacity)
    outer_opacity = _clamp(outer_opacity, hi=mid_opacity)

    return FeatheringSpec(
        inner_stop_percent=profile.inner_stop_percent,
        mid_stop_percent=profile.mid_stop_percent,
        mid_opacity=mid_opacity,
        outer_opacity=outer_opacity,
        blur_radius_px=blur,
        radius_percent=profile.radius_percent,
        padding_multiplier=padding,
    )
