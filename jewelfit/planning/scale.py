# SPDX-License-Identifier: Apache-2.0
"""Millimetre-to-pixel calibration against a measured anatomical feature."""

from __future__ import annotations

import math
from dataclasses import dataclass

from jewelfit.anatomy.categories import AccessoryCategory
from jewelfit.anatomy.reference import ReferenceMeasurement
from jewelfit.config import EngineConfig
from jewelfit.errors import InvalidAccessoryDimensions


@dataclass(frozen=True)
class AccessoryDimensions:
    """Physical size of the jewelry item."""

    width_mm: float
    height_mm: float

    def validate(self) -> "AccessoryDimensions":
        for value in (self.width_mm, self.height_mm):
            if not (math.isfinite(value) and value > 0):
                raise InvalidAccessoryDimensions(self.width_mm, self.height_mm)
        return self

    @property
    def aspect_ratio(self) -> float:
        return self.height_mm / self.width_mm


@dataclass(frozen=True)
class TargetSize:
    width_px: float
    height_px: float


def pixels_per_mm(
    reference: ReferenceMeasurement,
    category: AccessoryCategory | str,
    config: EngineConfig,
) -> float:
    """Pixels per millimetre implied by the measured reference feature."""
    profile = config.profile(category)
    return reference.pixel_width / profile.reference_mm


def scale(
    dimensions: AccessoryDimensions,
    reference: ReferenceMeasurement,
    category: AccessoryCategory | str,
    config: EngineConfig,
) -> TargetSize:
    """Pixel size of the accessory in the source image.

    The accessory's size relative to the reference anatomy is applied to
    the anatomy's measured pixel width, so the result follows camera
    distance and zoom. Height keeps the accessory's physical aspect ratio.
    """
    dimensions.validate()
    width = dimensions.width_mm * pixels_per_mm(reference, category, config)
    return TargetSize(width_px=width, height_px=width * dimensions.aspect_ratio)
