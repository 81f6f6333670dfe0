# SPDX-License-Identifier: Apache-2.0
"""Placement region: padded polygon marking where the accessory goes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from jewelfit.anatomy.categories import AccessoryCategory
from jewelfit.anatomy.landmarks import PixelPoint
from jewelfit.anatomy.reference import ReferenceMeasurement
from jewelfit.config import EngineConfig
from jewelfit.errors import DegenerateGeometry
from jewelfit.planning.scale import pixels_per_mm
from jewelfit.utils.geometry import (
    Rect,
    bounding_box,
    inflate_polygon,
    polygon_area,
    scale_about_center,
)


@dataclass(frozen=True)
class PlacementRegion:
    polygon: Tuple[PixelPoint, ...]
    base_polygon: Tuple[PixelPoint, ...]
    bounding_box: Rect
    padding_mm_equivalent: float
    padding_px: float

    @property
    def area(self) -> float:
        return polygon_area(self.polygon)


def _to_pixel_points(points: np.ndarray) -> Tuple[PixelPoint, ...]:
    return tuple(PixelPoint(float(x), float(y)) for x, y in points)


def _region_points(reference: ReferenceMeasurement, region_drop: float) -> np.ndarray:
    points = [tuple(p) for p in reference.anchor_points]
    if region_drop > 0:
        drop = region_drop * reference.pixel_width
        points += [(p.x, p.y + drop) for p in reference.anchor_points]
    return np.array(points, dtype=float)


def build_region(
    reference: ReferenceMeasurement,
    category: AccessoryCategory | str,
    config: EngineConfig,
    padding_multiplier: float = 1.0,
) -> PlacementRegion:
    """Build the padded placement polygon for one reference measurement.

    The bounding box of the reference landmarks is scaled by the category's
    padding factor, then every corner is pushed out from the centroid by
    the category's mask padding converted from millimetres to pixels.
    """
    category = AccessoryCategory.parse(category)
    profile = config.profile(category)
    if not reference.pixel_width > 0:
        raise DegenerateGeometry("reference pixel width must be positive")
    if padding_multiplier < 0:
        raise ValueError(f"padding_multiplier must be >= 0, got {padding_multiplier}")

    box = bounding_box(_region_points(reference, profile.region_drop))
    box = scale_about_center(box, profile.bbox_padding_factor, min_extent=reference.pixel_width)
    base = box.corners()

    padding_mm = profile.mask_padding_mm * padding_multiplier
    padding_px = padding_mm * pixels_per_mm(reference, category, config)
    polygon = inflate_polygon(base, padding_px)

    area = polygon_area(polygon)
    if not (math.isfinite(area) and area > 0):
        raise DegenerateGeometry(f"placement polygon for {category.value} has zero area")

    return PlacementRegion(
        polygon=_to_pixel_points(polygon),
        base_polygon=_to_pixel_points(base),
        bounding_box=bounding_box(polygon),
        padding_mm_equivalent=padding_mm,
        padding_px=padding_px,
    )
