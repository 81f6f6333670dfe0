# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict

from jewelfit.anatomy.categories import AccessoryCategory
from jewelfit.planning.feathering import FeatheringSpec
from jewelfit.utils.geometry import Rect


class FeatheringPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    inner_stop_percent: float
    mid_stop_percent: float
    mid_opacity: float
    outer_opacity: float
    blur_radius_px: float
    radius_percent: float
    padding_multiplier: float

    @classmethod
    def from_spec(cls, spec: FeatheringSpec) -> "FeatheringPayload":
        return cls(
            inner_stop_percent=spec.inner_stop_percent,
            mid_stop_percent=spec.mid_stop_percent,
            mid_opacity=spec.mid_opacity,
            outer_opacity=spec.outer_opacity,
            blur_radius_px=spec.blur_radius_px,
            radius_percent=spec.radius_percent,
            padding_multiplier=spec.padding_multiplier,
        )


class BoundingBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_rect(cls, rect: Rect) -> "BoundingBox":
        return cls(min_x=rect.min_x, min_y=rect.min_y, max_x=rect.max_x, max_y=rect.max_y)


class PlacementResult(BaseModel):
    """Everything an external compositor needs to place one accessory."""

    model_config = ConfigDict(frozen=True)

    category: AccessoryCategory
    target_pixel_width: float
    target_pixel_height: float
    center_px: Tuple[float, float]
    polygon_px: List[Tuple[float, float]]
    bounding_box: BoundingBox
    feathering: FeatheringPayload
    source_landmark_indices: List[int]
    pixels_per_mm: float
    padding_px: float
