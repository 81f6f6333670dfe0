# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from typing import Optional

from jewelfit.anatomy.categories import AccessoryCategory
from jewelfit.anatomy.landmarks import LandmarkSet
from jewelfit.anatomy.reference import select_reference
from jewelfit.config import EngineConfig, load_config
from jewelfit.errors import PlacementError
from jewelfit.logging_utils import get_logger
from jewelfit.planning.feathering import feather
from jewelfit.planning.placement import build_region
from jewelfit.planning.scale import AccessoryDimensions, pixels_per_mm, scale
from jewelfit.quality import ImageQuality
from jewelfit.schemas import BoundingBox, FeatheringPayload, PlacementResult

LOGGER = get_logger(__name__)


class PlacementEngine:
    """Turns a landmark set into calibrated size and a feathered placement region.

    The configuration is resolved once and shared read-only, so one engine
    can serve concurrent requests.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config if config is not None else load_config()

    def place(
        self,
        landmarks: LandmarkSet,
        category: AccessoryCategory | str,
        dimensions: AccessoryDimensions,
        quality: Optional[ImageQuality] = None,
    ) -> PlacementResult:
        category = AccessoryCategory.parse(category)
        try:
            dimensions.validate()
            reference = select_reference(landmarks, category, self.config)
            size = scale(dimensions, reference, category, self.config)
            feathering = feather(
                category,
                self.config,
                quality=quality.quality if quality is not None else None,
                complexity=quality.complexity if quality is not None else None,
            )
            region = build_region(
                reference,
                category,
                self.config,
                padding_multiplier=feathering.padding_multiplier,
            )
        except (PlacementError, ValueError) as exc:
            LOGGER.warning(
                "placement failed",
                category=category.value,
                error=type(exc).__name__,
                detail=str(exc),
            )
            raise

        result = PlacementResult(
            category=category,
            target_pixel_width=size.width_px,
            target_pixel_height=size.height_px,
            center_px=tuple(reference.center_px),
            polygon_px=[tuple(p) for p in region.polygon],
            bounding_box=BoundingBox.from_rect(region.bounding_box),
            feathering=FeatheringPayload.from_spec(feathering),
            source_landmark_indices=list(reference.source_landmark_indices),
            pixels_per_mm=pixels_per_mm(reference, category, self.config),
            padding_px=region.padding_px,
        )
        LOGGER.info(
            "placement complete",
            category=category.value,
            target_width=result.target_pixel_width,
            target_height=result.target_pixel_height,
            fallback=reference.candidate_rank > 0,
        )
        return result
