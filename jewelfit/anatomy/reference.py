# SPDX-License-Identifier: Apache-2.0
"""Reference selection: pick the landmarks that calibrate an accessory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from jewelfit.anatomy.categories import AccessoryCategory
from jewelfit.anatomy.landmarks import LandmarkSet, PixelPoint
from jewelfit.config import EngineConfig, ReferenceCandidate
from jewelfit.errors import DegenerateGeometry, MissingAnatomy
from jewelfit.logging_utils import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ReferenceMeasurement:
    """Pixel-space measurement of the calibration anatomy."""

    category: AccessoryCategory
    pixel_width: float
    center_px: PixelPoint
    source_landmark_indices: Tuple[int, ...]
    anchor_points: Tuple[PixelPoint, ...]
    candidate_rank: int = 0


def _measure(
    landmarks: LandmarkSet,
    category: AccessoryCategory,
    candidate: ReferenceCandidate,
    span_multiplier: float,
    center_offset: float,
    rank: int,
) -> ReferenceMeasurement:
    base = landmarks.to_pixel(candidate.base)
    mid = landmarks.to_pixel(candidate.mid)
    pixel_width = abs(base.x - mid.x) * span_multiplier
    if not pixel_width > 0:
        raise DegenerateGeometry(
            f"{category.value} reference landmarks {candidate.base} and {candidate.mid} "
            f"have no horizontal span"
        )

    if candidate.anchor is not None:
        anchor = landmarks.to_pixel(candidate.anchor)
        center = anchor.offset(dy=center_offset * pixel_width)
    else:
        center = PixelPoint((base.x + mid.x) / 2, (base.y + mid.y) / 2)

    indices = list(candidate.required)
    for index in candidate.region:
        if landmarks.has(index) and index not in indices:
            indices.append(index)
    points = tuple(landmarks.to_pixel(i) for i in indices)

    return ReferenceMeasurement(
        category=category,
        pixel_width=pixel_width,
        center_px=center,
        source_landmark_indices=tuple(indices),
        anchor_points=points,
        candidate_rank=rank,
    )


def select_reference(
    landmarks: LandmarkSet,
    category: AccessoryCategory | str,
    config: EngineConfig,
) -> ReferenceMeasurement:
    """Return the measurement for the first candidate that fully resolves.

    Candidates are tried in priority order so a partially occluded hand
    still yields a finger to measure. Face categories have a single
    candidate and fail outright when it is missing.
    """
    category = AccessoryCategory.parse(category)
    if landmarks.kind != category.landmark_kind:
        raise MissingAnatomy(
            category,
            f"expected {category.landmark_kind.value} landmarks, got {landmarks.kind.value}",
        )

    profile = config.profile(category)
    for rank, candidate in enumerate(profile.candidates):
        if not landmarks.has(*candidate.required):
            continue
        reference = _measure(
            landmarks,
            category,
            candidate,
            profile.span_multiplier,
            profile.center_offset,
            rank,
        )
        LOGGER.debug(
            "reference selected",
            category=category.value,
            indices=list(reference.source_landmark_indices),
            fallback=rank > 0,
            pixel_width=reference.pixel_width,
        )
        return reference

    raise MissingAnatomy(category)
