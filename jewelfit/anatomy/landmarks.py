# SPDX-License-Identifier: Apache-2.0
"""Landmark sets as supplied by an external face or hand detector.

Points arrive in normalized image coordinates. ``LandmarkSet.to_pixel`` is
the only place they are multiplied out to pixels, and the two coordinate
spaces use distinct point types.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, NamedTuple, Optional, Sequence, Tuple


class LandmarkSetKind(str, Enum):
    """Index space a landmark set is expressed in."""

    FACE = "face"
    HAND = "hand"


# Face mesh: 468 points, 478 with refined iris points.
FACE_MESH_LANDMARKS = 478
# Hand skeleton: wrist plus four joints per finger.
HAND_LANDMARKS = 21

MAX_INDEX = {
    LandmarkSetKind.FACE: FACE_MESH_LANDMARKS,
    LandmarkSetKind.HAND: HAND_LANDMARKS,
}

# Hand skeleton indices
WRIST = 0
INDEX_FINGER_MCP = 5
INDEX_FINGER_PIP = 6
MIDDLE_FINGER_MCP = 9
MIDDLE_FINGER_PIP = 10
RING_FINGER_MCP = 13
RING_FINGER_PIP = 14
PINKY_MCP = 17

# Face mesh indices
LEFT_EARLOBE = (132, 135, 165, 150)
LEFT_JAW = 205
RIGHT_JAW = 425
CHIN = 152


class NormalizedPoint(NamedTuple):
    """Point in [0, 1] image coordinates."""

    x: float
    y: float
    z: Optional[float] = None

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


class PixelPoint(NamedTuple):
    """Point in pixel coordinates of the source image."""

    x: float
    y: float

    def distance_to(self, other: "PixelPoint") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> "PixelPoint":
        return PixelPoint(self.x + dx, self.y + dy)


def _coerce_point(raw: Any) -> Optional[NormalizedPoint]:
    if raw is None:
        return None
    if isinstance(raw, NormalizedPoint):
        return raw
    if isinstance(raw, Mapping):
        z = raw.get("z")
        return NormalizedPoint(float(raw["x"]), float(raw["y"]), None if z is None else float(z))
    values = tuple(raw)
    if len(values) not in (2, 3):
        raise ValueError(f"landmark must have 2 or 3 coordinates, got {len(values)}")
    z = float(values[2]) if len(values) == 3 and values[2] is not None else None
    return NormalizedPoint(float(values[0]), float(values[1]), z)


@dataclass(frozen=True)
class LandmarkSet:
    """Detected landmarks for one face or hand plus the source image size."""

    kind: LandmarkSetKind
    points: Tuple[Optional[NormalizedPoint], ...]
    image_width_px: int
    image_height_px: int

    def __post_init__(self):
        object.__setattr__(self, "kind", LandmarkSetKind(self.kind))
        object.__setattr__(self, "points", tuple(_coerce_point(p) for p in self.points))
        if self.image_width_px <= 0 or self.image_height_px <= 0:
            raise ValueError(
                f"image dimensions must be positive, got {self.image_width_px}x{self.image_height_px}"
            )
        if len(self.points) > MAX_INDEX[self.kind]:
            raise ValueError(
                f"{self.kind.value} landmark set holds at most {MAX_INDEX[self.kind]} points, "
                f"got {len(self.points)}"
            )

    @classmethod
    def from_points(
        cls,
        kind: "LandmarkSetKind | str",
        points: Iterable[Any],
        image_width_px: int,
        image_height_px: int,
    ) -> "LandmarkSet":
        """Build a set from tuples, ``{"x", "y", "z"}`` mappings or ``None`` gaps."""
        return cls(
            kind=LandmarkSetKind(kind),
            points=tuple(points),
            image_width_px=int(image_width_px),
            image_height_px=int(image_height_px),
        )

    @classmethod
    def sparse(
        cls,
        kind: "LandmarkSetKind | str",
        points: Mapping[int, Sequence[float]],
        image_width_px: int,
        image_height_px: int,
    ) -> "LandmarkSet":
        """Build a set from an index → point mapping; other indices stay missing."""
        kind = LandmarkSetKind(kind)
        size = max(points, default=-1) + 1
        dense = [points.get(i) for i in range(size)]
        return cls.from_points(kind, dense, image_width_px, image_height_px)

    def __len__(self) -> int:
        return len(self.points)

    def resolve(self, index: int) -> Optional[NormalizedPoint]:
        """Return the point at ``index`` or ``None`` if absent or non-finite."""
        if not 0 <= index < len(self.points):
            return None
        point = self.points[index]
        if point is None or not point.is_finite():
            return None
        return point

    def has(self, *indices: int) -> bool:
        return all(self.resolve(i) is not None for i in indices)

    def to_pixel(self, index: int) -> Optional[PixelPoint]:
        point = self.resolve(index)
        if point is None:
            return None
        return PixelPoint(point.x * self.image_width_px, point.y * self.image_height_px)
