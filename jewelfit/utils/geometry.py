# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in pixel space."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def corners(self) -> np.ndarray:
        """Clockwise corners in image coordinates, starting top-left."""
        return np.array(
            [
                [self.min_x, self.min_y],
                [self.max_x, self.min_y],
                [self.max_x, self.max_y],
                [self.min_x, self.max_y],
            ],
            dtype=float,
        )


def as_points(points) -> np.ndarray:
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"expected an (N, 2) array of points, got shape {pts.shape}")
    return pts


def centroid(points) -> np.ndarray:
    """Mean of the polygon vertices."""
    return as_points(points).mean(axis=0)


def polygon_area(points) -> float:
    """Unsigned area by the shoelace formula."""
    pts = as_points(points)
    x, y = pts[:, 0], pts[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)


def bounding_box(points) -> Rect:
    pts = as_points(points)
    lo = pts.min(axis=0)
    hi = pts.max(axis=0)
    return Rect(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))


def scale_about_center(rect: Rect, factor: float, min_extent: float = 0.0) -> Rect:
    """Grow ``rect`` about its center; zero-extent axes take ``min_extent``."""
    cx, cy = rect.center
    width = rect.width * factor or min_extent
    height = rect.height * factor or min_extent
    return Rect(cx - width / 2, cy - height / 2, cx + width / 2, cy + height / 2)


def inflate_polygon(points, padding: float) -> np.ndarray:
    """Push every vertex radially away from the centroid by ``padding`` pixels.

    The offset is absolute, so each vertex ends up exactly ``padding``
    further from the centroid than it started. A vertex sitting on the
    centroid is pushed along +x.
    """
    if padding < 0:
        raise ValueError(f"padding must be >= 0, got {padding}")
    pts = as_points(points)
    center = pts.mean(axis=0)
    vectors = pts - center
    dist = np.linalg.norm(vectors, axis=1)
    on_center = dist == 0
    if on_center.any():
        vectors[on_center] = [1.0, 0.0]
        dist[on_center] = 1.0
        scale = np.where(on_center, padding, (dist + padding) / dist)
    else:
        scale = (dist + padding) / dist
    return center + vectors * scale[:, None]
