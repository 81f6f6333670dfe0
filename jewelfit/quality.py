# SPDX-License-Identifier: Apache-2.0
"""Coarse image-quality signals used to tune mask feathering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from jewelfit.planning.feathering import QualityBucket

# Short-side resolution at which an image counts as medium / high quality.
MEDIUM_MIN_SIDE = 512
HIGH_MIN_SIDE = 1024
LOW_CONTRAST = 0.08
DARK_BRIGHTNESS = 0.15
BRIGHT_BRIGHTNESS = 0.9
EDGE_THRESHOLD = 0.08
SATURATING_EDGE_FRACTION = 0.25

_LEVELS = [QualityBucket.LOW, QualityBucket.MEDIUM, QualityBucket.HIGH]


@dataclass(frozen=True)
class ImageQuality:
    width: int
    height: int
    brightness: float
    contrast: float
    complexity: float
    quality: QualityBucket

    def __post_init__(self):
        if not 0.0 <= self.complexity <= 1.0:
            raise ValueError(f"complexity must be within [0, 1], got {self.complexity}")


def _luma(image: Union[np.ndarray, Image.Image, str, Path]) -> np.ndarray:
    if isinstance(image, (str, Path)):
        with Image.open(image) as img:
            return np.asarray(img.convert("L"), dtype=float) / 255.0
    if isinstance(image, Image.Image):
        return np.asarray(image.convert("L"), dtype=float) / 255.0

    arr = np.asarray(image)
    if arr.size == 0:
        raise ValueError("image is empty")
    if arr.ndim == 3:
        if arr.shape[2] not in (1, 3, 4):
            raise ValueError(f"unsupported channel count: {arr.shape[2]}")
        if arr.shape[2] == 1:
            arr = arr[:, :, 0]
        else:
            arr = arr[:, :, :3].astype(float) @ np.array([0.299, 0.587, 0.114])
    elif arr.ndim != 2:
        raise ValueError(f"image must be 2-D or 3-D, got shape {arr.shape}")
    if np.issubdtype(np.asarray(image).dtype, np.integer):
        return arr.astype(float) / 255.0
    return np.clip(arr.astype(float), 0.0, 1.0)


def assess_image(image: Union[np.ndarray, Image.Image, str, Path]) -> ImageQuality:
    """Bucket an image by resolution, exposure and contrast.

    Complexity is the share of pixels on a luminance edge, saturating at
    ``SATURATING_EDGE_FRACTION``. Only statistics are computed; the image is
    never modified.
    """
    luma = _luma(image)
    height, width = luma.shape
    brightness = float(luma.mean())
    contrast = float(luma.std())

    if min(height, width) >= 2:
        gy, gx = np.gradient(luma)
        edges = np.hypot(gx, gy) > EDGE_THRESHOLD
        complexity = float(min(1.0, edges.mean() / SATURATING_EDGE_FRACTION))
    else:
        complexity = 0.0

    short_side = min(height, width)
    level = 2 if short_side >= HIGH_MIN_SIDE else 1 if short_side >= MEDIUM_MIN_SIDE else 0
    if contrast < LOW_CONTRAST:
        level -= 1
    if brightness < DARK_BRIGHTNESS or brightness > BRIGHT_BRIGHTNESS:
        level -= 1

    return ImageQuality(
        width=width,
        height=height,
        brightness=brightness,
        contrast=contrast,
        complexity=complexity,
        quality=_LEVELS[max(level, 0)],
    )
