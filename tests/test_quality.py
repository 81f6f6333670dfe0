from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from jewelfit.planning.feathering import QualityBucket
from jewelfit.quality import ImageQuality, assess_image


def _checkerboard(size: int, square: int = 8) -> np.ndarray:
    tiles = (np.indices((size, size)) // square).sum(axis=0) % 2
    return (tiles * 200 + 28).astype(np.uint8)


def test_flat_image_is_low_quality():
    image = np.full((600, 600, 3), 128, dtype=np.uint8)
    quality = assess_image(image)
    assert quality.contrast == pytest.approx(0.0)
    assert quality.complexity == 0.0
    assert quality.quality is QualityBucket.LOW


def test_large_busy_image_is_high_quality():
    quality = assess_image(_checkerboard(1200))
    assert quality.width == 1200
    assert quality.height == 1200
    assert quality.contrast > 0.3
    assert quality.complexity == pytest.approx(1.0)
    assert quality.quality is QualityBucket.HIGH


def test_mid_resolution_is_medium():
    quality = assess_image(_checkerboard(700))
    assert quality.quality is QualityBucket.MEDIUM


def test_dark_image_drops_a_level():
    image = (_checkerboard(1200).astype(float) * 0.1).astype(np.uint8)
    quality = assess_image(image)
    assert quality.brightness < 0.15
    assert quality.quality is not QualityBucket.HIGH


def test_float_and_pil_inputs(tmp_path):
    board = _checkerboard(64)
    as_float = assess_image(board.astype(float) / 255.0)
    as_pil = assess_image(Image.fromarray(board))
    path = tmp_path / "board.png"
    Image.fromarray(board).save(path)
    from_file = assess_image(path)
    assert as_float.brightness == pytest.approx(as_pil.brightness, abs=1e-6)
    assert from_file.contrast == pytest.approx(as_pil.contrast, abs=1e-6)
    assert from_file.quality is QualityBucket.LOW


@pytest.mark.parametrize(
    "image",
    [np.zeros((0, 0)), np.zeros((4, 4, 2)), np.zeros((2, 2, 2, 2))],
)
def test_rejects_bad_arrays(image):
    with pytest.raises(ValueError):
        assess_image(image)


@pytest.mark.parametrize("complexity", [-0.1, 1.5, float("nan")])
def test_image_quality_rejects_out_of_range_complexity(complexity):
    with pytest.raises(ValueError, match="complexity"):
        ImageQuality(
            width=100, height=100, brightness=0.5, contrast=0.2,
            complexity=complexity, quality=QualityBucket.MEDIUM,
        )
