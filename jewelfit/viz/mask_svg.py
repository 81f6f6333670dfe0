# SPDX-License-Identifier: Apache-2.0
"""SVG description of a feathered placement mask for an external renderer."""

from __future__ import annotations

from typing import Iterable, Tuple

from jewelfit.planning.feathering import FeatheringSpec
from jewelfit.planning.placement import PlacementRegion


def _fmt(value: float) -> str:
    """Coordinates are written to 0.01 px; sub-precision negatives print as 0."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _points_attr(points: Iterable[Tuple[float, float]]) -> str:
    return " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in points)


def mask_svg(region: PlacementRegion, feathering: FeatheringSpec, width: int, height: int) -> str:
    """White-on-transparent mask: the region filled with the feathering gradient."""
    if width <= 0 or height <= 0:
        raise ValueError(f"mask size must be positive, got {width}x{height}")
    stops = "\n".join(
        f'      <stop offset="{_fmt(offset)}%" stop-color="white" stop-opacity="{_fmt(opacity)}" />'
        for offset, opacity in feathering.stops()
    )
    blur = ""
    fill_filter = ""
    if feathering.blur_radius_px > 0:
        blur = (
            '    <filter id="maskBlur" x="-50%" y="-50%" width="200%" height="200%">\n'
            f'      <feGaussianBlur stdDeviation="{_fmt(feathering.blur_radius_px)}" />\n'
            "    </filter>\n"
        )
        fill_filter = ' filter="url(#maskBlur)"'
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}">\n'
        "  <defs>\n"
        f'    <radialGradient id="maskGradient" cx="50%" cy="50%" r="{_fmt(feathering.radius_percent)}%">\n'
        f"{stops}\n"
        "    </radialGradient>\n"
        f"{blur}"
        "  </defs>\n"
        f'  <polygon points="{_points_attr(region.polygon)}" fill="url(#maskGradient)"{fill_filter} />\n'
        "</svg>\n"
    )
