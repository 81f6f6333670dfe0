# SPDX-License-Identifier: Apache-2.0
"""Landmark-to-overlay geometry for jewelry try-on."""

from __future__ import annotations

from jewelfit.anatomy.categories import AccessoryCategory
from jewelfit.anatomy.landmarks import LandmarkSet, LandmarkSetKind
from jewelfit.errors import (
    ConfigurationError,
    DegenerateGeometry,
    InvalidAccessoryDimensions,
    MissingAnatomy,
    PlacementError,
)
from jewelfit.pipeline.engine import PlacementEngine
from jewelfit.planning.scale import AccessoryDimensions

__all__: list[str] = [
    "AccessoryCategory",
    "AccessoryDimensions",
    "ConfigurationError",
    "DegenerateGeometry",
    "InvalidAccessoryDimensions",
    "LandmarkSet",
    "LandmarkSetKind",
    "MissingAnatomy",
    "PlacementEngine",
    "PlacementError",
]
__version__ = "0.1.0"
