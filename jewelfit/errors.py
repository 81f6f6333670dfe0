# SPDX-License-Identifier: Apache-2.0
"""Error taxonomy for placement requests."""

from __future__ import annotations


class PlacementError(Exception):
    """Base class for every error the engine raises."""
    pass


class MissingAnatomy(PlacementError):
    """No reference candidate resolved from the supplied landmarks."""

    def __init__(self, category, detail: str = ""):
        self.category = category
        message = f"no reference landmarks resolved for {getattr(category, 'value', category)}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DegenerateGeometry(PlacementError):
    """Reference width or region area collapsed to zero."""
    pass


class InvalidAccessoryDimensions(PlacementError):
    """Accessory width or height is not a positive length."""

    def __init__(self, width_mm: float, height_mm: float):
        self.width_mm = width_mm
        self.height_mm = height_mm
        super().__init__(
            f"accessory dimensions must be positive, got {width_mm} x {height_mm} mm"
        )


class ConfigurationError(PlacementError):
    """The engine configuration is invalid."""
    pass
