# SPDX-License-Identifier: Apache-2.0
"""Accessory categories and the landmark index spaces they draw on."""

from __future__ import annotations

from enum import Enum

from jewelfit.anatomy.landmarks import LandmarkSetKind


class AccessoryCategory(str, Enum):
    """Jewelry types the engine can place."""

    EARRING = "earring"
    NECKLACE = "necklace"
    RING = "ring"
    BRACELET = "bracelet"

    @property
    def landmark_kind(self) -> LandmarkSetKind:
        return _KIND_BY_CATEGORY[self]

    @classmethod
    def parse(cls, name: "str | AccessoryCategory") -> "AccessoryCategory":
        """Accept enum members, case-insensitive names and plural aliases."""
        if isinstance(name, cls):
            return name
        normalized = str(name).lower().strip().replace(" ", "_")
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"unknown accessory category: {name!r}") from None


_KIND_BY_CATEGORY = {
    AccessoryCategory.EARRING: LandmarkSetKind.FACE,
    AccessoryCategory.NECKLACE: LandmarkSetKind.FACE,
    AccessoryCategory.RING: LandmarkSetKind.HAND,
    AccessoryCategory.BRACELET: LandmarkSetKind.HAND,
}

_ALIASES = {
    "earrings": "earring",
    "necklaces": "necklace",
    "rings": "ring",
    "bracelets": "bracelet",
}
