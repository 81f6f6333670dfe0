# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from jewelfit.anatomy import landmarks as lm
from jewelfit.anatomy.categories import AccessoryCategory
from jewelfit.errors import ConfigurationError

ENV_PREFIX = "JEWELFIT_"


class ReferenceCandidate(BaseModel):
    """Landmark indices spanning the feature measured for calibration."""

    model_config = ConfigDict(frozen=True)

    base: int
    mid: int
    anchor: Optional[int] = None
    region: Tuple[int, ...] = ()

    @property
    def required(self) -> Tuple[int, ...]:
        if self.anchor is None:
            return (self.base, self.mid)
        return (self.base, self.mid, self.anchor)


class FeatheringProfile(BaseModel):
    """Radial gradient used to soften the mask edge."""

    model_config = ConfigDict(frozen=True)

    inner_stop_percent: float
    mid_stop_percent: float
    mid_opacity: float
    outer_opacity: float
    blur_radius_px: float
    radius_percent: float = 50.0

    @model_validator(mode="after")
    def _check_gradient(self) -> "FeatheringProfile":
        if not 0.0 <= self.inner_stop_percent <= self.mid_stop_percent <= 100.0:
            raise ValueError("gradient stops must satisfy 0 <= inner <= mid <= 100")
        if not 1.0 >= self.mid_opacity >= self.outer_opacity >= 0.0:
            raise ValueError("opacities must be non-increasing from inner to outer stop")
        if self.blur_radius_px < 0:
            raise ValueError("blur_radius_px must be >= 0")
        if self.radius_percent <= 0:
            raise ValueError("radius_percent must be > 0")
        return self


class CategoryProfile(BaseModel):
    """Every per-category constant the engine uses."""

    model_config = ConfigDict(frozen=True)

    reference_mm: float
    span_multiplier: float = 1.0
    candidates: Tuple[ReferenceCandidate, ...]
    center_offset: float = 0.0
    region_drop: float = 0.0
    bbox_padding_factor: float = 1.0
    mask_padding_mm: float = 0.0
    feathering: FeatheringProfile

    @field_validator("reference_mm", "span_multiplier")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be > 0")
        return value

    @field_validator("bbox_padding_factor")
    @classmethod
    def _at_least_one(cls, value: float) -> float:
        if value < 1.0:
            raise ValueError("padding factor must be >= 1")
        return value

    @field_validator("mask_padding_mm", "region_drop")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("must be >= 0")
        return value

    @field_validator("candidates")
    @classmethod
    def _not_empty(cls, value: Tuple[ReferenceCandidate, ...]) -> Tuple[ReferenceCandidate, ...]:
        if not value:
            raise ValueError("at least one reference candidate is required")
        return value


class EngineConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: Mapping[AccessoryCategory, CategoryProfile]

    @field_validator("categories", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[AccessoryCategory, CategoryProfile]):
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _all_categories(self) -> "EngineConfig":
        missing = [c.value for c in AccessoryCategory if c not in self.categories]
        if missing:
            raise ValueError(f"missing category profiles: {', '.join(missing)}")
        for category, profile in self.categories.items():
            limit = lm.MAX_INDEX[category.landmark_kind]
            for candidate in profile.candidates:
                indices = candidate.required + tuple(candidate.region)
                if any(not 0 <= i < limit for i in indices):
                    raise ValueError(
                        f"{category.value} candidate {indices} outside the "
                        f"{category.landmark_kind.value} index space"
                    )
        return self

    def profile(self, category: AccessoryCategory) -> CategoryProfile:
        return self.categories[AccessoryCategory.parse(category)]


def default_profiles() -> Dict[str, Dict[str, Any]]:
    """Fresh copy of the built-in per-category profiles."""
    return {
        "earring": {
            "reference_mm": 15.0,  # earlobe width
            "span_multiplier": 1.2,
            "candidates": [
                {"base": 132, "mid": 165, "region": [135, 150]},
            ],
            "bbox_padding_factor": 1.5,
            "mask_padding_mm": 4.0,
            "feathering": {
                "inner_stop_percent": 70.0,
                "mid_stop_percent": 88.0,
                "mid_opacity": 0.92,
                "outer_opacity": 0.65,
                "blur_radius_px": 4.0,
                "radius_percent": 52.0,
            },
        },
        "necklace": {
            "reference_mm": 120.0,  # neck width
            "span_multiplier": 1.0,
            "candidates": [
                {"base": lm.LEFT_JAW, "mid": lm.RIGHT_JAW, "anchor": lm.CHIN},
            ],
            "center_offset": 0.2,
            "region_drop": 0.4,
            "bbox_padding_factor": 1.2,
            "mask_padding_mm": 15.0,
            "feathering": {
                "inner_stop_percent": 55.0,
                "mid_stop_percent": 80.0,
                "mid_opacity": 0.85,
                "outer_opacity": 0.5,
                "blur_radius_px": 6.0,
                "radius_percent": 60.0,
            },
        },
        "ring": {
            "reference_mm": 18.0,  # finger width
            "span_multiplier": 2.5,
            "candidates": [
                {"base": lm.RING_FINGER_MCP, "mid": lm.RING_FINGER_PIP},
                {"base": lm.MIDDLE_FINGER_MCP, "mid": lm.MIDDLE_FINGER_PIP},
                {"base": lm.INDEX_FINGER_MCP, "mid": lm.INDEX_FINGER_PIP},
            ],
            "bbox_padding_factor": 3.0,
            "mask_padding_mm": 2.0,
            "feathering": {
                "inner_stop_percent": 80.0,
                "mid_stop_percent": 92.0,
                "mid_opacity": 0.95,
                "outer_opacity": 0.75,
                "blur_radius_px": 2.0,
                "radius_percent": 50.0,
            },
        },
        "bracelet": {
            "reference_mm": 55.0,  # wrist width
            "span_multiplier": 1.0,
            "candidates": [
                {"base": lm.INDEX_FINGER_MCP, "mid": lm.PINKY_MCP, "anchor": lm.WRIST},
            ],
            "center_offset": 0.0,
            "region_drop": 0.5,
            "bbox_padding_factor": 1.2,
            "mask_padding_mm": 8.0,
            "feathering": {
                "inner_stop_percent": 65.0,
                "mid_stop_percent": 85.0,
                "mid_opacity": 0.9,
                "outer_opacity": 0.6,
                "blur_radius_px": 5.0,
                "radius_percent": 55.0,
            },
        },
    }


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def build_config(overrides: Optional[Dict[str, Any]] = None) -> EngineConfig:
    """Merge per-category overrides over the defaults and validate the result."""
    overrides = overrides or {}
    categories = overrides.get("categories", {}) or {}
    if not isinstance(categories, dict):
        raise ConfigurationError("'categories' must be a mapping")
    profiles = default_profiles()
    for name, values in categories.items():
        try:
            key = AccessoryCategory.parse(name).value
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        if not isinstance(values, dict):
            raise ConfigurationError(f"profile for {key} must be a mapping")
        profiles[key] = _deep_merge(profiles[key], values)
    try:
        return EngineConfig(categories=profiles)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid engine configuration: {exc}") from exc


def _env_overrides() -> Dict[str, Any]:
    categories: Dict[str, Any] = {}
    for category in AccessoryCategory:
        raw = os.getenv(f"{ENV_PREFIX}REFERENCE_MM_{category.value.upper()}")
        if raw is None:
            continue
        try:
            value = float(raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"{ENV_PREFIX}REFERENCE_MM_{category.value.upper()} is not a number: {raw!r}"
            ) from exc
        categories[category.value] = {"reference_mm": value}
    return categories


def load_config(path: Path | None = None) -> EngineConfig:
    """Load the engine configuration.

    Defaults come from ``default_profiles()``. A YAML file (``path`` or
    ``$JEWELFIT_CONFIG``) may override any per-category value, and
    ``JEWELFIT_REFERENCE_MM_<CATEGORY>`` overrides a reference constant.
    """
    load_dotenv()
    env_path = os.getenv(f"{ENV_PREFIX}CONFIG")
    if path is None and env_path:
        path = Path(env_path)

    data: Dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"config file not found: {path}")
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"failed to parse {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping")

    env = _env_overrides()
    if env:
        data = _deep_merge(data, {"categories": env})
    return build_config(data)
