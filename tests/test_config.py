from __future__ import annotations

import pytest

from jewelfit.anatomy.categories import AccessoryCategory
from jewelfit.config import build_config, default_profiles, load_config
from jewelfit.errors import ConfigurationError


def test_defaults_cover_every_category():
    config = build_config()
    assert set(config.categories) == set(AccessoryCategory)
    assert config.profile("earring").reference_mm == 15.0
    assert config.profile("necklace").reference_mm == 120.0
    assert config.profile("ring").reference_mm == 18.0
    assert config.profile("bracelet").reference_mm == 55.0
    assert [c.base for c in config.profile("ring").candidates] == [13, 9, 5]


def test_profiles_are_frozen():
    config = build_config()
    with pytest.raises(Exception):
        config.profile("ring").reference_mm = 1.0


def test_candidates_and_categories_are_read_only():
    config = build_config()
    with pytest.raises(AttributeError):
        config.profile("ring").candidates.clear()
    with pytest.raises(TypeError):
        config.categories[AccessoryCategory.EARRING] = config.categories[AccessoryCategory.NECKLACE]
    assert config.profile("earring").reference_mm == 15.0
    assert len(config.profile("ring").candidates) == 3


def test_editing_default_profiles_does_not_leak():
    profiles = default_profiles()
    profiles["earring"]["reference_mm"] = 20.0
    assert build_config().profile("earring").reference_mm == 15.0


def test_yaml_overrides_merge_over_defaults(tmp_path):
    path = tmp_path / "jewelfit.yaml"
    path.write_text(
        "categories:\n"
        "  earrings:\n"
        "    reference_mm: 20\n"
        "    feathering:\n"
        "      blur_radius_px: 3\n"
    )
    config = load_config(path)
    earring = config.profile("earring")
    assert earring.reference_mm == 20.0
    assert earring.feathering.blur_radius_px == 3.0
    assert earring.feathering.mid_opacity == default_profiles()["earring"]["feathering"]["mid_opacity"]
    assert config.profile("ring").reference_mm == 18.0


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("categories:\n  ring:\n    span_multiplier: 3.0\n")
    monkeypatch.setenv("JEWELFIT_CONFIG", str(path))
    assert load_config().profile("ring").span_multiplier == 3.0


def test_reference_override_from_environment(monkeypatch):
    monkeypatch.setenv("JEWELFIT_REFERENCE_MM_BRACELET", "60")
    assert load_config().profile("bracelet").reference_mm == 60.0


def test_bad_reference_environment_value(monkeypatch):
    monkeypatch.setenv("JEWELFIT_REFERENCE_MM_RING", "wide")
    with pytest.raises(ConfigurationError):
        load_config()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(tmp_path / "absent.yaml")


def test_unparseable_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("categories: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_config(path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"earring": {"reference_mm": 0}},
        {"necklace": {"reference_mm": -120}},
        {"ring": {"span_multiplier": 0}},
        {"ring": {"bbox_padding_factor": 0.8}},
        {"ring": {"mask_padding_mm": -1}},
        {"ring": {"candidates": []}},
        {"ring": {"candidates": [{"base": 13, "mid": 40}]}},
        {"bracelet": {"feathering": {"mid_opacity": 0.4, "outer_opacity": 0.6}}},
        {"bracelet": {"feathering": {"inner_stop_percent": 90, "mid_stop_percent": 80}}},
        {"anklet": {"reference_mm": 20}},
    ],
)
def test_invalid_profiles_rejected(overrides):
    with pytest.raises(ConfigurationError):
        build_config({"categories": overrides})
