from __future__ import annotations

import pytest

from jewelfit.anatomy.categories import AccessoryCategory
from jewelfit.planning.feathering import QualityBucket, feather


@pytest.mark.parametrize("category", list(AccessoryCategory))
def test_opacity_never_increases_outward(category, config):
    spec = feather(category, config)
    opacities = [opacity for _, opacity in spec.stops()]
    assert opacities == sorted(opacities, reverse=True)
    offsets = [offset for offset, _ in spec.stops()]
    assert offsets == sorted(offsets)
    assert spec.padding_multiplier == 1.0


def test_necklace_softest_ring_tightest(config):
    specs = {c: feather(c, config) for c in AccessoryCategory}
    necklace = specs[AccessoryCategory.NECKLACE]
    ring = specs[AccessoryCategory.RING]
    for spec in specs.values():
        assert necklace.blur_radius_px >= spec.blur_radius_px >= ring.blur_radius_px
        assert necklace.radius_percent >= spec.radius_percent >= ring.radius_percent
        assert necklace.inner_stop_percent <= spec.inner_stop_percent <= ring.inner_stop_percent


def test_complexity_widens_padding_and_softens_edge(config):
    base = feather("earring", config)
    busy = feather("earring", config, complexity=1.0)
    assert busy.padding_multiplier == pytest.approx(1.5)
    assert busy.outer_opacity == pytest.approx(base.outer_opacity * 0.7)
    assert busy.outer_opacity <= busy.mid_opacity


def test_low_quality_reduces_padding(config):
    low = feather("bracelet", config, quality="low")
    medium = feather("bracelet", config, quality=QualityBucket.MEDIUM)
    high = feather("bracelet", config, quality="high")
    assert low.padding_multiplier < medium.padding_multiplier < high.padding_multiplier
    assert low.blur_radius_px == pytest.approx(high.blur_radius_px + 1.0)


def test_quality_and_complexity_combine(config):
    spec = feather("necklace", config, quality="low", complexity=0.5)
    assert spec.padding_multiplier == pytest.approx(0.75 * 1.25)


@pytest.mark.parametrize("complexity", [-0.1, 1.5])
def test_complexity_out_of_range(config, complexity):
    with pytest.raises(ValueError):
        feather("ring", config, complexity=complexity)


def test_unknown_quality(config):
    with pytest.raises(ValueError):
        feather("ring", config, quality="ultra")
