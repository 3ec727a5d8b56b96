"""Tests for procedural wood grain and floor stripes."""

import numpy as np
import pytest

from core.math import Vec3
from core.noise import PerlinNoise
from core.texture import WoodTexture, FloorStripeTexture


@pytest.fixture
def wood():
    return WoodTexture(PerlinNoise(np.random.default_rng(3)))


def _between(color, a, b):
    for c, lo, hi in zip(color, a, b):
        lo, hi = min(lo, hi), max(lo, hi)
        if not (lo - 1e-9 <= c <= hi + 1e-9):
            return False
    return True


class TestWoodTexture:
    @pytest.mark.parametrize("normal", [Vec3(0, 1, 0), Vec3(-1, 0, 0), Vec3(0, 0, 1)])
    def test_color_between_light_and_dark(self, wood, normal, rng):
        for p in rng.uniform(0, 2, size=(50, 3)):
            color = wood.color_at(Vec3(*p), normal)
            assert _between(color, WoodTexture.LIGHT_WOOD, WoodTexture.DARK_WOOD)

    def test_projection_by_dominant_axis(self, wood):
        p = Vec3(0.1, 0.2, 0.3)
        coord, nu, nv = wood.project(p, Vec3(0, 1, 0))
        assert (coord, nu, nv) == pytest.approx((3.0, 0.5, 1.5))
        coord, nu, nv = wood.project(p, Vec3(1, 0, 0))
        assert (coord, nu, nv) == pytest.approx((2.0, 1.0, 1.5))
        coord, nu, nv = wood.project(p, Vec3(0, 0, -1))
        assert (coord, nu, nv) == pytest.approx((2.0, 0.5, 1.0))

    def test_pattern_in_unit_range(self, wood, rng):
        for p in rng.uniform(-1, 1, size=(50, 3)):
            assert 0.0 <= wood.pattern(Vec3(*p), Vec3(0, 0, 1)) <= 1.0

    def test_pattern_without_noise(self):
        class FlatNoise:
            def noise(self, x, y):
                return 0.0

        wood = WoodTexture(FlatNoise())
        # coord = 0 -> sin(0) = 0 -> 0.5 -> 접힘 0 -> 밝은 나무색
        assert wood.pattern(Vec3(0, 0, 0), Vec3(0, 0, 1)) == pytest.approx(0.0)
        assert wood.color_at(Vec3(0, 0, 0), Vec3(0, 0, 1)) == WoodTexture.LIGHT_WOOD
        # sin 최대 -> 1 -> 접힘 1 -> 어두운 나무색
        y = 0.3 / 4 / 10.0
        assert wood.pattern(Vec3(0, y, 0), Vec3(0, 0, 1)) == pytest.approx(1.0)

    def test_varies_along_stripe_axis(self, wood):
        colors = {wood.color_at(Vec3(0.9, y, -0.5), Vec3(0, 0, 1)).to_tuple()
                  for y in np.linspace(0.0, 1.0, 40)}
        assert len(colors) > 10


class TestFloorStripeTexture:
    def test_two_tones(self):
        floor = FloorStripeTexture()
        normal = Vec3(0, 1, 0)
        # x = 0 -> pattern 0.5 -> 배율 0.9
        even = floor.color_at(Vec3(0, 0, 0.0), normal)
        odd = floor.color_at(Vec3(0, 0, 0.03), normal)  # trunc(1.2) = 1
        assert even.to_tuple() == pytest.approx((FloorStripeTexture.DARK * 0.9).to_tuple())
        assert odd.to_tuple() == pytest.approx((FloorStripeTexture.LIGHT * 0.9).to_tuple())

    def test_negative_coordinates_use_same_parity(self):
        floor = FloorStripeTexture()
        normal = Vec3(0, 1, 0)
        assert floor.color_at(Vec3(0, 0, -0.03), normal) == floor.color_at(Vec3(0, 0, 0.03), normal)

    def test_modulation_range(self, rng):
        floor = FloorStripeTexture()
        for x, z in rng.uniform(-1.5, 1.5, size=(50, 2)):
            c = floor.color_at(Vec3(x, 0, z), Vec3(0, 1, 0))
            assert 0.8 * 0.45 - 1e-9 <= c.x <= 0.55 + 1e-9
            assert c.x > c.y > c.z
