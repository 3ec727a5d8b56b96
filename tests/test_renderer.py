"""Tests for the renderers and the pixel buffer contract."""

import numpy as np
import pytest
from PIL import Image

from core.math import Vec3, Ray
from core.scene import Scene, CameraParams, RenderSettings
from core.shading import local_illumination
from core.texture import FloorStripeTexture
from renderers.base_renderer import (RendererFactory, BaseRenderer, to_byte, color_to_rgb,
                                     buffer_to_image, new_pixel_buffer)
from renderers.cpu_renderer import CPURenderer, row_seed_sequences
from renderers.parallel_renderer import ParallelCPURenderer, split_bands
from scene_builders.cornell_box_builder import CornellBoxBuilder, floor_plane


class TestGamma:
    def test_black_and_white(self):
        assert to_byte(0.0, 0.454) == 0
        assert to_byte(1.0, 0.454) == 255

    def test_clamps(self):
        assert to_byte(-3.0, 0.454) == 0
        assert to_byte(7.5, 0.454) == 255

    def test_gamma_brightens_midtones(self):
        assert to_byte(0.5, 0.454) > to_byte(0.5, 1.0)

    def test_color_to_rgb(self):
        assert color_to_rgb(Vec3(0, 1, 2), 0.454) == (0, 255, 255)


class TestPixelBuffer:
    def test_new_buffer(self):
        buf = new_pixel_buffer(4, 3)
        assert buf.dtype == np.uint8
        assert buf.shape == (36,)

    def test_buffer_to_image_is_row_major_top_first(self):
        buf = new_pixel_buffer(2, 2)
        buf[0:3] = (255, 0, 0)      # 맨 위 왼쪽
        buf[9:12] = (0, 0, 255)     # 맨 아래 오른쪽
        image = buffer_to_image(buf, 2, 2)
        assert image.size == (2, 2)
        assert image.getpixel((0, 0)) == (255, 0, 0)
        assert image.getpixel((1, 1)) == (0, 0, 255)


class TestFactory:
    def test_registered_renderers(self):
        available = RendererFactory.list_available()
        assert "cpu_raytracer" in available
        assert "parallel_cpu_raytracer" in available

    def test_create(self):
        renderer = RendererFactory.create("cpu_raytracer")
        assert isinstance(renderer, BaseRenderer)
        assert renderer.get_name() == "cpu_raytracer"
        assert renderer.supports("refraction")
        assert not renderer.supports("bvh_acceleration")

    def test_unknown_renderer(self):
        with pytest.raises(ValueError):
            RendererFactory.create("opengl")


class TestSettings:
    @pytest.mark.parametrize("kwargs", [
        {"width": 0}, {"height": -1}, {"workers": 0}, {"progress_every": 0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            RenderSettings(**kwargs)

    def test_aspect(self):
        assert RenderSettings(width=800, height=600).aspect == pytest.approx(4 / 3)


def floor_only_scene():
    scene = Scene(planes=[floor_plane()], rng=np.random.default_rng(0))
    # 바닥을 똑바로 내려다보는 카메라
    scene.camera = CameraParams(lookfrom=Vec3(0, 2, 0), lookat=Vec3(0, 0, 0), vup=Vec3(0, 0, -1), vfov=90.0)
    return scene


class TestCPURenderer:
    def test_buffer_contract(self, tiny_settings):
        scene = CornellBoxBuilder(seed=1).build_scene()
        buf = CPURenderer().render(scene, tiny_settings)
        assert buf.dtype == np.uint8
        assert buf.shape == (3 * tiny_settings.width * tiny_settings.height,)

    def test_floor_only_center_pixel(self):
        settings = RenderSettings(width=8, height=8, seed=0)
        scene = floor_only_scene()
        buf = CPURenderer().render(scene, settings)

        center = (4 * 8 + 4) * 3
        pixel = tuple(int(v) for v in buf[center:center + 3])
        background = color_to_rgb(scene.background, settings.gamma)
        assert pixel != background

        floor = scene.planes[0]
        base = FloorStripeTexture().color_at(Vec3(0, 0, 0), Vec3(0, 1, 0))
        expected = local_illumination(floor.material.with_color(base), Vec3(0, 0, 0), Vec3(0, 1, 0),
                                      scene.light_pos, scene.light_color, scene.camera.lookfrom, False)
        assert pixel == color_to_rgb(expected, settings.gamma)
        # 바닥 나무색: R > G > B
        assert pixel[0] > pixel[1] > pixel[2]

    def test_floor_only_corners_see_background(self):
        settings = RenderSettings(width=8, height=8, seed=0)
        scene = floor_only_scene()
        scene.camera = CameraParams(lookfrom=Vec3(0, 20, 0), lookat=Vec3(0, 0, 0),
                                    vup=Vec3(0, 0, -1), vfov=90.0)
        buf = CPURenderer().render(scene, settings)
        background = color_to_rgb(scene.background, settings.gamma)
        assert tuple(int(v) for v in buf[0:3]) == background

    def test_same_seed_same_image(self, tiny_settings):
        scene = CornellBoxBuilder(seed=5).build_scene()
        a = CPURenderer().render(scene, tiny_settings)
        b = CPURenderer().render(scene, tiny_settings)
        assert np.array_equal(a, b)

    def test_render_image(self, tiny_settings):
        scene = floor_only_scene()
        image = CPURenderer().render_image(scene, tiny_settings)
        assert isinstance(image, Image.Image)
        assert image.size == (tiny_settings.width, tiny_settings.height)

    def test_progress_is_logged(self, tiny_settings, caplog):
        caplog.set_level("INFO", logger="renderers")
        CPURenderer().render(floor_only_scene(), tiny_settings)
        messages = [r.getMessage() for r in caplog.records]
        assert any("진행" in m for m in messages)
        assert any("완료" in m for m in messages)


class TestParallelRenderer:
    def test_split_bands(self):
        assert split_bands(10, 4) == [(0, 4), (4, 8), (8, 10)]

    def test_row_streams_are_independent(self):
        seeds = row_seed_sequences(3, 4)
        draws = [np.random.default_rng(s).random() for s in seeds]
        assert len(set(draws)) == 4

    @pytest.mark.slow
    def test_matches_serial_renderer(self):
        settings = RenderSettings(width=12, height=9, seed=11, workers=2)
        scene = CornellBoxBuilder(seed=11).build_scene()
        serial = CPURenderer().render(scene, settings)
        parallel = ParallelCPURenderer(band_height=2).render(scene, settings)
        assert np.array_equal(serial, parallel)

    def test_primary_ray_trace_is_deterministic_given_stream(self):
        scene = CornellBoxBuilder(seed=2).build_scene()
        ray = Ray(Vec3(0, 1.5, 2.5), Vec3(0.85, 0.25, 0.6) - Vec3(0, 1.5, 2.5))
        a = scene.trace(ray, 0, np.random.default_rng(9))
        b = scene.trace(ray, 0, np.random.default_rng(9))
        assert a == b
