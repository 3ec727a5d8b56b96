import logging
import time
from typing import List, Optional
import numpy as np

from core.scene import Scene, RenderSettings
from core.camera import Camera
from renderers.base_renderer import BaseRenderer, RendererFactory, new_pixel_buffer, color_to_rgb

logger = logging.getLogger(__name__)


def row_seed_sequences(seed: Optional[int], height: int) -> List[np.random.SeedSequence]:
    """행마다 독립된 난수 스트림. 실행 순서와 무관하게 같은 시드면 같은 결과"""
    return np.random.SeedSequence(seed).spawn(height)


def render_row(scene: Scene, camera: Camera, settings: RenderSettings,
               y: int, seed_seq: np.random.SeedSequence) -> np.ndarray:
    """한 행(y)을 렌더링해 3*W 바이트를 반환"""
    rng = np.random.default_rng(seed_seq)
    width = settings.width
    row = np.empty(3 * width, dtype=np.uint8)
    for x in range(width):
        ray = camera.pixel_ray(x, y, width, settings.height)
        col = scene.trace(ray, 0, rng)
        row[3 * x:3 * x + 3] = color_to_rgb(col, settings.gamma)
    return row


def log_elapsed(name: str, start_time: float):
    elapsed = time.time() - start_time
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    logger.info(f"{name} 렌더링 완료: {minutes}분 {seconds:.2f}초")


class CPURenderer(BaseRenderer):
    """CPU 기반 레이트레이싱 렌더러 (단일 스레드, 래스터 순서)"""

    def __init__(self):
        super().__init__("cpu_raytracer")

    def get_capabilities(self) -> List[str]:
        return [
            "ray_tracing",
            "shadows",
            "reflection",
            "glossy_reflection",
            "refraction",
            "procedural_textures",
        ]

    def render(self, scene: Scene, settings: RenderSettings) -> np.ndarray:
        """메인 렌더링 함수"""
        start_time = time.time()
        width, height = settings.width, settings.height
        logger.info(f"CPU 렌더링 시작: {width}x{height}")

        camera = Camera.from_params(scene.camera, settings.aspect)
        buffer = new_pixel_buffer(width, height)
        seeds = row_seed_sequences(settings.seed, height)

        row_bytes = 3 * width
        for y in range(height):
            buffer[y * row_bytes:(y + 1) * row_bytes] = render_row(scene, camera, settings, y, seeds[y])
            if y % settings.progress_every == 0:
                logger.info(f"진행: {y * 100 // height}%")

        log_elapsed("CPU", start_time)
        return buffer


# 렌더러 등록
RendererFactory.register("cpu_raytracer", CPURenderer)
