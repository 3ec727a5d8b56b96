import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List
import numpy as np

from core.scene import Scene, RenderSettings
from core.camera import Camera
from renderers.base_renderer import BaseRenderer, RendererFactory, new_pixel_buffer
from renderers.cpu_renderer import render_row, row_seed_sequences, log_elapsed

logger = logging.getLogger(__name__)


def _render_band(scene: Scene, settings: RenderSettings, start: int, end: int, seeds) -> np.ndarray:
    """워커 프로세스: [start, end) 행을 렌더링해 연속된 바이트로 반환"""
    camera = Camera.from_params(scene.camera, settings.aspect)
    rows = [render_row(scene, camera, settings, y, seeds[y - start]) for y in range(start, end)]
    return np.concatenate(rows)


def split_bands(height: int, band_height: int):
    return [(start, min(start + band_height, height)) for start in range(0, height, band_height)]


class ParallelCPURenderer(BaseRenderer):
    """
    행 밴드 단위 멀티프로세스 렌더러.

    광선 하나의 재귀는 항상 한 워커 안에서 끝나고, 밴드마다 쓰는 버퍼 구간이
    겹치지 않으므로 동기화가 필요 없다. 행별 난수 스트림은 CPURenderer 와
    같으므로 같은 시드면 결과 버퍼도 바이트 단위로 같다.
    """

    def __init__(self, band_height: int = 8):
        super().__init__("parallel_cpu_raytracer")
        self.band_height = band_height

    def get_capabilities(self) -> List[str]:
        return [
            "ray_tracing",
            "shadows",
            "reflection",
            "glossy_reflection",
            "refraction",
            "procedural_textures",
            "multiprocessing",
        ]

    def render(self, scene: Scene, settings: RenderSettings) -> np.ndarray:
        start_time = time.time()
        width, height = settings.width, settings.height
        logger.info(f"병렬 CPU 렌더링 시작: {width}x{height}, {settings.workers} workers")

        buffer = new_pixel_buffer(width, height)
        seeds = row_seed_sequences(settings.seed, height)
        bands = split_bands(height, self.band_height)
        row_bytes = 3 * width

        with ProcessPoolExecutor(max_workers=settings.workers) as executor:
            futures = {
                executor.submit(_render_band, scene, settings, start, end, seeds[start:end]): (start, end)
                for start, end in bands
            }
            done_rows = 0
            for future in as_completed(futures):
                start, end = futures[future]
                buffer[start * row_bytes:end * row_bytes] = future.result()
                done_rows += end - start
                logger.info(f"진행: {done_rows * 100 // height}%")

        log_elapsed("병렬 CPU", start_time)
        return buffer


RendererFactory.register("parallel_cpu_raytracer", ParallelCPURenderer)
