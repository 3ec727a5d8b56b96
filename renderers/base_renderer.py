from abc import ABC, abstractmethod
from typing import List
import numpy as np
from PIL import Image

from core.math import Vec3
from core.scene import Scene, RenderSettings


def to_byte(c: float, gamma: float) -> int:
    """[0,1] 로 클램프 -> 감마 -> 8비트"""
    c = max(0.0, min(c, 1.0))
    return int(min(255.0, (c ** gamma) * 255))


def color_to_rgb(color: Vec3, gamma: float):
    return (to_byte(color.x, gamma),
            to_byte(color.y, gamma),
            to_byte(color.z, gamma))


def new_pixel_buffer(width: int, height: int) -> np.ndarray:
    """행 우선, 위쪽 행부터, RGB 인터리브. 길이 3 * W * H"""
    return np.zeros(3 * width * height, dtype=np.uint8)


def buffer_to_image(buffer: np.ndarray, width: int, height: int) -> Image.Image:
    return Image.frombytes("RGB", (width, height), np.ascontiguousarray(buffer, dtype=np.uint8).tobytes())


class BaseRenderer(ABC):
    """모든 렌더러가 구현해야 하는 베이스 클래스"""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def render(self, scene: Scene, settings: RenderSettings) -> np.ndarray:
        """장면을 렌더링하여 픽셀 버퍼(uint8, 3*W*H)를 반환"""
        pass

    @abstractmethod
    def get_capabilities(self) -> List[str]:
        """이 렌더러가 지원하는 기능들을 반환"""
        pass

    def render_image(self, scene: Scene, settings: RenderSettings) -> Image.Image:
        buffer = self.render(scene, settings)
        return buffer_to_image(buffer, settings.width, settings.height)

    def get_name(self) -> str:
        return self.name

    def supports(self, feature: str) -> bool:
        """특정 기능을 지원하는지 확인"""
        return feature in self.get_capabilities()


class RendererFactory:
    """렌더러 팩토리 클래스"""

    _renderers = {}

    @classmethod
    def register(cls, name: str, renderer_class):
        """새로운 렌더러를 등록"""
        cls._renderers[name] = renderer_class

    @classmethod
    def create(cls, name: str, **kwargs) -> BaseRenderer:
        """등록된 렌더러를 생성"""
        if name not in cls._renderers:
            raise ValueError(f"Unknown renderer: {name}")
        return cls._renderers[name](**kwargs)

    @classmethod
    def list_available(cls) -> List[str]:
        """사용 가능한 렌더러 목록 반환"""
        return list(cls._renderers.keys())
