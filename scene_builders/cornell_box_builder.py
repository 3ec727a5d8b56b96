import logging
from typing import List, Optional
import numpy as np

from core.math import Vec3
from core.material import Material, ReflectiveMaterial, RefractiveMaterial
from core.geometry import Sphere, Box, BoundedPlane
from core.noise import PerlinNoise
from core.texture import WoodTexture, FloorStripeTexture
from core.scene import Scene, CameraParams

logger = logging.getLogger(__name__)

# 방 크기: x in [-1.5, 1.5], y in [0, 3], z in [-1.5, 1.5] (앞쪽은 열려 있음)
ROOM_HALF = 1.5
ROOM_HEIGHT = 3.0


def wall_material(color: Vec3) -> Material:
    return Material(color=color, ka=0.1, kd=0.8, ks=0.05)


def floor_plane() -> BoundedPlane:
    floor = Material(color=Vec3(0.5, 0.3, 0.15), ka=0.15, kd=0.75, ks=0.15, shininess=20.0)
    return BoundedPlane(
        point=Vec3(0, 0, 0), normal=Vec3(0, 1, 0),
        extent={"x": (-ROOM_HALF, ROOM_HALF), "z": (-ROOM_HALF, ROOM_HALF)},
        material=floor, texture=FloorStripeTexture(), name="floor")


def room_planes() -> List[BoundedPlane]:
    """바닥/천장/좌/우/뒤 벽 5개의 평면 서술자 테이블"""
    h, top = ROOM_HALF, ROOM_HEIGHT
    return [
        floor_plane(),
        # 왼쪽 벽 x = -1.5 (빨강)
        BoundedPlane(Vec3(-h, 0, 0), Vec3(1, 0, 0),
                     {"y": (0.0, top), "z": (-h, h)},
                     wall_material(Vec3(0.75, 0.1, 0.1)), name="left"),
        # 오른쪽 벽 x = 1.5 (초록)
        BoundedPlane(Vec3(h, 0, 0), Vec3(-1, 0, 0),
                     {"y": (0.0, top), "z": (-h, h)},
                     wall_material(Vec3(0.1, 0.75, 0.1)), name="right"),
        # 뒤 벽 z = -1.5 (흰색)
        BoundedPlane(Vec3(0, 0, -h), Vec3(0, 0, 1),
                     {"x": (-h, h), "y": (0.0, top)},
                     wall_material(Vec3(0.85, 0.85, 0.85)), name="back"),
        # 천장 y = 3.0 (흰색)
        BoundedPlane(Vec3(0, top, 0), Vec3(0, -1, 0),
                     {"x": (-h, h), "z": (-h, h)},
                     wall_material(Vec3(0.85, 0.85, 0.85)), name="ceiling"),
    ]


class CornellBoxBuilder:
    """코넬박스: 빨간 거울 구, 유리 구, 거친 금 구, 나뭇결 상자"""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def build_scene(self) -> Scene:
        """완전한 코넬박스 씬을 생성"""
        scene = Scene(planes=room_planes(), rng=self.rng)
        scene.camera = self.create_camera_params()

        materials = self._create_materials()
        self._create_spheres(scene, materials)
        self._create_wood_box(scene, materials)

        logger.debug(f"장면 생성: 구 {len(scene.spheres)}개, 박스 {len(scene.boxes)}개, "
                     f"평면 {len(scene.planes)}개")
        return scene

    def create_camera_params(self) -> CameraParams:
        # 방 앞쪽에서 정면 중앙을 바라봄, 수직 FOV 90도
        return CameraParams(
            lookfrom=Vec3(0, 1.5, 2.5),
            lookat=Vec3(0, 1.5, 0.0),
            vup=Vec3(0, 1, 0),
            vfov=90.0,
        )

    def _create_materials(self) -> dict:
        noise = PerlinNoise(self.rng)
        return {
            # 완전 반사, 확산 없음
            'red_mirror': ReflectiveMaterial(
                color=Vec3(0.9, 0.1, 0.1), ka=0.05, kd=0.0, ks=0.9,
                shininess=100.0, kr=1.0, roughness=0.0
            ),
            # 반사량은 Fresnel 이 결정
            'glass': RefractiveMaterial(
                color=Vec3(0.95, 0.95, 0.95), ka=0.0, kd=0.0, ks=0.1, eta=1.5
            ),
            # 거친 금속: 글로시 반사
            'gold': ReflectiveMaterial(
                color=Vec3(1.0, 0.76, 0.33), ka=0.1, kd=0.05, ks=1.0,
                shininess=200.0, metallic=True, kr=0.9, roughness=0.2
            ),
            # 색은 자리표시자, 나뭇결 텍스처가 덮어씀
            'wood': Material(
                color=Vec3(0.5, 0.3, 0.15), ka=0.1, kd=0.75, ks=0.1, shininess=15.0
            ),
            'wood_texture': WoodTexture(noise),
        }

    def _create_spheres(self, scene: Scene, materials: dict):
        scene.add_sphere(Sphere(Vec3(-1.0, 0.4, 0.5), 0.4, materials['red_mirror']))
        scene.add_sphere(Sphere(Vec3(0.0, 0.4, -0.2), 0.4, materials['glass']))
        scene.add_sphere(Sphere(Vec3(0.85, 0.25, 0.6), 0.25, materials['gold']))

    def _create_wood_box(self, scene: Scene, materials: dict):
        scene.add_box(Box(Vec3(0.5, 0, -1.3), Vec3(1.3, 1.0, -0.5),
                          materials['wood'], texture=materials['wood_texture']))
