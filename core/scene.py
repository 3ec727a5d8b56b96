from typing import List, Optional
from dataclasses import dataclass, field
import numpy as np

from core.math import Vec3, Ray
from core.material import HitRecord
from core.geometry import Sphere, Box, BoundedPlane, EPSILON
from core import shading

# 재귀 깊이 상한: depth > MAX_DEPTH 이면 배경색
MAX_DEPTH = 6
GLOSSY_SAMPLES = 16
ROUGHNESS_THRESHOLD = 0.001


@dataclass
class CameraParams:
    lookfrom: Vec3 = field(default_factory=lambda: Vec3(0, 1.5, 2.5))
    lookat: Vec3 = field(default_factory=lambda: Vec3(0, 1.5, 0.0))
    vup: Vec3 = field(default_factory=lambda: Vec3(0, 1, 0))
    vfov: float = 90.0   # 수직 FOV(deg)


@dataclass
class RenderSettings:
    width: int = 800
    height: int = 600
    gamma: float = 0.454     # 약 1/2.2
    seed: Optional[int] = None
    workers: int = 1
    progress_every: int = 10

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive: {self.width}x{self.height}")
        if self.workers <= 0:
            raise ValueError(f"workers must be positive: {self.workers}")
        if self.progress_every <= 0:
            raise ValueError(f"progress_every must be positive: {self.progress_every}")

    @property
    def aspect(self) -> float:
        return self.width / self.height


class Scene:
    """
    장면: 구/박스/경계 평면을 단독 소유하고 trace(ray, depth) 를 제공한다.
    생성이 끝나면 렌더링 중에는 읽기 전용.
    """

    def __init__(self, planes: Optional[List[BoundedPlane]] = None, rng: np.random.Generator = None):
        self.spheres: List[Sphere] = []
        self.boxes: List[Box] = []
        self.planes: List[BoundedPlane] = list(planes) if planes else []
        self.light_pos = Vec3(0, 2.9, 0)
        self.light_color = Vec3(1.5, 1.5, 1.5)
        self.background = Vec3(0.85, 0.85, 0.85)
        self.camera = CameraParams()
        # trace 호출 시 rng 를 넘기지 않았을 때 쓰는 기본 생성기
        self.rng = rng if rng is not None else np.random.default_rng()

    def add_sphere(self, sphere: Sphere):
        self.spheres.append(sphere)

    def add_box(self, box: Box):
        self.boxes.append(box)

    def add_plane(self, plane: BoundedPlane):
        self.planes.append(plane)

    @property
    def objects(self):
        return [*self.spheres, *self.boxes, *self.planes]

    def nearest_hit(self, ray: Ray, rec: HitRecord) -> bool:
        """모든 프리미티브를 선형 탐색해 가장 가까운 양의 교차를 rec 에 기록"""
        hit_anything = False
        closest_so_far = float('inf')
        for obj in self.objects:
            if obj.hit(ray, 0.0, closest_so_far, rec):
                hit_anything = True
                closest_so_far = rec.t
        return hit_anything

    def in_shadow(self, point: Vec3, normal: Vec3) -> bool:
        """광원 쪽 그림자 광선을 구와 박스에 대해서만 검사"""
        to_light = self.light_pos - point
        limit = to_light.length() - EPSILON
        shadow_ray = Ray(point + normal * EPSILON, to_light)
        for sphere in self.spheres:
            t = sphere.intersect(shadow_ray)
            if t is not None and t < limit:
                return True
        for box in self.boxes:
            result = box.intersect(shadow_ray)
            if result is not None and result[0] < limit:
                return True
        return False

    def trace(self, ray: Ray, depth: int = 0, rng: np.random.Generator = None) -> Vec3:
        """재귀 레이트레이싱: ray 를 따라 보이는 선형 공간 색을 반환"""
        if depth > MAX_DEPTH:
            return self.background
        if rng is None:
            rng = self.rng

        rec = HitRecord()
        if not self.nearest_hit(ray, rec):
            return self.background

        material = rec.material
        # 텍스처는 가장 가까운 교차가 정해진 뒤에 적용
        if rec.texture is not None:
            material = material.with_color(rec.texture.color_at(rec.point, rec.normal))

        # 1) 굴절 재질은 여기서 끝난다
        if material.is_refractive:
            return self._trace_refraction(ray, rec, material, depth, rng)

        # 2) 로컬 조명
        shadowed = self.in_shadow(rec.point, rec.normal)
        local_color = shading.local_illumination(
            material, rec.point, rec.normal,
            self.light_pos, self.light_color, self.camera.lookfrom, shadowed)

        # 3) 반사 (kr 로 혼합)
        if material.kr > 0.0 and depth < MAX_DEPTH:
            reflected = self._trace_reflection(ray, rec, material, depth, rng)
            if material.is_metallic:
                reflected = reflected * material.color
            return local_color * (1.0 - material.kr) + reflected * material.kr

        return local_color

    def _trace_reflection(self, ray, rec, material, depth, rng) -> Vec3:
        reflect_dir = shading.reflect(ray.direction, rec.normal)
        origin = rec.point + rec.normal * EPSILON

        if material.roughness <= ROUGHNESS_THRESHOLD:
            return self.trace(Ray(origin, reflect_dir), depth + 1, rng)

        # Monte Carlo 글로시 반사: 흔든 방향 16개 평균
        total = Vec3(0, 0, 0)
        for _ in range(GLOSSY_SAMPLES):
            direction = shading.perturb_direction(reflect_dir, rec.normal, material.roughness, rng)
            total = total + self.trace(Ray(origin, direction), depth + 1, rng)
        return total * (1.0 / GLOSSY_SAMPLES)

    def _trace_refraction(self, ray, rec, material, depth, rng) -> Vec3:
        n = rec.normal
        cos_i = -ray.direction.dot(n)
        eta = material.eta
        if cos_i > 0:
            # 매질로 들어감
            eta_ratio = 1.0 / eta
        else:
            # 매질에서 나감: 법선 뒤집고 비율 역수
            cos_i = -cos_i
            n = -n
            eta_ratio = eta

        reflect_dir = shading.reflect(ray.direction, n)
        reflect_ray = Ray(rec.point + n * EPSILON, reflect_dir)

        refract_dir = shading.refract(ray.direction, n, eta_ratio, cos_i)
        if refract_dir is None:
            # 전반사
            return self.trace(reflect_ray, depth + 1, rng)

        refract_color = self.trace(Ray(rec.point - n * EPSILON, refract_dir), depth + 1, rng)
        reflect_color = self.trace(reflect_ray, depth + 1, rng)
        fresnel = shading.schlick(eta, cos_i)
        return refract_color * (1.0 - fresnel) + reflect_color * fresnel
