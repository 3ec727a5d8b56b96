import math
from abc import ABC, abstractmethod
from typing import Optional, Tuple
from core.math import Vec3, Ray
from core.material import Material, HitRecord

# 자기 교차 방지용 오프셋
EPSILON = 0.001
BOX_MAX_DISTANCE = 1000.0

_AXES = ("x", "y", "z")


def _inverse(d: float) -> float:
    # IEEE 나눗셈처럼 0 성분은 부호 있는 무한대로
    if d == 0.0:
        return math.copysign(math.inf, d)
    return 1.0 / d


class Hittable(ABC):
    material: Material
    texture = None

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float, rec: HitRecord) -> bool:
        pass

    def _fill(self, rec: HitRecord, t: float, point: Vec3, normal: Vec3):
        rec.t = t
        rec.point = point
        rec.normal = normal
        rec.material = self.material
        rec.texture = self.texture
        rec.primitive = self


class Sphere(Hittable):
    def __init__(self, center: Vec3, radius: float, material: Material):
        self.center = center
        self.radius = radius
        self.material = material

    def intersect(self, ray: Ray) -> Optional[float]:
        """가까운 양의 근, 그게 EPSILON 이하이면 먼 근. 둘 다 안 되면 None"""
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return None
        sqrt_d = math.sqrt(discriminant)
        t = (-b - sqrt_d) / (2 * a)
        if t > EPSILON:
            return t
        t = (-b + sqrt_d) / (2 * a)
        if t > EPSILON:
            return t
        return None

    def normal_at(self, point: Vec3) -> Vec3:
        return (point - self.center).normalize()

    def hit(self, ray: Ray, t_min: float, t_max: float, rec: HitRecord) -> bool:
        t = self.intersect(ray)
        if t is None or not (t_min < t < t_max):
            return False
        point = ray.point_at_parameter(t)
        self._fill(rec, t, point, self.normal_at(point))
        return True


class Box(Hittable):
    """축 정렬 박스 (AABB). texture가 있으면 선언된 재질 색은 자리표시자일 뿐이다."""

    def __init__(self, min_pt: Vec3, max_pt: Vec3, material: Material, texture=None):
        self.min = min_pt
        self.max = max_pt
        self.material = material
        self.texture = texture

    @property
    def center(self) -> Vec3:
        return (self.min + self.max) * 0.5

    def intersect(self, ray: Ray) -> Optional[Tuple[float, Vec3]]:
        """Slab 방법. (t, 바깥 방향 법선) 또는 None"""
        t_min = -math.inf
        t_max = math.inf
        for axis in _AXES:
            origin = getattr(ray.origin, axis)
            inv_d = _inverse(getattr(ray.direction, axis))
            t0 = (getattr(self.min, axis) - origin) * inv_d
            t1 = (getattr(self.max, axis) - origin) * inv_d
            if t0 > t1:
                t0, t1 = t1, t0
            if t_min > t1 or t0 > t_max:
                return None
            if t0 > t_min:
                t_min = t0
            if t1 < t_max:
                t_max = t1

        t = t_min
        if t <= EPSILON or t > BOX_MAX_DISTANCE:
            return None
        point = ray.point_at_parameter(t)
        return t, self.normal_at(point, ray.direction)

    def normal_at(self, point: Vec3, direction: Vec3) -> Vec3:
        # 교차 면 + 입사 방향 부호로 바깥 법선 결정
        # (min 면은 +방향으로, max 면은 -방향으로 들어올 때만 입사 면)
        for index, axis in enumerate(_AXES):
            p = getattr(point, axis)
            d = getattr(direction, axis)
            if abs(p - getattr(self.min, axis)) < EPSILON and d > 0:
                return _axis_vector(index, -1.0)
            if abs(p - getattr(self.max, axis)) < EPSILON and d < 0:
                return _axis_vector(index, 1.0)
        # 모서리/꼭짓점 스침: 중심 -> 교차점 방향으로 근사 (알려진 근사치)
        return (point - self.center).normalize()

    def hit(self, ray: Ray, t_min: float, t_max: float, rec: HitRecord) -> bool:
        result = self.intersect(ray)
        if result is None:
            return False
        t, normal = result
        if not (t_min < t < t_max):
            return False
        self._fill(rec, t, ray.point_at_parameter(t), normal)
        return True


def _axis_vector(index: int, sign: float) -> Vec3:
    components = [0.0, 0.0, 0.0]
    components[index] = sign
    return Vec3(*components)


class BoundedPlane(Hittable):
    def __init__(self,
                 point: Vec3,          # 평면 위의 한 점
                 normal: Vec3,         # 방 안쪽을 향하는 법선
                 extent: dict,         # 축 이름 -> (min, max), 평면 내 두 축
                 material: Material,
                 texture=None,
                 name: str = "plane"):
        self.point = point
        self.normal = normal.normalize()
        self.extent = dict(extent)
        self.material = material
        self.texture = texture
        self.name = name

    def contains(self, p: Vec3) -> bool:
        for axis, (lo, hi) in self.extent.items():
            value = getattr(p, axis)
            if value < lo or value > hi:
                return False
        return True

    def intersect(self, ray: Ray) -> Optional[float]:
        denom = self.normal.dot(ray.direction)
        if abs(denom) <= EPSILON:
            return None  # 광선과 평면이 평행
        t = (self.point - ray.origin).dot(self.normal) / denom
        if t <= EPSILON:
            return None
        if not self.contains(ray.point_at_parameter(t)):
            return None
        return t

    def hit(self, ray: Ray, t_min: float, t_max: float, rec: HitRecord) -> bool:
        t = self.intersect(ray)
        if t is None or not (t_min < t < t_max):
            return False
        self._fill(rec, t, ray.point_at_parameter(t), self.normal)
        return True

    def __repr__(self):
        return f"BoundedPlane({self.name!r}, point={self.point!r}, normal={self.normal!r})"
