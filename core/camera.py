import math
from core.math import Vec3, Ray


class Camera:
    def __init__(self,
                 lookfrom: Vec3,
                 lookat: Vec3,
                 vup: Vec3,
                 vfov: float,        # 수직 FOV(deg)
                 aspect: float):     # 가로/세로 비율
        self.origin = lookfrom

        theta = math.radians(vfov)
        self.half_height = math.tan(theta / 2)
        self.half_width = aspect * self.half_height

        # 정규 직교 기저: forward, right = forward x up, up = right x forward
        self.forward = (lookat - lookfrom).normalize()
        self.right = self.forward.cross(vup).normalize()
        self.up = self.right.cross(self.forward).normalize()

        self.lower_left_corner = (self.origin + self.forward
                                  - self.right * self.half_width
                                  - self.up * self.half_height)
        self.horizontal = self.right * (2 * self.half_width)
        self.vertical = self.up * (2 * self.half_height)

    @classmethod
    def from_params(cls, params, aspect: float) -> "Camera":
        return cls(params.lookfrom, params.lookat, params.vup, params.vfov, aspect)

    def get_ray(self, s: float, t: float) -> Ray:
        """s, t in [0, 1], (0, 0)이 좌하단"""
        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     self.origin)
        return Ray(self.origin, direction)

    def pixel_ray(self, x: int, y: int, width: int, height: int) -> Ray:
        """픽셀 (x, y) 의 주 광선. y = 0 이 이미지 맨 위 (Y 뒤집기)"""
        u = (2.0 * x / width - 1.0) * self.half_width
        v = (1.0 - 2.0 * y / height) * self.half_height
        direction = self.forward + self.right * u + self.up * v
        return Ray(self.origin, direction)
