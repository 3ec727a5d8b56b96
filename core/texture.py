import math
from abc import ABC, abstractmethod
from core.math import Vec3
from core.noise import PerlinNoise


class Texture(ABC):
    """교차점 + 법선 -> 기본 색. 기하에는 영향 없음"""

    @abstractmethod
    def color_at(self, point: Vec3, normal: Vec3) -> Vec3:
        pass


class WoodTexture(Texture):
    """노이즈로 흔들린 사인 줄무늬 나뭇결 (나무 상자용)"""

    LIGHT_WOOD = Vec3(0.65, 0.45, 0.25)
    DARK_WOOD = Vec3(0.45, 0.25, 0.1)

    def __init__(self,
                 noise: PerlinNoise,
                 scale=10.0,            # 텍스처 스케일
                 stripe_density=0.3,    # 작을수록 줄무늬가 넓어짐
                 noise_strength=0.3):   # 노이즈 교란 강도
        self.noise = noise
        self.scale = scale
        self.stripe_density = stripe_density
        self.noise_strength = noise_strength

    def project(self, point: Vec3, normal: Vec3):
        """지배적인 법선 축으로 (줄무늬 좌표, 노이즈 u, 노이즈 v) 선택"""
        s = self.scale
        half = s * 0.5
        if abs(normal.y) > 0.9:
            # 윗면/아랫면: XZ 투영, Z 방향 줄무늬
            return point.z * s, point.x * half, point.z * half
        if abs(normal.x) > 0.9:
            # X 측면: YZ 투영, 세로 줄무늬
            return point.y * s, point.y * half, point.z * half
        # Z 측면: XY 투영, 세로 줄무늬
        return point.y * s, point.x * half, point.y * half

    def pattern(self, point: Vec3, normal: Vec3) -> float:
        coord, nu, nv = self.project(point, normal)
        noise_val = self.noise.noise(nu, nv)

        stripe = math.sin(coord * 2.0 * math.pi / self.stripe_density
                          + noise_val * self.noise_strength * 10.0)
        stripe = (stripe + 1.0) * 0.5          # 0~1
        stripe = abs(stripe - 0.5) * 2.0       # 접어서 경계를 날카롭게
        return stripe * stripe

    def color_at(self, point: Vec3, normal: Vec3) -> Vec3:
        return self.LIGHT_WOOD.lerp(self.DARK_WOOD, self.pattern(point, normal))


class FloorStripeTexture(Texture):
    """바닥용 두 톤 줄무늬: X 방향 물결 + Z 방향 띠"""

    LIGHT = Vec3(0.55, 0.35, 0.15)
    DARK = Vec3(0.45, 0.25, 0.1)

    def color_at(self, point: Vec3, normal: Vec3) -> Vec3:
        pattern = math.sin(point.x * 15.0) * 0.5 + 0.5
        # 0 방향으로 잘라낸 정수의 홀짝으로 띠 결정 (음수 좌표도 대칭)
        stripe = abs(int(point.z * 8.0 * 5)) % 2
        base = self.LIGHT if stripe else self.DARK
        return base * (0.8 + pattern * 0.2)
