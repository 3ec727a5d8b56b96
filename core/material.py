import copy
from core.math import Vec3


class Material:
    def __init__(self,
                 color: Vec3 = Vec3(1, 1, 1),
                 ka=0.1,
                 kd=0.8,
                 ks=0.2,
                 shininess=32.0,
                 metallic=False):
        """
        기본 재질: Ambient + Lambert Diffuse + Phong Specular

        color: Vec3, 기본 색 (텍스처가 있으면 교차 시점에 덮어씀)
        ka: Ambient 계수
        kd: 확산 Lambertian 계수
        ks: Phong 스페큘러 계수
        shininess: Phong 지수
        metallic: 금속이면 확산을 줄이고 하이라이트를 재질색으로 물들임
        """
        self.color = color
        self.ka = ka
        self.kd = kd
        self.ks = ks
        self.shininess = shininess
        self.is_metallic = metallic

    # 반사/굴절 분기에서 쓰는 값들. 해당하지 않는 변형은 중립값을 돌려준다.
    @property
    def kr(self) -> float:
        return 0.0

    @property
    def roughness(self) -> float:
        return 0.0

    @property
    def eta(self) -> float:
        return 1.0

    @property
    def is_refractive(self) -> bool:
        return False

    def with_color(self, color: Vec3) -> "Material":
        """색만 바꾼 사본을 반환 (원본은 변경하지 않음)"""
        clone = copy.copy(self)
        clone.color = color
        return clone

    def __repr__(self):
        return (f"{type(self).__name__}(color={self.color!r}, ka={self.ka}, "
                f"kd={self.kd}, ks={self.ks}, shininess={self.shininess})")


class ReflectiveMaterial(Material):
    def __init__(self,
                 color: Vec3 = Vec3(1, 1, 1),
                 ka=0.1,
                 kd=0.8,
                 ks=0.2,
                 shininess=32.0,
                 metallic=False,
                 kr=1.0,
                 roughness=0.0):
        """
        kr: 반사 강도 (0~1), 로컬 조명과 kr 비율로 혼합
        roughness: 0이면 완전 거울, 0보다 크면 Monte Carlo 글로시 반사
        """
        super().__init__(color, ka, kd, ks, shininess, metallic)
        self._kr = kr
        self._roughness = min(1.0, max(0.0, roughness))

    @property
    def kr(self) -> float:
        return self._kr

    @property
    def roughness(self) -> float:
        return self._roughness


class RefractiveMaterial(Material):
    def __init__(self,
                 color: Vec3 = Vec3(1, 1, 1),
                 ka=0.0,
                 kd=0.0,
                 ks=0.1,
                 shininess=32.0,
                 eta=1.5):
        """
        eta: 굴절률 (Index of Refraction). 반사량은 Fresnel이 결정하므로 kr 없음.
        """
        super().__init__(color, ka, kd, ks, shininess, metallic=False)
        self._eta = eta

    @property
    def eta(self) -> float:
        return self._eta

    @property
    def is_refractive(self) -> bool:
        return True


class HitRecord:
    def __init__(self):
        self.t = float('inf')
        self.point = None
        self.normal = None
        self.material = None
        self.texture = None
        self.primitive = None
