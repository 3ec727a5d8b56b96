"""
로컬 조명(Ambient + Lambert + Phong)과 반사/굴절 보조 함수들.

Scene.trace 가 재귀 흐름을 담당하고, 여기 함수들은 한 교차점에서의
계산만 한다. 모두 순수 함수라 병렬 렌더러에서도 그대로 쓸 수 있다.
"""
import math
from typing import Optional
import numpy as np

from core.math import Vec3
from core.material import Material

# 거리 감쇠 1 / (1 + k * d^2)
LIGHT_ATTENUATION_K = 0.05
# 금속은 확산 기여를 이 비율로 줄인다
METAL_DIFFUSE_FACTOR = 0.1
# 그림자 안에서는 ambient 만, 절반 세기
SHADOW_AMBIENT_FACTOR = 0.5


def attenuation(distance: float) -> float:
    return 1.0 / (1.0 + LIGHT_ATTENUATION_K * distance * distance)


def local_illumination(material: Material,
                       point: Vec3,
                       normal: Vec3,
                       light_pos: Vec3,
                       light_color: Vec3,
                       view_pos: Vec3,
                       in_shadow: bool) -> Vec3:
    """점광원 하나에 대한 Ambient + Diffuse + Specular"""
    color = material.color
    if in_shadow:
        return color * (material.ka * SHADOW_AMBIENT_FACTOR)

    to_light = light_pos - point
    light_dist = to_light.length()
    light_dir = to_light.normalize()
    att = attenuation(light_dist)

    # 1) Ambient
    result = color * material.ka

    # 2) Diffuse (Lambert)
    diff = max(0.0, normal.dot(light_dir))
    diffuse = (color * light_color) * (material.kd * diff * att)
    if material.is_metallic:
        diffuse = diffuse * METAL_DIFFUSE_FACTOR
    result = result + diffuse

    # 3) Specular (Phong) - 금속은 재질색, 비금속은 광원색 하이라이트
    view_dir = (view_pos - point).normalize()
    reflect_dir = (normal * (2 * normal.dot(light_dir)) - light_dir).normalize()
    spec = max(0.0, view_dir.dot(reflect_dir)) ** material.shininess
    highlight = color if material.is_metallic else light_color
    result = result + highlight * (material.ks * spec * att)
    return result


def reflect(direction: Vec3, normal: Vec3) -> Vec3:
    return direction.reflect(normal).normalize()


def refract(direction: Vec3, normal: Vec3, eta_ratio: float, cos_i: float) -> Optional[Vec3]:
    """
    Snell 굴절 방향. normal 은 입사 쪽을 향해야 하고 cos_i = -dot(direction, normal).
    전반사(판별식 음수)면 None.
    """
    sin_t2 = eta_ratio * eta_ratio * (1.0 - cos_i * cos_i)
    if sin_t2 >= 1.0:
        return None
    cos_t = math.sqrt(1.0 - sin_t2)
    return (direction * eta_ratio + normal * (eta_ratio * cos_i - cos_t)).normalize()


def schlick(eta: float, cos_i: float) -> float:
    """Schlick Fresnel 근사: R0 + (1 - R0)(1 - cos)^5"""
    r0 = ((eta - 1) / (eta + 1)) ** 2
    return r0 + (1 - r0) * (1 - cos_i) ** 5


def random_unit_vector(rng: np.random.Generator) -> Vec3:
    r1, r2, r3 = rng.uniform(-1.0, 1.0, 3)
    return Vec3(r1, r2, r3).normalize()


def perturb_direction(direction: Vec3,
                      normal: Vec3,
                      roughness: float,
                      rng: np.random.Generator) -> Vec3:
    """이상 반사 방향 + roughness 배율의 랜덤 단위 벡터. 표면 뒤로 넘어가면 원래 방향"""
    perturbed = (direction + random_unit_vector(rng) * roughness).normalize()
    if perturbed.dot(normal) < 0:
        return direction
    return perturbed
