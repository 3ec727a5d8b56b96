import math
import numpy as np


def fade(t: float) -> float:
    """Perlin 5차 fade 곡선: 6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6 - 15) + 10)


def interpolate(a: float, b: float, t: float) -> float:
    return (1 - t) * a + t * b


def grad(hash_value: int, x: float, y: float) -> float:
    # 하위 3비트로 8개의 고정 방향 중 하나 선택
    h = hash_value & 0x7
    if h == 0:
        return x + y
    if h == 1:
        return -x + y
    if h == 2:
        return x - y
    if h == 3:
        return -x - y
    if h == 4:
        return x
    if h == 5:
        return -x
    if h == 6:
        return y
    return -y


class PerlinNoise:
    """
    치환 테이블 기반 2D 그래디언트 노이즈.

    perm[0:256]은 0..255의 셔플, perm[256:512]는 그 복사본이라
    모듈러 연산 없이 인덱싱할 수 있다. 생성 후에는 읽기 전용.
    """

    TABLE_SIZE = 256

    def __init__(self, rng: np.random.Generator = None):
        if rng is None:
            rng = np.random.default_rng()
        base = rng.permutation(self.TABLE_SIZE)
        perm = np.concatenate([base, base]).astype(np.int64)
        perm.setflags(write=False)
        self.perm = perm
        # 내부 조회용 파이썬 리스트 (numpy 스칼라 인덱싱보다 빠름)
        self._p = perm.tolist()

    def noise(self, x: float, y: float) -> float:
        p = self._p
        fx = math.floor(x)
        fy = math.floor(y)
        X = int(fx) & 255
        Y = int(fy) & 255

        x -= fx
        y -= fy

        u = fade(x)
        v = fade(y)

        A = p[X] + Y
        B = p[X + 1] + Y

        # X 방향 보간 후 Y 방향 보간
        return interpolate(
            interpolate(grad(p[A], x, y), grad(p[B], x - 1, y), u),
            interpolate(grad(p[A + 1], x, y - 1), grad(p[B + 1], x - 1, y - 1), u),
            v
        )

    __call__ = noise
