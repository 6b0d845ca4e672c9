import math

from bluenoise.common import Vec2, clamp
from bluenoise.noise import fbm2d
from bluenoise.policy import MaskFn, SeparationFn


def radial_separation(center: Vec2, near: float, far: float, falloff: float) -> SeparationFn:
    """Separation growing linearly from `near` at `center` to `far` at `falloff` away."""
    cx, cy = center

    def fn(p: Vec2) -> float:
        t = clamp(math.hypot(p[0] - cx, p[1] - cy) / falloff, 0.0, 1.0) if falloff > 0 else 1.0
        return near + (far - near) * t

    return fn


def noise_separation(lo: float, hi: float, freq: float = 0.01, octaves: int = 4, seed: int = 0) -> SeparationFn:
    def fn(p: Vec2) -> float:
        n = float(fbm2d(p[0], p[1], octaves=octaves, freq=freq, seed=seed))
        t = clamp(n * 0.7 + 0.5, 0.0, 1.0)
        return lo + (hi - lo) * t

    return fn


def circle_mask(center: Vec2, radius: float) -> MaskFn:
    cx, cy = center
    r2 = radius * radius
    return lambda p: (p[0] - cx) ** 2 + (p[1] - cy) ** 2 <= r2


def ring_mask(center: Vec2, inner: float, outer: float) -> MaskFn:
    cx, cy = center
    lo2, hi2 = inner * inner, outer * outer
    return lambda p: lo2 <= (p[0] - cx) ** 2 + (p[1] - cy) ** 2 <= hi2
