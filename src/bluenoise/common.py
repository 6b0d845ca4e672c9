import math
from typing import TypeAlias

Vec2: TypeAlias = tuple[float, float]
GVec2: TypeAlias = tuple[int, int]
Bounds: TypeAlias = tuple[float, float, float, float]  # xmin, ymin, xmax, ymax
Color: TypeAlias = tuple[int, int, int]


def clamp(val, a, b):
    return max(min(val, b), a)


def bounds_from_origin_size(origin: Vec2, size: Vec2) -> Bounds:
    return origin[0], origin[1], origin[0] + size[0], origin[1] + size[1]


def bounds_contains(bounds: Bounds, p: Vec2) -> bool:
    # edges count as inside; NaN coordinates never do
    xmin, ymin, xmax, ymax = bounds
    return xmin <= p[0] <= xmax and ymin <= p[1] <= ymax


def bounds_center(bounds: Bounds) -> Vec2:
    xmin, ymin, xmax, ymax = bounds
    return (xmin + xmax) * 0.5, (ymin + ymax) * 0.5


def bounds_size(bounds: Bounds) -> Vec2:
    xmin, ymin, xmax, ymax = bounds
    return xmax - xmin, ymax - ymin


def pixel_bounds(bounds: Bounds) -> tuple[int, int, int, int]:
    """Smallest integer rectangle covering `bounds`."""
    xmin, ymin, xmax, ymax = bounds
    return math.floor(xmin), math.floor(ymin), math.ceil(xmax), math.ceil(ymax)


def dist2(a: Vec2, b: Vec2) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy
