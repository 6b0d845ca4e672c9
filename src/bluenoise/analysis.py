import numpy as np
from scipy.spatial import Delaunay, QhullError, cKDTree

from bluenoise.common import Vec2


def as_array(points) -> np.ndarray:
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"expected an (n, 2) point array, got shape {arr.shape}")
    return arr


def nearest_neighbor_distances(points) -> np.ndarray:
    """Distance from each point to its closest other point."""
    arr = as_array(points)
    if len(arr) < 2:
        return np.full(len(arr), np.inf)
    tree = cKDTree(arr)
    d, _ = tree.query(arr, k=2)
    return d[:, 1]


def min_pairwise_distance(points) -> float:
    nn = nearest_neighbor_distances(points)
    return float(nn.min()) if len(nn) else float("inf")


def separation_violations(points, separation: float, tol: float = 1e-9) -> list[tuple[int, int]]:
    """Index pairs (i < j) closer than `separation`."""
    arr = as_array(points)
    if len(arr) < 2:
        return []
    tree = cKDTree(arr)
    pairs = tree.query_pairs(separation - tol, output_type="ndarray")
    out = []
    for i, j in pairs:
        if np.linalg.norm(arr[i] - arr[j]) < separation - tol:
            out.append((int(i), int(j)))
    return sorted(out)


def largest_gap(points) -> float:
    """
    Radius of the biggest empty circle among Delaunay circumcircles.
    Small values mean good coverage; nan when no triangulation exists.
    """
    arr = as_array(points)
    if len(arr) < 3:
        return float("nan")
    try:
        tri = Delaunay(arr)
    except QhullError:
        return float("nan")

    best = 0.0
    for simplex in tri.simplices:
        a, b, c = arr[simplex]
        r = _circumradius(a, b, c)
        if np.isfinite(r) and r > best:
            best = r
    return float(best)


def _circumradius(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> float:
    ab = np.linalg.norm(a - b)
    bc = np.linalg.norm(b - c)
    ca = np.linalg.norm(c - a)
    area2 = abs((b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0]))
    if area2 == 0:
        return float("inf")
    return float(ab * bc * ca / (2.0 * area2))


def describe(points: list[Vec2]) -> dict[str, float]:
    nn = nearest_neighbor_distances(points)
    return {
        "count": float(len(nn)),
        "min_distance": float(nn.min()) if len(nn) else float("inf"),
        "mean_nn_distance": float(nn.mean()) if len(nn) > 1 else float("nan"),
        "largest_gap": largest_gap(points),
    }
