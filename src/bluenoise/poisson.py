import logging
import math
from dataclasses import dataclass
from typing import Iterable

from bluenoise.common import Bounds, Vec2, bounds_center, bounds_contains
from bluenoise.grid import SpatialGrid
from bluenoise.policy import (
    ConstantSeparation,
    FunctionSeparation,
    MaskedSeparation,
    MaskFn,
    SeparationFn,
    SeparationPolicy,
    as_policy,
)
from bluenoise.rand import RandomSource, make_rng

logger = logging.getLogger(__name__)

GRID_CELL_EXPONENT = 3  # 8x8 unit cells


def sample(
    policy: SeparationPolicy | float | SeparationFn,
    bounds: Bounds,
    initial_set: Iterable[Vec2] = (),
    k: int = 30,
    rng: RandomSource | int | None = None,
) -> list[Vec2]:
    """
    Poisson disk sampling in 2D by dart throwing (Bridson).

    policy      : minimum separation at a point, plus an admissibility filter;
                  a bare number or callable is wrapped by `as_policy`
    bounds      : (xmin, ymin, xmax, ymax)
    initial_set : points seeding the run, kept verbatim as the output prefix
    k           : candidates spawned per active point
    rng         : RandomSource, or a seed for the default one

    returns: list of (x, y), initial points first, then in acceptance order
    """
    policy = as_policy(policy)
    rng = make_rng(rng)

    if not all(math.isfinite(v) for v in bounds):
        # nothing can be contained, the center would be nan
        logger.debug("bounds %s are not finite, nothing to sample", bounds)
        return [(float(p[0]), float(p[1])) for p in initial_set]

    grid = SpatialGrid(bounds, GRID_CELL_EXPONENT)

    active: list[Vec2] = []
    output: list[Vec2] = []

    def accept(p: Vec2) -> None:
        active.append(p)
        output.append(p)
        grid.insert(p)

    for p in initial_set:
        accept((float(p[0]), float(p[1])))

    if not output:
        center = bounds_center(bounds)
        if policy.is_admissible(center):
            accept(center)

    tried = 0
    while active:
        i = rng.uniform_int(0, len(active) - 1)
        base = active[i]
        # swap-remove, order of the active list is irrelevant
        active[i] = active[-1]
        active.pop()

        dist = policy.local_separation(base)
        if not (dist > 0 and math.isfinite(dist)):
            logger.debug("separation %r at %s, point spawns nothing", dist, base)
            continue

        for _ in range(k):
            tried += 1
            r = dist * (1.0 + rng.uniform_float())
            angle = rng.uniform_float() * 2 * math.pi
            p = (
                base[0] + r * math.cos(angle),
                base[1] + r * math.sin(angle),
            )

            if (
                bounds_contains(bounds, p)
                and policy.is_admissible(p)
                and not grid.has_neighbor_within(p, dist)
            ):
                accept(p)

    logger.debug(
        "poisson disk: %d points, %d candidates, %d unindexed",
        len(output), tried, grid.dropped,
    )
    return output


def poisson_disk_distribution(
    separation: float,
    bounds: Bounds,
    initial_set: Iterable[Vec2] = (),
    k: int = 30,
    rng: RandomSource | int | None = None,
) -> list[Vec2]:
    return sample(ConstantSeparation(separation), bounds, initial_set, k, rng)


def poisson_disk_distribution_fn(
    distance_function: SeparationFn,
    bounds: Bounds,
    initial_set: Iterable[Vec2] = (),
    k: int = 30,
    rng: RandomSource | int | None = None,
) -> list[Vec2]:
    return sample(FunctionSeparation(distance_function), bounds, initial_set, k, rng)


def poisson_disk_distribution_masked(
    distance_function: SeparationFn,
    bounds_function: MaskFn,
    bounds: Bounds,
    initial_set: Iterable[Vec2] = (),
    k: int = 30,
    rng: RandomSource | int | None = None,
) -> list[Vec2]:
    policy = MaskedSeparation(distance_function, bounds_function)
    return sample(policy, bounds, initial_set, k, rng)


@dataclass
class PoissonDiskConfig:
    width: float = 640
    height: float = 480
    origin: tuple[float, float] = (0., 0.)
    separation: float = 30.
    k: int = 30
    seed: int | None = 6

    @property
    def bounds(self) -> Bounds:
        x, y = self.origin
        return x, y, x + self.width, y + self.height


def poisson_disk_from_config(cfg: PoissonDiskConfig, initial_set: Iterable[Vec2] = ()) -> list[Vec2]:
    return poisson_disk_distribution(cfg.separation, cfg.bounds, initial_set, cfg.k, cfg.seed)
