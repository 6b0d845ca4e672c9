import logging
import random
from dataclasses import dataclass
from enum import IntEnum, auto

import pygame

from bluenoise.analysis import describe
from bluenoise.camera import DrawLayer, RenderContext, draw_bounds, draw_points
from bluenoise.common import Bounds, Vec2, bounds_center
from bluenoise.density import noise_separation, radial_separation, ring_mask
from bluenoise.poisson import (
    GRID_CELL_EXPONENT,
    poisson_disk_distribution,
    poisson_disk_distribution_fn,
    poisson_disk_distribution_masked,
)
from bluenoise.rand import PyRandom

logger = logging.getLogger(__name__)

COLOR_POINT = (235, 235, 235)
COLOR_SEED = (255, 200, 0)
COLOR_WORLD_EDGE = (150, 0, 0)
COLOR_GRID = (40, 40, 40)
COLOR_DISK = (60, 90, 140)


class SamplingMode(IntEnum):
    CONSTANT = 0
    FUNCTION = auto()
    MASKED = auto()


@dataclass
class StippleWorldConfig:
    width: int = 800
    height: int = 600
    tile_size: float = float(1 << GRID_CELL_EXPONENT)
    seed: int = 6
    mode: SamplingMode = SamplingMode.CONSTANT
    separation: float = 12.
    min_separation: float = 6.
    max_separation: float = 30.
    noise_freq: float = 0.004
    k: int = 30
    n_initial: int = 0


class StippleWorld:
    def __init__(self, cfg: StippleWorldConfig | None = None):
        self.cfg = cfg if cfg is not None else StippleWorldConfig()
        self.points: list[Vec2] = []
        self.initial: list[Vec2] = []
        self.stats: dict[str, float] = {}
        self._regenerate()

    @property
    def bounds(self) -> Bounds:
        return 0., 0., float(self.cfg.width), float(self.cfg.height)

    def get_layers(self) -> list[DrawLayer]:
        return [
            DrawLayer(z=5, label="disks", draw=self._draw_disks),
            DrawLayer(z=10, label="border", draw=self._draw_world_border),
            DrawLayer(z=20, label="points", draw=self._draw_points),
        ]

    def grid_layer(self) -> DrawLayer:
        return DrawLayer(z=1, label="grid", draw=self._draw_grid)

    def next_seed(self) -> None:
        self.cfg.seed += 1
        self._regenerate()

    def next_mode(self) -> None:
        self.cfg.mode = SamplingMode((self.cfg.mode + 1) % len(SamplingMode))
        self._regenerate()

    def _regenerate(self) -> None:
        cfg = self.cfg
        rng = PyRandom(cfg.seed)
        self.initial = self._initial_points()

        if cfg.mode == SamplingMode.CONSTANT:
            self.points = poisson_disk_distribution(
                cfg.separation, self.bounds, self.initial, cfg.k, rng)
        elif cfg.mode == SamplingMode.FUNCTION:
            fn = noise_separation(cfg.min_separation, cfg.max_separation, cfg.noise_freq, seed=cfg.seed)
            self.points = poisson_disk_distribution_fn(fn, self.bounds, self.initial, cfg.k, rng)
        else:
            center = bounds_center(self.bounds)
            outer = min(cfg.width, cfg.height) * 0.45
            fn = radial_separation(center, cfg.min_separation, cfg.max_separation, outer)
            mask = ring_mask(center, outer * 0.3, outer)
            # the center of the domain sits in the hole of the ring
            if not self.initial:
                self.initial = [(center[0] + outer * 0.65, center[1])]
            self.points = poisson_disk_distribution_masked(fn, mask, self.bounds, self.initial, cfg.k, rng)

        self.stats = describe(self.points)
        logger.info(
            "%s seed=%d: %d points, min distance %.2f",
            cfg.mode.name.lower(), cfg.seed, len(self.points), self.stats["min_distance"],
        )

    def _initial_points(self) -> list[Vec2]:
        rng = random.Random(self.cfg.seed)
        return [
            (rng.uniform(0, self.cfg.width), rng.uniform(0, self.cfg.height))
            for _ in range(self.cfg.n_initial)
        ]

    def _draw_disks(self, ctx: RenderContext) -> None:
        if self.cfg.mode != SamplingMode.CONSTANT:
            return
        radius = max(1, int(self.cfg.separation * 0.5 * ctx.camera.zoom))
        for p in self.points:
            pygame.draw.circle(ctx.screen, COLOR_DISK, ctx.camera.world_to_screen(p), radius, 1)

    def _draw_points(self, ctx: RenderContext) -> None:
        draw_points(ctx, self.points, COLOR_POINT)
        draw_points(ctx, self.initial, COLOR_SEED, radius=4)

    def _draw_world_border(self, ctx: RenderContext) -> None:
        draw_bounds(ctx, self.bounds, COLOR_WORLD_EDGE, 3)

    def _draw_grid(self, ctx: RenderContext) -> None:
        ts = self.cfg.tile_size
        xmin, ymin, xmax, ymax = self.bounds
        x = xmin
        while x <= xmax:
            pygame.draw.line(ctx.screen, COLOR_GRID,
                             ctx.camera.world_to_screen((x, ymin)), ctx.camera.world_to_screen((x, ymax)))
            x += ts
        y = ymin
        while y <= ymax:
            pygame.draw.line(ctx.screen, COLOR_GRID,
                             ctx.camera.world_to_screen((xmin, y)), ctx.camera.world_to_screen((xmax, y)))
            y += ts