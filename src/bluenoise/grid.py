import logging
import math

from bluenoise.common import Bounds, GVec2, Vec2, clamp, dist2, pixel_bounds

logger = logging.getLogger(__name__)


class SpatialGrid:
    """
    Uniform bucket grid over a sampling domain.

    Cells are 2**k units wide. Points are only ever added; a query scans the
    cells touched by the bounding square of the query circle.
    """

    def __init__(self, bounds: Bounds, k: int = 3):
        self.cells: list[list[Vec2]] = []
        self.dropped = 0
        self.resize(bounds, k)

    def resize(self, bounds: Bounds | None = None, k: int | None = None) -> None:
        if bounds is not None:
            self.bounds = bounds
            self.pixels = pixel_bounds(bounds)
        if k is not None:
            self.k = k
        self.cell_size = 1 << self.k

        px0, py0, px1, py1 = self.pixels
        # shift the upper-left corner to (0, 0)
        self.offset: GVec2 = (-px0, -py0)
        self.n_x = max(0, int(math.ceil((px1 - px0) / self.cell_size)))
        self.n_y = max(0, int(math.ceil((py1 - py0) / self.cell_size)))
        self.cells = [[] for _ in range(self.n_x * self.n_y)]
        self.dropped = 0

    @property
    def shape(self) -> GVec2:
        return self.n_x, self.n_y

    def cell_of(self, p: Vec2) -> GVec2:
        return (
            math.floor((p[0] + self.offset[0]) / self.cell_size),
            math.floor((p[1] + self.offset[1]) / self.cell_size),
        )

    def insert(self, p: Vec2) -> bool:
        if not (math.isfinite(p[0]) and math.isfinite(p[1])):
            return self._drop(p)

        cx, cy = self.cell_of(p)
        if not (0 <= cx < self.n_x and 0 <= cy < self.n_y):
            return self._drop(p)

        self.cells[cx + self.n_x * cy].append(p)
        return True

    def _drop(self, p: Vec2) -> bool:
        self.dropped += 1
        logger.debug("point %s is outside the grid %s, not indexed", p, self.shape)
        return False

    def has_neighbor_within(self, p: Vec2, radius: float) -> bool:
        if not (math.isfinite(p[0]) and math.isfinite(p[1]) and math.isfinite(radius)):
            return False

        r2 = radius * radius
        px0, py0, px1, py1 = self.pixels
        x0 = clamp(math.floor(p[0] - radius), px0, px1 - 1)
        y0 = clamp(math.floor(p[1] - radius), py0, py1 - 1)
        x1 = clamp(math.floor(p[0] + radius), px0, px1 - 1)
        y1 = clamp(math.floor(p[1] + radius), py0, py1 - 1)

        ox, oy = self.offset
        cs = self.cell_size
        cx0 = max(0, (x0 + ox) // cs)
        cy0 = max(0, (y0 + oy) // cs)
        cx1 = min(self.n_x, (x1 + ox) // cs + 1)
        cy1 = min(self.n_y, (y1 + oy) // cs + 1)

        for cy in range(cy0, cy1):
            row = self.n_x * cy
            for cx in range(cx0, cx1):
                for q in self.cells[cx + row]:
                    if dist2(p, q) < r2:
                        return True
        return False

    def __len__(self):
        return sum(len(cell) for cell in self.cells)
