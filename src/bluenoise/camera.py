from dataclasses import dataclass
from typing import Callable, Iterable

import pygame

from bluenoise.common import Bounds, Color, GVec2, Vec2

MIN_ZOOM = 0.05
MAX_ZOOM = 50.0


@dataclass(frozen=True)
class InputState:
    mouse_screen: GVec2
    mouse_world: Vec2


@dataclass
class RenderContext:
    screen: pygame.Surface
    camera: "Camera2D"
    input: InputState


@dataclass(frozen=True)
class DrawLayer:
    z: int
    label: str
    draw: Callable[[RenderContext], None]


class Camera2D:
    def __init__(self, offset: pygame.Vector2 | None = None, zoom: float = 1.0):
        self.offset = pygame.Vector2(0, 0) if offset is None else pygame.Vector2(offset)
        self.zoom = zoom

    def world_to_screen(self, p: Vec2) -> GVec2:
        v = pygame.Vector2(p[0], p[1]) * self.zoom + self.offset
        return int(v.x), int(v.y)

    def screen_to_world(self, p: GVec2) -> Vec2:
        v = (pygame.Vector2(p[0], p[1]) - self.offset) / self.zoom
        return float(v.x), float(v.y)

    def zoom_at(self, screen_pos: GVec2, factor: float) -> None:
        """Zoom keeping the world point under the cursor fixed."""
        anchor = pygame.Vector2(self.screen_to_world(screen_pos))
        self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, self.zoom * factor))
        self.offset = pygame.Vector2(screen_pos) - anchor * self.zoom

    def fit(self, bounds: Bounds, screen_size: GVec2, margin: int = 40) -> None:
        xmin, ymin, xmax, ymax = bounds
        w = max(xmax - xmin, 1e-9)
        h = max(ymax - ymin, 1e-9)
        sw, sh = screen_size
        self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, min((sw - 2 * margin) / w, (sh - 2 * margin) / h)))
        self.offset = pygame.Vector2(margin, margin) - pygame.Vector2(xmin, ymin) * self.zoom


def draw_points(ctx: RenderContext, points: Iterable[Vec2], color: Color, radius: int = 2) -> None:
    for p in points:
        pygame.draw.circle(ctx.screen, color, ctx.camera.world_to_screen(p), radius)


def draw_bounds(ctx: RenderContext, bounds: Bounds, color: Color, width: int = 2) -> None:
    xmin, ymin, xmax, ymax = bounds
    x0, y0 = ctx.camera.world_to_screen((xmin, ymin))
    x1, y1 = ctx.camera.world_to_screen((xmax, ymax))
    pygame.draw.rect(ctx.screen, color, pygame.Rect(x0, y0, x1 - x0, y1 - y0), width)
