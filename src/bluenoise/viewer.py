import sys
from datetime import datetime

import pygame

from bluenoise.camera import Camera2D, DrawLayer, InputState, RenderContext
from bluenoise.worlds.stipple_world import StippleWorld

FILL_COLOR = (18, 18, 18)
HUD_FONT_COLOR = (220, 220, 220)
HUD_FONT_COLOR_2 = (160, 160, 160)
HELP = "LMB drag: pan | Wheel: zoom | R: reseed | M: mode | G: grid | S: save | ESC: quit"


class Viewer:
    def __init__(self, world: StippleWorld, w: int = 1280, h: int = 900, name="bluenoise") -> None:
        pygame.init()
        pygame.display.set_caption(name)
        self.screen = pygame.display.set_mode((w, h))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 16)
        self.name = name

        self.world = world
        self.cam = Camera2D()
        self.cam.fit(world.bounds, (w, h))
        self.show_grid = False

        self._panning = False
        self._pan_anchor = pygame.Vector2(0, 0)
        self._cam_anchor = pygame.Vector2(0, 0)

    def _draw_hud(self, ctx: RenderContext) -> None:
        wx, wy = ctx.input.mouse_world
        cfg = self.world.cfg
        text = (f"mode={cfg.mode.name.lower()}  seed={cfg.seed}  k={cfg.k}  "
                f"points={len(self.world.points)}  "
                f"min_d={self.world.stats.get('min_distance', float('nan')):.2f}  "
                f"gap={self.world.stats.get('largest_gap', float('nan')):.2f}  "
                f"world=({wx:.1f},{wy:.1f})")
        ctx.screen.blit(self.font.render(text, True, HUD_FONT_COLOR), (10, 10))
        ctx.screen.blit(self.font.render(HELP, True, HUD_FONT_COLOR_2), (10, 30))

    def _quit(self) -> None:
        pygame.quit()
        sys.exit(0)

    def _handle_event(self, e: pygame.event.Event) -> None:
        if e.type == pygame.QUIT:
            self._quit()

        if e.type == pygame.KEYDOWN:
            if e.key == pygame.K_ESCAPE:
                self._quit()
            if e.key == pygame.K_r:
                self.world.next_seed()
            if e.key == pygame.K_m:
                self.world.next_mode()
            if e.key == pygame.K_g:
                self.show_grid = not self.show_grid
            if e.key == pygame.K_s:
                self.save()

        if e.type == pygame.MOUSEBUTTONDOWN:
            if e.button == 1:
                self._panning = True
                self._pan_anchor = pygame.Vector2(e.pos)
                self._cam_anchor = self.cam.offset.copy()
            if e.button == 4:  # wheel up
                self.cam.zoom_at(e.pos, 1.15)
            if e.button == 5:  # wheel down
                self.cam.zoom_at(e.pos, 1 / 1.15)

        if e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self._panning = False

        if e.type == pygame.MOUSEMOTION and self._panning:
            self.cam.offset = self._cam_anchor + (pygame.Vector2(e.pos) - self._pan_anchor)

    def save(self) -> str:
        cfg = self.world.cfg
        ctx = RenderContext(
            screen=pygame.Surface((cfg.width, cfg.height)),
            camera=Camera2D(),
            input=InputState(mouse_screen=(0, 0), mouse_world=(0., 0.)),
        )
        ctx.screen.fill(FILL_COLOR)
        for layer in sorted(self.world.get_layers(), key=lambda x: x.z):
            layer.draw(ctx)

        now = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = f"{self.name}_{cfg.mode.name.lower()}_{now}.png"
        pygame.image.save(ctx.screen, path)
        return path

    def run(self, fps: int = 30) -> None:
        while True:
            for e in pygame.event.get():
                self._handle_event(e)

            ms = pygame.mouse.get_pos()
            ctx = RenderContext(
                screen=self.screen,
                camera=self.cam,
                input=InputState(mouse_screen=ms, mouse_world=self.cam.screen_to_world(ms)),
            )

            layers = self.world.get_layers()
            layers.append(DrawLayer(z=2000, label="hud", draw=self._draw_hud))
            if self.show_grid:
                layers.append(self.world.grid_layer())

            self.screen.fill(FILL_COLOR)
            for layer in sorted(layers, key=lambda x: x.z):
                layer.draw(ctx)

            pygame.display.flip()
            self.clock.tick(fps)
