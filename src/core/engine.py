"""Core engine loop & orchestration.

Separates concerns:
- Engine: sets up the window and GL state, pumps events, owns the main loop.
- AssetGate: loads images in the background and says when the loop may start.
- FrameScheduler: runs the scene's tick once per refresh while started.
- Overlays: loading screen, rotate prompt and the milestone letter.

Each loop iteration samples the clock once; timers, the gate and the tick
all see that same sample.
"""

from __future__ import annotations

import logging
from typing import Tuple

import pygame
from OpenGL.GL import glClearColor, glClear, GL_COLOR_BUFFER_BIT

from config import (
    CAPTION,
    FPS,
    FULLSCREEN,
    HEIGHT,
    RANDOM_SEED,
    RESIZABLE,
    VSYNC,
    WIDTH,
)
from core.clock import Clock, PygameClock
from core.frame_host import FrameQueue
from core.scheduler import FrameScheduler
from core.timers import TimerQueue
from render.gl_surface import GLRenderSurface, begin_ortho
from textures.asset_gate import AssetGate
from textures.resourcepath import ASSETS_PATH, vignette_descriptors
from textures.texture_manager import upload_vignette_textures
from ui.overlays import LoadingOverlay, MilestoneLetter, RotateOverlay, is_portrait
from ui.text_renderer import TextRenderer
from vignette import VignetteScene

logger = logging.getLogger(__name__)

SKY_BLUE = (0.53, 0.81, 0.92, 1.0)


class PygameViewport:
    """Reports the current window size; only the latest size matters."""

    def size(self) -> Tuple[float, float]:
        surface = pygame.display.get_surface()
        if surface is None:
            return 0.0, 0.0
        w, h = surface.get_size()
        return float(w), float(h)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class Engine:
    def __init__(
        self,
        *,
        width: int = WIDTH,
        height: int = HEIGHT,
        fullscreen: bool = FULLSCREEN,
        assets_root: str = ASSETS_PATH,
        seed: int = RANDOM_SEED,
    ):
        pygame.init()
        pygame.display.set_caption(CAPTION)
        flags = pygame.DOUBLEBUF | pygame.OPENGL
        if fullscreen:
            flags |= pygame.FULLSCREEN
        elif RESIZABLE:
            flags |= pygame.RESIZABLE
        try:
            # vsync: 1 to enable, 0 to disable
            pygame.display.set_mode((width, height), flags, vsync=(1 if VSYNC else 0))
        except (TypeError, pygame.error):
            # Older pygame versions won't accept the vsync kwarg, or vsync
            # was requested but unavailable on this system/driver.
            pygame.display.set_mode((width, height), flags)
        self.clock = pygame.time.Clock()
        self.time: Clock = PygameClock()

        glClearColor(*SKY_BLUE)

        self.text = TextRenderer()
        self.surface = GLRenderSurface(self.text)
        self.viewport = PygameViewport()
        self.timers = TimerQueue()
        self.frames = FrameQueue()

        self.scene = VignetteScene(self.viewport, self.surface, self.timers, seed=seed)
        logger.debug(
            "Hearts settle around %.1f on screen", self.scene.particles.max_live_estimate()
        )
        self.letter = MilestoneLetter(self.text)
        self.scene.add_milestone_listener(self.letter.reveal)
        self.scheduler = FrameScheduler(self.frames, self.scene.tick)

        self.gate = AssetGate(
            vignette_descriptors(assets_root), on_ready=self._on_assets_ready
        )
        self.loading = LoadingOverlay(self.text)
        self.rotate = RotateOverlay(self.text)
        self._portrait = False

    # ------------------------------------------------------------------
    def _on_assets_ready(self, gate: AssetGate) -> None:
        self.surface.textures = upload_vignette_textures(gate)
        logger.info("Uploaded %d textures", len(self.surface.textures))
        self._sync_lifecycle()

    def _sync_lifecycle(self) -> None:
        """Run the scheduler only while assets are ready and the window is landscape."""
        if not self.gate.is_ready:
            return
        w, h = self.viewport.size()
        portrait = is_portrait(w, h)
        if portrait != self._portrait:
            self._portrait = portrait
            logger.info("Window %s; %s vignette", "portrait" if portrait else "landscape",
                        "pausing" if portrait else "resuming")
        if portrait:
            self.scheduler.stop()
        else:
            self.scheduler.start()

    # ------------------------------------------------------------------
    def handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            self.scene.handle_event(event)
        return True

    # ------------------------------------------------------------------
    def render_overlays(self) -> None:  # pragma: no cover - visual
        w, h = self.viewport.size()
        if w <= 0 or h <= 0:
            return
        if not self.scheduler.running:
            glClear(GL_COLOR_BUFFER_BIT)
            begin_ortho(w, h)
            if not self.gate.is_ready:
                self.loading.draw(w, h)
            else:
                self.rotate.draw(w, h)
            return
        self.letter.draw(w, h)

    # ------------------------------------------------------------------
    def run(self):  # pragma: no cover - visual
        self.gate.begin(self.time.now_ms())
        running = True
        try:
            while running:
                self.clock.tick(FPS)
                running = self.handle_events()
                if not running:
                    break
                now = self.time.now_ms()
                self.gate.poll(now)
                self.timers.run_due(now)
                self._sync_lifecycle()
                self.frames.run(now)
                self.render_overlays()
                pygame.display.flip()
        finally:
            self.scene.dispose()
            self.scheduler.stop()
            self.timers.cancel_all()
            self.gate.shutdown()
            pygame.quit()
