"""
Interactive Pygame Viewer for Wave Cover

Displays the wave field in a resizable window. Clicking the canvas starts a
wave at the pointer (interactive mode). In debug mode a side panel adds a
time scrubber, a play/pause button and frame export.

Controls:
  Mouse L     Start a wave (interactive mode)
  SPACE       Play / Pause (debug mode)
  LEFT/RIGHT  Step time by 0.1s (debug mode)
  S           Export current frame as PNG
  R           Reseed initial waves
  C           Clear all waves and restart the clock
  TAB         Toggle timeline panel (debug mode)
  H           Toggle HUD overlay
  Q / ESC     Quit
"""

import time
import numpy as np
import pygame

from .config import WaveConfig
from .controls import THEME, TimelinePanel
from .simulator import WaveSimulator


PANEL_WIDTH = 260
TIME_STEP = 0.1


class Viewer:
    def __init__(self, config=None, width=None, height=None, seed=None):
        self.config = config or WaveConfig()
        self.canvas_w = int(width or self.config.canvas.width)
        self.canvas_h = int(height or self.config.canvas.height)
        self.sim = WaveSimulator(self.config, self.canvas_w, self.canvas_h, seed=seed)

        self.debug = self.config.debug_mode.enabled
        self.panel_visible = self.debug
        self.running = True
        self.show_hud = True
        self.fps_history = []

        self.panel = None
        if self.debug:
            self.panel = TimelinePanel(self.sim, self.canvas_w, PANEL_WIDTH, self.canvas_h,
                                       self.config.debug_mode.time_slider_max)

    @property
    def total_w(self):
        return self.canvas_w + (PANEL_WIDTH if self.panel_visible else 0)

    def _on_toggle_pause(self):
        if self.panel:
            self.panel.play.press()
        else:
            self.sim.toggle_pause()

    def _on_export(self):
        if self.panel:
            self.panel.export.press()
        else:
            print(f"Frame exported: {self.sim.export_frame()}")

    def _on_reseed(self):
        self.sim.seed_initial_waves()
        if self.sim.paused:
            self.sim.refresh()

    def _on_clear(self):
        self.sim.reset()

    def _step_time(self, delta):
        if self.debug and self.sim.paused:
            self.sim.set_time(self.sim.time + delta)

    def _handle_click(self, event):
        if event.button != 1 or not self.config.interaction.interactive:
            return
        x, y = event.pos
        if x < self.canvas_w and y < self.canvas_h:
            self.sim.add_wave(x, y)

    def _handle_resize(self, w, h):
        self.canvas_w = max(1, w - (PANEL_WIDTH if self.panel_visible else 0))
        self.canvas_h = max(1, h)
        self.sim.resize(self.canvas_w, self.canvas_h)
        if self.panel:
            self.panel.x = self.canvas_w
            self.panel.height = self.canvas_h
        return pygame.display.set_mode((self.total_w, self.canvas_h), pygame.RESIZABLE)

    def _frame_surface(self, frame):
        # surfarray is indexed (x, y)
        return pygame.surfarray.make_surface(np.ascontiguousarray(frame.swapaxes(0, 1)))

    def _draw_hud(self, screen, fps):
        if not self.show_hud:
            return

        stats = self.sim.stats
        line = (f"t = {stats['time']:.2f}s  |  Waves: {stats['active']} active / "
                f"{stats['history']} recorded  |  Disintegrating: {stats['disintegrating']}  |  "
                f"{self.canvas_w}x{self.canvas_h}  |  FPS: {fps:.0f}")
        if stats["paused"]:
            line = "[PAUSED]  " + line

        bg_surface = pygame.Surface((self.canvas_w, 24), pygame.SRCALPHA)
        bg_surface.fill((0, 0, 0, 140))
        screen.blit(bg_surface, (0, 0))

        text_surface = self.hud_font.render(line, True, THEME["text_bright"])
        screen.blit(text_surface, (10, 6))

    def run(self):
        """Main viewer loop: one simulation tick per display refresh."""
        pygame.init()

        screen = pygame.display.set_mode((self.total_w, self.canvas_h), pygame.RESIZABLE)
        pygame.display.set_caption("Wave Cover")
        clock = pygame.time.Clock()

        self.hud_font = pygame.font.SysFont("menlo", 13)
        self.panel_font = pygame.font.SysFont("menlo", 12)

        last_time = time.time()

        while self.running:
            now = time.time()
            dt = now - last_time
            last_time = now

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    continue

                if event.type == pygame.KEYDOWN:
                    screen = self._handle_keydown(event, screen)
                    continue

                if event.type == pygame.VIDEORESIZE:
                    screen = self._handle_resize(event.w, event.h)
                    continue

                if self.panel_visible and self.panel:
                    if self.panel.handle_event(event):
                        continue

                if event.type == pygame.MOUSEBUTTONDOWN:
                    self._handle_click(event)

            frame = self.sim.tick(dt)

            if self.panel:
                self.panel.sync()

            screen.fill(THEME["bg"])
            screen.blit(self._frame_surface(frame), (0, 0))

            self.fps_history.append(time.time() - now)
            if len(self.fps_history) > 30:
                self.fps_history.pop(0)
            avg_fps = 1.0 / max(np.mean(self.fps_history), 0.001)
            self._draw_hud(screen, avg_fps)

            if self.panel_visible and self.panel:
                self.panel.x = self.canvas_w
                self.panel.draw(screen, self.panel_font)

            pygame.display.flip()
            clock.tick(60)

        pygame.quit()

    def _handle_keydown(self, event, screen):
        key = event.key

        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False

        elif key == pygame.K_SPACE:
            self._on_toggle_pause()

        elif key == pygame.K_LEFT:
            self._step_time(-TIME_STEP)

        elif key == pygame.K_RIGHT:
            self._step_time(TIME_STEP)

        elif key == pygame.K_s:
            self._on_export()

        elif key == pygame.K_r:
            self._on_reseed()

        elif key == pygame.K_c:
            self._on_clear()

        elif key == pygame.K_h:
            self.show_hud = not self.show_hud

        elif key == pygame.K_TAB and self.debug:
            self.panel_visible = not self.panel_visible
            screen = pygame.display.set_mode((self.total_w, self.canvas_h), pygame.RESIZABLE)

        return screen
