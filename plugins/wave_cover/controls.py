"""
Debug Timeline Panel

Side panel shown in debug mode. It holds a time scrubber, a Play/Pause
toggle and an Export button, each bound directly to a WaveSimulator:

    scrubber   dragging calls sim.set_time(); follow() tracks the clock
               without touching the simulator
    play       sim.toggle_pause(); label and highlight mirror sim.paused
    export     sim.export_frame() into screenshots_dir

Events arrive in window coordinates and are routed to widgets in
panel-local coordinates.
"""

import pygame


THEME = {
    "bg": (17, 17, 17),
    "panel": (24, 24, 30),
    "divider": (44, 44, 56),
    "track": (52, 52, 64),
    "track_fill": (230, 120, 40),
    "handle": (205, 205, 215),
    "handle_active": (255, 255, 255),
    "text": (180, 182, 190),
    "text_bright": (235, 235, 240),
    "text_dim": (105, 105, 115),
    "button": (42, 42, 52),
    "button_hover": (58, 58, 72),
    "button_active": (170, 80, 30),
}

MARGIN = 10


def _is_left_click(event):
    return event.type == pygame.MOUSEBUTTONDOWN and event.button == 1


class TimeScrubber:
    """Track over [0, time_max] seconds bound to the simulator clock."""

    height = 40

    def __init__(self, sim, y, width, time_max):
        self.sim = sim
        self.y = y
        self.time_max = max(float(time_max), 1e-6)
        self.track = pygame.Rect(MARGIN, y + 24, width - 2 * MARGIN, 6)
        self.value = 0.0
        self.dragging = False
        self.follow(sim.time)

    def time_at(self, px):
        """Simulation time under panel-local x, clamped to the track."""
        frac = (px - self.track.x) / self.track.width
        return min(1.0, max(0.0, frac)) * self.time_max

    def handle_x(self):
        return self.track.x + int(round(self.value / self.time_max * self.track.width))

    def follow(self, t):
        # A drag in progress owns the handle
        if not self.dragging:
            self.value = min(self.time_max, max(0.0, t))

    def scrub(self, px):
        self.value = self.time_at(px)
        self.sim.set_time(self.value)

    def handle_event(self, event, pos):
        if _is_left_click(event):
            if self.track.inflate(12, 20).collidepoint(pos):
                self.dragging = True
                self.scrub(pos[0])
                return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            released = self.dragging
            self.dragging = False
            return released
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self.scrub(pos[0])
            return True
        return False

    def draw(self, surface, font):
        surface.blit(font.render("Time", True, THEME["text"]), (self.track.x, self.y + 4))
        readout = font.render(f"{self.value:.2f}s / {self.time_max:.0f}s", True, THEME["text_bright"])
        surface.blit(readout, (self.track.right - readout.get_width(), self.y + 4))

        pygame.draw.rect(surface, THEME["track"], self.track, border_radius=3)
        hx = self.handle_x()
        if hx > self.track.x:
            filled = pygame.Rect(self.track.x, self.track.y, hx - self.track.x, self.track.height)
            pygame.draw.rect(surface, THEME["track_fill"], filled, border_radius=3)
        color = THEME["handle_active"] if self.dragging else THEME["handle"]
        pygame.draw.circle(surface, color, (hx, self.track.centery), 8 if self.dragging else 6)


class _SimButton:
    """Full-width panel button acting on the simulator when pressed."""

    def __init__(self, sim, y, width):
        self.sim = sim
        self.rect = pygame.Rect(MARGIN, y, width - 2 * MARGIN, 28)
        self.hovered = False

    @property
    def label(self):
        raise NotImplementedError

    @property
    def active(self):
        return False

    def press(self):
        raise NotImplementedError

    def handle_event(self, event, pos):
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(pos)
        elif _is_left_click(event) and self.rect.collidepoint(pos):
            self.press()
            return True
        return False

    def draw(self, surface, font):
        if self.active:
            color = THEME["button_active"]
        else:
            color = THEME["button_hover"] if self.hovered else THEME["button"]
        pygame.draw.rect(surface, color, self.rect, border_radius=4)
        text = font.render(self.label, True, THEME["text_bright"])
        surface.blit(text, text.get_rect(center=self.rect.center))


class PlayToggle(_SimButton):
    """Play/Pause. Highlighted while the clock is frozen."""

    @property
    def label(self):
        return "Play" if self.sim.paused else "Pause"

    @property
    def active(self):
        return self.sim.paused

    def press(self):
        self.sim.toggle_pause()


class ExportButton(_SimButton):
    """Re-evaluates at the current time and writes a PNG."""

    label = "Export PNG"

    def __init__(self, sim, y, width, screenshots_dir="screenshots"):
        super().__init__(sim, y, width)
        self.screenshots_dir = screenshots_dir
        self.last_path = None

    def press(self):
        self.last_path = self.sim.export_frame(screenshots_dir=self.screenshots_dir)
        print(f"Frame exported: {self.last_path}")


class TimelinePanel:
    """Lays out the timeline widgets in a column at window x."""

    def __init__(self, sim, x, width, height, time_max, screenshots_dir="screenshots"):
        self.sim = sim
        self.x = x
        self.width = width
        self.height = height

        self.scrubber = TimeScrubber(sim, 32, width, time_max)
        self.play = PlayToggle(sim, self.scrubber.y + TimeScrubber.height + 8, width)
        self.export = ExportButton(sim, self.play.rect.bottom + 8, width, screenshots_dir)
        self.widgets = (self.scrubber, self.play, self.export)

    def sync(self):
        """Move the scrubber handle to the simulator clock."""
        self.scrubber.follow(self.sim.time)

    def handle_event(self, event):
        """Route a window event; True when a widget consumed it."""
        pos = getattr(event, "pos", None)
        if pos is None:
            return False
        local = (pos[0] - self.x, pos[1])
        inside = 0 <= local[0] < self.width and 0 <= local[1] < self.height
        # A scrub drag keeps tracking (and can end) outside the panel
        if not inside and not self.scrubber.dragging:
            self.play.hovered = self.export.hovered = False
            return False
        for widget in self.widgets:
            if widget.handle_event(event, local):
                return True
        return False

    def draw(self, target, font):
        area = pygame.Rect(self.x, 0, self.width, self.height).clip(target.get_rect())
        if area.width <= 0 or area.height <= 0:
            return
        surface = target.subsurface(area)
        surface.fill(THEME["panel"])
        pygame.draw.line(surface, THEME["divider"], (0, 0), (0, area.height))
        surface.blit(font.render("TIMELINE", True, THEME["text_dim"]), (MARGIN, 10))
        for widget in self.widgets:
            widget.draw(surface, font)
