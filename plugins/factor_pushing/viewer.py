"""
Interactive Pygame Viewer for the Factor Pushing Automaton

Rows are time steps (t), columns are ring indices (i). Every parameter
change rebuilds the whole grid from scratch.

Controls:
  M           Toggle Standard / Modulo view
  TAB         Toggle control panel
  S           Save screenshot
  H           Toggle HUD overlay
  1-9         Load preset
  Q / ESC     Quit
  Mouse hover Cell details
"""

import os
import time
import pygame

from .colormaps import COLORMAP_ORDER, residue_text_color, text_color_for
from .controls import ParameterPanel, THEME
from .presets import PRESET_ORDER, get_preset, preset_params
from .primes import FactorCache, is_prime
from .render import cell_colors, render_grid, save_png
from .simulation import generate
from .view import ViewSettings, cell_label, cell_tooltip, residue


PANEL_WIDTH = 300
HUD_HEIGHT = 24
GAP = 1
MIN_LABEL_CELL = 30  # px; below this, cells are colour only

RULE_TEXT = "x' = x - gpf(x) + gpf(x[i-1])"


class Viewer:

    def __init__(self, width=900, height=800, start_preset="default",
                 params=None, view=None):
        self.canvas_w = width
        self.canvas_h = height
        self.panel_visible = True
        self.running = True
        self.show_hud = True

        self.preset_key = start_preset
        self.params = params if params is not None else preset_params(start_preset)
        self.view = view if view is not None else ViewSettings()

        # Engine-scoped cache so the viewer never shares state with other runs
        self.cache = FactorCache()
        self.grid = None
        self._surface = None
        self._cell_px = 0
        self._regenerate()

        self.panel = None

    @property
    def total_w(self):
        return self.canvas_w + (PANEL_WIDTH if self.panel_visible else 0)

    # ── Simulation ──────────────────────────────────────────────────────

    def _regenerate(self):
        self.grid = generate(self.params, cache=self.cache)
        self._surface = None

    def _set_param(self, key, value):
        params = self.params.with_changes(**{key: value})
        if params != self.params:
            self.params = params
            self._regenerate()

    def _apply_preset(self, key):
        if get_preset(key) is None:
            return
        self.preset_key = key
        params = preset_params(key)
        if params != self.params:
            self.params = params
            self._regenerate()
        self._sync_panel()

    def _apply_view(self, **changes):
        self.view = self.view.with_changes(**changes)
        self._surface = None
        self._sync_panel()

    # ── Panel ───────────────────────────────────────────────────────────

    def _sync_panel(self):
        if self.panel:
            self.panel.sync(self.params, self.view, self.preset_key)

    def _build_panel(self):
        self.panel = ParameterPanel(
            self.canvas_w, PANEL_WIDTH, self.canvas_h, self.params, self.view,
            COLORMAP_ORDER, PRESET_ORDER, self.preset_key,
            on_param=self._set_param, on_view=self._apply_view,
            on_preset=self._apply_preset)

    # ── Rendering ───────────────────────────────────────────────────────

    def _fit_cell_px(self):
        avail_h = self.canvas_h - (HUD_HEIGHT if self.show_hud else 0)
        by_w = (self.canvas_w - GAP) // self.grid.width - GAP
        by_h = (avail_h - GAP) // self.grid.row_count - GAP
        return max(2, min(by_w, by_h))

    def _render_canvas(self):
        """Heatmap surface with labels, cached until grid or view changes."""
        cell_px = self._fit_cell_px()
        if self._surface is not None and cell_px == self._cell_px:
            return self._surface
        self._cell_px = cell_px

        image = render_grid(self.grid, self.view, cell_px=cell_px, gap=GAP)
        surface = pygame.surfarray.make_surface(image.swapaxes(0, 1).copy())

        if cell_px >= MIN_LABEL_CELL:
            self._draw_labels(surface, cell_px)

        self._surface = surface
        return surface

    def _draw_labels(self, surface, cell_px):
        colors = cell_colors(self.grid, self.view)
        pitch = cell_px + GAP
        for t, row in enumerate(self.grid.rows):
            for i, value in enumerate(row):
                text = cell_label(value, self.view, self.cache)
                if self.view.modulo_mode:
                    fg = residue_text_color(residue(value, self.view.modulus),
                                            self.view.modulus)
                    font = self.cell_font
                else:
                    fg = text_color_for(colors[t, i])
                    font = self.cell_font_bold if is_prime(value, self.cache) else self.cell_font
                label = font.render(text, True, fg)
                if label.get_width() > cell_px - 2:
                    # Truncate to the cell
                    label = label.subsurface((0, 0, cell_px - 2, label.get_height()))
                x = GAP + i * pitch + (cell_px - label.get_width()) // 2
                y = GAP + t * pitch + (cell_px - label.get_height()) // 2
                surface.blit(label, (x, y))

    def _draw_hud(self, screen):
        if not self.show_hud:
            return
        p = self.params
        line = (f"Rule: {RULE_TEXT}  |  Range: [{self.grid.min_val}, {self.grid.max_val}]  |  "
                f"Invariant Sum: {self.grid.invariant_sum:,}  |  "
                f"N={p.count} start={p.start_value} step={p.step} rows={p.max_rows}")
        if self.view.modulo_mode:
            line += f"  |  mod {self.view.modulus}"

        bg = pygame.Surface((self.canvas_w, HUD_HEIGHT), pygame.SRCALPHA)
        bg.fill((0, 0, 0, 160))
        screen.blit(bg, (0, self.canvas_h - HUD_HEIGHT))
        text = self.hud_font.render(line, True, (210, 215, 225))
        screen.blit(text, (10, self.canvas_h - HUD_HEIGHT + 6))

    def _cell_at(self, pos):
        pitch = self._cell_px + GAP
        if pitch <= GAP:
            return None
        col = (pos[0] - GAP) // pitch
        row = (pos[1] - GAP) // pitch
        if 0 <= row < self.grid.row_count and 0 <= col < self.grid.width:
            return row, col
        return None

    def _draw_tooltip(self, screen):
        mx, my = pygame.mouse.get_pos()
        if mx >= self.canvas_w:
            return
        cell = self._cell_at((mx, my))
        if cell is None:
            return
        row, col = cell
        text = cell_tooltip(self.grid.rows[row][col], row, col, self.view, self.cache)
        lines = [self.hud_font.render(s, True, THEME["text_bright"]) for s in text.split("\n")]
        w = max(s.get_width() for s in lines) + 12
        h = sum(s.get_height() for s in lines) + 10
        x = min(mx + 14, self.canvas_w - w)
        y = min(my + 14, self.canvas_h - h)
        pygame.draw.rect(screen, THEME["tooltip"], (x, y, w, h), border_radius=4)
        cy = y + 5
        for s in lines:
            screen.blit(s, (x + 6, cy))
            cy += s.get_height()

    def _save_screenshot(self):
        screenshots_dir = os.path.join(
            os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
            "screenshots"
        )
        os.makedirs(screenshots_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        path = os.path.join(screenshots_dir, f"fpa_{self.preset_key}_{timestamp}.png")
        save_png(render_grid(self.grid, self.view, cell_px=max(self._cell_px, 8)), path)
        print(f"[FPA] Screenshot saved: {path}")

    # ── Main loop ───────────────────────────────────────────────────────

    def run(self):
        """Main viewer loop."""
        pygame.init()

        screen = pygame.display.set_mode((self.total_w, self.canvas_h))
        pygame.display.set_caption("Factor Pushing Automaton")
        clock = pygame.time.Clock()

        self.hud_font = pygame.font.SysFont("menlo", 13)
        self.panel_font = pygame.font.SysFont("menlo", 12)
        self.cell_font = pygame.font.SysFont("menlo", 11)
        self.cell_font_bold = pygame.font.SysFont("menlo", 11, bold=True)

        self._build_panel()

        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    continue

                if event.type == pygame.KEYDOWN:
                    screen = self._handle_keydown(event, screen)
                    continue

                if self.panel_visible and self.panel:
                    self.panel.handle_event(event)

            screen.fill(THEME["bg"])
            screen.blit(self._render_canvas(), (0, 0))
            self._draw_hud(screen)
            self._draw_tooltip(screen)

            if self.panel_visible and self.panel:
                self.panel.draw(screen, self.panel_font)

            pygame.display.flip()
            clock.tick(30)

        pygame.quit()

    def _handle_keydown(self, event, screen):
        key = event.key

        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False

        elif key == pygame.K_m:
            self._apply_view(modulo_mode=not self.view.modulo_mode)

        elif key == pygame.K_h:
            self.show_hud = not self.show_hud
            self._surface = None

        elif key == pygame.K_TAB:
            self.panel_visible = not self.panel_visible
            screen = pygame.display.set_mode((self.total_w, self.canvas_h))

        elif key == pygame.K_s:
            self._save_screenshot()

        elif pygame.K_1 <= key <= pygame.K_9:
            idx = key - pygame.K_1
            if idx < len(PRESET_ORDER):
                self._apply_preset(PRESET_ORDER[idx])

        return screen
