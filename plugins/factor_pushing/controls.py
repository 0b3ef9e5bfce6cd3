"""
Side Panel for the Factor Pushing Viewer

The panel mirrors the parameter form: four integer sliders for the
simulation, a Standard / Modulo switch, the modulus slider (shown only in
modulo mode), then colormap and preset choices. Everything is drawn
directly with pygame; the panel lays itself out again whenever the
modulus slider appears or disappears.
"""

import pygame


THEME = {
    "bg": (15, 23, 42),
    "panel": (30, 41, 59),
    "track": (51, 65, 85),
    "track_fill": (59, 130, 246),
    "handle": (203, 213, 225),
    "handle_active": (255, 255, 255),
    "text": (148, 163, 184),
    "text_bright": (241, 245, 249),
    "text_dim": (100, 116, 139),
    "choice": (51, 65, 85),
    "choice_hover": (71, 85, 105),
    "choice_selected": (79, 70, 229),
    "tooltip": (2, 6, 23),
}

PARAM_SLIDERS = (
    ("count", "Count (N)", 3, 100),
    ("start_value", "Start Value", 1, 1000),
    ("step", "Step", 1, 100),
    ("max_rows", "Max Rows", 5, 200),
)

VIEW_MODES = ("Standard", "Modulo")

MARGIN = 8
SECTION_HEIGHT = 28
SLIDER_HEIGHT = 36
CHOICE_HEIGHT = 26


class IntSlider:
    """Integer slider spanning the panel width. Callback fires on change only."""

    def __init__(self, width, label, min_val, max_val, value, on_change):
        self.label = label
        self.min_val = min_val
        self.max_val = max_val
        self.value = int(value)
        self.on_change = on_change
        self.track_x = MARGIN
        self.track_w = width - 2 * MARGIN
        self.y = 0
        self.height = SLIDER_HEIGHT
        self.dragging = False
        self.hovered = False

    @property
    def track_y(self):
        return self.y + 22

    def place(self, y):
        self.y = y

    def _val_to_x(self, val):
        span = (self.max_val - self.min_val) or 1
        frac = (min(max(val, self.min_val), self.max_val) - self.min_val) / span
        return self.track_x + frac * self.track_w

    def _x_to_val(self, px):
        frac = max(0.0, min(1.0, (px - self.track_x) / self.track_w))
        return int(round(self.min_val + frac * (self.max_val - self.min_val)))

    def _drag_to(self, px):
        val = self._x_to_val(px)
        if val != self.value:
            self.value = val
            self.on_change(val)

    def set_value(self, val):
        self.value = int(max(self.min_val, min(self.max_val, val)))

    def press(self, pos):
        mx, my = pos
        if (self.track_x - 4 <= mx <= self.track_x + self.track_w + 4
                and abs(my - self.track_y) <= 12):
            self.dragging = True
            self._drag_to(mx)
            return True
        return False

    def motion(self, pos):
        mx, my = pos
        self.hovered = abs(mx - self._val_to_x(self.value)) < 12 and abs(my - self.track_y) < 12
        if self.dragging:
            self._drag_to(mx)
        return self.dragging

    def release(self):
        self.dragging = False

    def draw(self, surface, font):
        surface.blit(font.render(self.label, True, THEME["text"]), (MARGIN, self.y + 2))
        val_surf = font.render(str(self.value), True, THEME["text_bright"])
        surface.blit(val_surf, (self.track_x + self.track_w - val_surf.get_width(), self.y + 2))

        hx = self._val_to_x(self.value)
        top = self.track_y - 2
        pygame.draw.rect(surface, THEME["track"], (self.track_x, top, self.track_w, 4), border_radius=2)
        pygame.draw.rect(surface, THEME["track_fill"], (self.track_x, top, hx - self.track_x, 4),
                         border_radius=2)

        active = self.dragging or self.hovered
        pygame.draw.circle(surface, THEME["handle_active"] if active else THEME["handle"],
                           (int(hx), self.track_y), 9 if self.dragging else 7)


class ChoiceRow:
    """Segments laid out left to right (wrapping), exactly one selected."""

    def __init__(self, width, labels, selected, on_select):
        self.labels = list(labels)
        self.selected = selected
        self.on_select = on_select
        self.width = width
        self.hover = None
        self.rects = []
        self.height = CHOICE_HEIGHT
        self.place(0)

    def place(self, y):
        self.rects = []
        x, row_y = MARGIN, y
        for label in self.labels:
            w = max(len(label) * 8 + 16, 50)
            if x + w > self.width - MARGIN and x > MARGIN:
                x = MARGIN
                row_y += CHOICE_HEIGHT + 4
            self.rects.append(pygame.Rect(x, row_y, w, CHOICE_HEIGHT))
            x += w + 4
        self.height = row_y - y + CHOICE_HEIGHT

    def _index_at(self, pos):
        for i, rect in enumerate(self.rects):
            if rect.collidepoint(pos):
                return i
        return None

    def press(self, pos):
        idx = self._index_at(pos)
        if idx is None:
            return False
        self.selected = idx
        self.on_select(idx, self.labels[idx])
        return True

    def motion(self, pos):
        self.hover = self._index_at(pos)
        return False

    def draw(self, surface, font):
        for i, (label, rect) in enumerate(zip(self.labels, self.rects)):
            if i == self.selected:
                color = THEME["choice_selected"]
            elif i == self.hover:
                color = THEME["choice_hover"]
            else:
                color = THEME["choice"]
            pygame.draw.rect(surface, color, rect, border_radius=4)
            text = font.render(label, True, THEME["text_bright"])
            surface.blit(text, text.get_rect(center=rect.center))


class ParameterPanel:
    """
    The viewer's side panel.

    Args:
        x: Left edge in window coordinates
        width, height: Panel size
        params: SimulationParams shown initially
        view: ViewSettings shown initially
        colormaps: Colormap names, in button order
        presets: Preset keys, in button order
        preset_key: Initially selected preset
        on_param: called as on_param(field_name, value)
        on_view: called as on_view(**view_changes)
        on_preset: called as on_preset(preset_key)
    """

    def __init__(self, x, width, height, params, view, colormaps, presets,
                 preset_key, on_param, on_view, on_preset):
        self.x = x
        self.width = width
        self.height = height
        self.surface = pygame.Surface((width, height))

        self.sliders = {
            key: IntSlider(width, label, lo, hi, getattr(params, key),
                           on_change=lambda v, k=key: on_param(k, v))
            for key, label, lo, hi in PARAM_SLIDERS
        }
        self.mode_row = ChoiceRow(
            width, VIEW_MODES, 1 if view.modulo_mode else 0,
            on_select=lambda i, _label: on_view(modulo_mode=(i == 1)))
        self.modulus_slider = IntSlider(
            width, "Modulus (m)", 2, 50, view.modulus,
            on_change=lambda v: on_view(modulus=v))
        self.colormap_row = ChoiceRow(
            width, colormaps, list(colormaps).index(view.colormap),
            on_select=lambda _i, name: on_view(colormap=name))
        self.preset_row = ChoiceRow(
            width, presets, self._preset_index(presets, preset_key),
            on_select=lambda _i, key: on_preset(key))

        self.show_modulus = view.modulo_mode
        self._layout()

    @staticmethod
    def _preset_index(presets, key):
        presets = list(presets)
        return presets.index(key) if key in presets else 0

    def _layout(self):
        """Stack sections top to bottom; the modulus slider only in modulo mode."""
        self.sections = []
        self.widgets = []
        y = MARGIN

        def section(title):
            nonlocal y
            self.sections.append((title, y))
            y += SECTION_HEIGHT

        def add(widget, spacing):
            nonlocal y
            widget.place(y)
            self.widgets.append(widget)
            y += widget.height + spacing

        section("INITIAL PARAMETERS")
        for slider in self.sliders.values():
            add(slider, 6)
        section("VIEW MODE")
        add(self.mode_row, 8)
        if self.show_modulus:
            add(self.modulus_slider, 6)
        section("COLORMAP")
        add(self.colormap_row, 8)
        section("PRESETS")
        add(self.preset_row, 8)

    def sync(self, params, view, preset_key=None):
        """Reflect state changed outside the panel (keys, presets)."""
        for key, slider in self.sliders.items():
            slider.set_value(getattr(params, key))
        self.mode_row.selected = 1 if view.modulo_mode else 0
        self.modulus_slider.set_value(view.modulus)
        self.colormap_row.selected = self.colormap_row.labels.index(view.colormap)
        if preset_key is not None:
            self.preset_row.selected = self._preset_index(self.preset_row.labels, preset_key)
        if view.modulo_mode != self.show_modulus:
            self.show_modulus = view.modulo_mode
            self._layout()

    def handle_event(self, event):
        """Route mouse events in window coordinates. True if consumed."""
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            was_dragging = any(getattr(w, "dragging", False) for w in self.widgets)
            for w in self.widgets:
                if isinstance(w, IntSlider):
                    w.release()
            return was_dragging

        if event.type not in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION):
            return False
        local = (event.pos[0] - self.x, event.pos[1])

        if event.type == pygame.MOUSEMOTION:
            # Sliders keep dragging when the cursor leaves the panel
            return any([w.motion(local) for w in self.widgets])

        if event.button != 1 or not (0 <= local[0] <= self.width):
            return False
        return any(w.press(local) for w in self.widgets)

    def draw(self, target_surface, font):
        self.surface.fill(THEME["panel"])
        pygame.draw.line(self.surface, THEME["track"], (0, 0), (0, self.height))
        for title, y in self.sections:
            pygame.draw.line(self.surface, THEME["track"],
                             (MARGIN, y + 8), (self.width - MARGIN, y + 8))
            self.surface.blit(font.render(title, True, THEME["text_dim"]), (MARGIN, y + 12))
        for widget in self.widgets:
            widget.draw(self.surface, font)
        target_surface.blit(self.surface, (self.x, 0))
