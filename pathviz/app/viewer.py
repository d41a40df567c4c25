# pathviz/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Viewer - grid editor + animated search playback

- Mouse:
    [LMB] on grid -> apply edit mode (toggle wall / place start / place goal)
- Keyboard:
    [W]/[S]/[G]  -> edit mode: walls / start / goal
    [B]/[D]/[A]  -> select algorithm (BFS / Dijkstra / A*)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset overlays (keeps walls)
    [C]          -> clear walls
    [1]/[2]/[3]  -> load preset map
    [+]/[-]      -> events/sec
    [Q]/[ESC]    -> quit

The search runs in the engine as a stream of events. The viewer pulls one
event per tick; the tick rate is the only thing the speed controls change.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import pygame

from pathviz.app import settings
from pathviz.core.engine import iter_events
from pathviz.core.grid import Grid, Cell
from pathviz.core.maps import MapError, load_map, preset_maps
from pathviz.core.types import SearchEvent, SearchResult, VISIT, PATH, DONE, NO_PATH

logger = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 300            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 22
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
WALL        = ( 34, 34, 34)
GRID_LINE   = (238,238,238)
START_BLUE  = ( 11,108,255)
GOAL_RED    = (255,107,107)
VISITED     = (255,217,102)
PATH_GREEN  = ( 46,204,113)

PANEL_BG    = ( 24, 26, 32)
CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

ALGO_LABELS = {"bfs": "BFS", "dijkstra": "Dijkstra", "astar": "A*"}
EDIT_MODES = ("walls", "start", "goal")


def cell_at(pos: Tuple[int, int], origin: Tuple[int, int], cell_size: int,
            rows: int, cols: int) -> Optional[Cell]:
    """Grid cell under a pixel position, or None outside the grid."""
    x, y = pos
    ox, oy = origin
    if x < ox or y < oy:
        return None
    col = (x - ox) // cell_size
    row = (y - oy) // cell_size
    if row >= rows or col >= cols:
        return None
    return int(row), int(col)


# ---------- Panel button ----------
class UIButton:
    """Panel button. `enabled` is polled each frame; a disabled button is dimmed and ignores clicks."""

    IDLE     = (36, 40, 48, 220)
    HOVER    = (46, 50, 60, 230)
    ACTIVE   = (58, 86, 160, 235)
    DISABLED = (30, 32, 38, 160)
    OUTLINE  = (120, 170, 255, 255)

    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False,
                 enabled: Optional[Callable[[], bool]] = None):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.togglable = togglable
        self.enabled = enabled or (lambda: True)
        self.hover = False
        self.active = False

    def set_active(self, value: bool):
        self.active = bool(value)

    def _fill(self, live: bool):
        if not live:
            return self.DISABLED
        if self.active and self.togglable:
            return self.ACTIVE
        return self.HOVER if self.hover else self.IDLE

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        live = self.enabled()
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(base, self._fill(live), base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)
        if live and self.active and self.togglable:
            pygame.draw.rect(screen, self.OUTLINE, self.rect, width=2, border_radius=10)
        text = font.render(self.label, True, TEXT_LIGHT if live else (120, 124, 132))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        """True when the event was a click on this button (consumed even if disabled)."""
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos):
            if self.enabled():
                self.callback()
            return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, algo: str = settings.DEFAULT_ALGO,
                 speed: int = settings.DEFAULT_SPEED):
        pygame.init()

        self.grid = grid
        self.cell_size = CELL_SIZE_DEFAULT
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        win_w = GRID_MARGIN*2 + grid.cols * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.rows * self.cell_size, 560)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding - Grid Search")

        self._buttons: List[UIButton] = []
        self.presets: Dict[str, Path] = preset_maps()

        self.selected_algo = algo
        self.steps_per_sec = settings.clamp_speed(speed)
        self.edit_mode = "walls"

        self._events: Optional[Iterator[SearchEvent]] = None
        self.visited: List[Cell] = []
        self.path: List[Cell] = []
        self.result: Optional[SearchResult] = None
        self.phase = "idle"          # idle | visiting | path | finished
        self.running = False
        self.state = "Idle"
        self.clock = pygame.time.Clock()
        self._last_step_t = 0.0

        self._layout(win_w, win_h)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits the window, grid on the left."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(6, min(avail_w // self.grid.cols, avail_h // self.grid.rows)))

        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        grid_right = GRID_MARGIN * 2 + self.grid.cols * self.cell_size
        self._right_band = pygame.Rect(grid_right, 0, max(PANEL_W, win_w - grid_right), win_h)
        self._build_buttons()

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_search()
            self._draw()
            self.clock.tick(60)

    # ---------- search playback ----------
    def _search_active(self) -> bool:
        return self.phase in ("visiting", "path")

    def _begin_search(self):
        self._reset_overlays()
        self._events = iter_events(self.grid, algorithm=self.selected_algo)
        self.phase = "visiting"

    def _tick_search(self):
        rate = self.steps_per_sec
        if self.phase == "path":
            rate *= settings.PATH_SPEED_FACTOR
        now = time.time()
        if now - self._last_step_t >= 1.0 / max(1, rate):
            self._last_step_t = now
            self._do_step()

    def _do_step(self):
        """Consume events until one cell changes colour or the search ends."""
        if self.phase == "finished":
            return
        if self._events is None:
            self._begin_search()
        for ev in self._events:
            if ev.kind == VISIT:
                self.visited.append(ev.cell)
                return
            if ev.kind == PATH:
                self.phase = "path"
                self.path.append(ev.cell)
                return
            self._finish(ev.result)
            return

    def _finish(self, result: SearchResult):
        self.result = result
        self.phase = "finished"
        self.running = False
        self._events = None
        self.state = "Done" if result.status == DONE else "No path"
        self._refresh_active_states()

    def _cancel_search(self):
        if self._events is not None:
            self._events.close()
        self._events = None
        self.phase = "idle"

    # ---------- editing ----------
    def _apply_edit(self, cell: Cell):
        if self.running or self._search_active():
            return
        if self.phase == "finished":
            self._reset()
        if self.edit_mode == "start":
            self.grid.start = cell
        elif self.edit_mode == "goal":
            self.grid.goal = cell
        else:
            self.grid.toggle_wall(cell)

    def _set_edit_mode(self, mode: str):
        if mode in EDIT_MODES:
            self.edit_mode = mode
            self._refresh_active_states()

    def _clear_grid(self):
        if self.running or self._search_active():
            return
        self._reset()
        self.grid.clear()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_n:
                    if not self.running:
                        self._do_step()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_c:
                    self._clear_grid()
                elif e.key == pygame.K_w:
                    self._set_edit_mode("walls")
                elif e.key == pygame.K_s:
                    self._set_edit_mode("start")
                elif e.key == pygame.K_g:
                    self._set_edit_mode("goal")
                elif e.key == pygame.K_b:
                    self._switch_algo("bfs")
                elif e.key == pygame.K_d:
                    self._switch_algo("dijkstra")
                elif e.key == pygame.K_a:
                    self._switch_algo("astar")
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self._bump_speed(+5)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
                    self._bump_speed(-5)
                elif e.key in (pygame.K_1, pygame.K_2, pygame.K_3):
                    self._switch_map(e.key - pygame.K_1)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(480, e.w), max(360, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                handled = False
                for b in self._buttons:
                    handled = b.handle_mouse(e) or handled
                if not handled and e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    cell = cell_at(e.pos, self._grid_origin, self.cell_size,
                                   self.grid.rows, self.grid.cols)
                    if cell is not None:
                        self._apply_edit(cell)

    def _switch_algo(self, key: str):
        if self.running:
            return
        self.selected_algo = key
        self._reset()

    def _switch_map(self, index: int):
        names = list(self.presets)
        if not 0 <= index < len(names):
            return
        name = names[index]
        try:
            grid = load_map(self.presets[name])
        except MapError as ex:
            logger.warning("Failed to load map %s: %s", name, ex)
            return
        self._reset()
        self.grid = grid
        pygame.display.set_caption(f"Pathfinding - {name}")
        self._layout(*self.screen.get_size())

    def _reset_overlays(self):
        self.visited.clear()
        self.path = []
        self.result = None

    def _reset(self):
        self.running = False
        self.state = "Idle"
        self._cancel_search()
        self._reset_overlays()
        self._refresh_active_states()

    def _toggle_run(self):
        if self.phase == "finished":
            self._reset()
        self.running = not self.running
        if self.running and self._events is None:
            self._begin_search()
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = settings.clamp_speed(self.steps_per_sec + dv)

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(PANEL_BG)
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        row, col = cell
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _draw_grid(self):
        for row in range(self.grid.rows):
            for col in range(self.grid.cols):
                rect = self._cell_rect((row, col))
                pygame.draw.rect(self.screen, WALL if self.grid.cells[row][col] else WHITE, rect)
                pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

        for c in self.visited:
            pygame.draw.rect(self.screen, VISITED, self._cell_rect(c).inflate(-1, -1))
        for c in self.path:
            pygame.draw.rect(self.screen, PATH_GREEN, self._cell_rect(c).inflate(-1, -1))

        self._draw_badge(self.grid.start, START_BLUE, "S")
        self._draw_badge(self.grid.goal, GOAL_RED, "G")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], label: str):
        rect = self._cell_rect(cell)
        pygame.draw.rect(self.screen, color, rect)
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 32
        gap = 8
        third = (w - 2 * 6) // 3
        editable = lambda: not self._search_active()

        def add(label, cb, *, togglable=False, enabled=None, store_as: str | None = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable, enabled=enabled)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        def add_row(specs, enabled=None):
            for i, (label, cb, store_as) in enumerate(specs):
                rect = pygame.Rect(x + i * (third + 6), y, third, h)
                btn = UIButton(label, rect, cb, togglable=True, enabled=enabled)
                self._buttons.append(btn)
                setattr(self, store_as, btn)

        add("Run / Pause  [Space]", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step  [N]", lambda: None if self.running else self._do_step(),
            enabled=lambda: self.phase != "finished"); y += h + gap
        add("Reset  [R]", self._reset); y += h + gap
        add("Clear Walls  [C]", self._clear_grid, enabled=editable); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed -", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-5)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+5)))
        y += h + gap

        add_row([(ALGO_LABELS[key], lambda k=key: self._switch_algo(k), f"btn_algo_{key}")
                 for key in ALGO_LABELS], enabled=lambda: not self.running)
        y += h + gap
        add_row([(mode.capitalize(), lambda m=mode: self._set_edit_mode(m), f"btn_mode_{mode}")
                 for mode in EDIT_MODES], enabled=editable)

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        for key in ALGO_LABELS:
            btn = getattr(self, f"btn_algo_{key}", None)
            if btn:
                btn.set_active(self.selected_algo == key)
        for mode in EDIT_MODES:
            btn = getattr(self, f"btn_mode_{mode}", None)
            if btn:
                btn.set_active(self.edit_mode == mode)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 20, 210), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"State: {self.state}")
        line(f"Visited: {len(self.visited)}")
        if self.result is not None and self.result.status == NO_PATH:
            line("Path: none")
        else:
            line(f"Path Len: {max(0, len(self.path) - 1)}")
        line(f"Algo: {ALGO_LABELS.get(self.selected_algo, self.selected_algo)}")
        line(f"Edit: {self.edit_mode}")
        line(f"Speed: {self.steps_per_sec} cells/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main():
    settings.configure_logging()
    grid = Grid.empty(settings.ROWS, settings.COLS, settings.DEFAULT_START, settings.DEFAULT_GOAL)
    Viewer(grid, algo=settings.resolve_algo(), speed=settings.resolve_speed()).run()


if __name__ == "__main__":
    main()
