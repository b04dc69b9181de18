# gridastar/app/viewer.py
#!/usr/bin/env python3
"""
A* Step Viewer - animates one expansion per tick

- Keyboard:
    [1]..[4]     -> switch bundled map
    [E]          -> toggle eager / lazy goal termination
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Map:
- ENV: GRIDASTAR_MAP=<name|path>
- CLI: --map=<name|path>
"""

import logging
import os
import sys
import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import pygame

from gridastar.core.astar import AStarAlgo
from gridastar.core.errors import GridError
from gridastar.core.maps import DEFAULT_MAP, MapSpec, list_maps, load_map
from gridastar.core.types import Cell, StepResult

log = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 48
MAX_MAP_BUTTONS = 4
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
FLOOR_GRAY  = (200,200,200)
WALL_DARK   = ( 40, 42, 48)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)
CURRENT_A   = (255,210,0,120)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

BTN_IDLE    = (36,40,48,220)
BTN_HOVER   = (46,50,60,230)
BTN_ON      = (58,86,160,235)
BTN_LAZY    = (150,96,40,235)
BTN_EDGE    = (120,170,255)


def resolve_map_name(argv: Sequence[str]) -> str:
    name = os.getenv("GRIDASTAR_MAP", DEFAULT_MAP)
    for arg in argv:
        if arg.startswith("--map="):
            name = arg.split("=", 1)[1]
    return name


# ---------- Panel buttons ----------
class PanelButton:
    """A button whose label and highlight are read from the viewer on every draw.

    label:  str, or a callable returning the current text
    lit:    optional callable; when it returns True the button is drawn highlighted
    lit_bg: highlight fill (the goal-stop button uses BTN_LAZY when switched off)
    """

    def __init__(self, label: Union[str, Callable[[], str]], rect: pygame.Rect,
                 on_click: Callable[[], object], *,
                 lit: Optional[Callable[[], bool]] = None,
                 lit_bg: Union[Tuple, Callable[[], Tuple]] = BTN_ON):
        self._label = label
        self.rect = rect
        self.on_click = on_click
        self._lit = lit
        self._lit_bg = lit_bg
        self.hover = False

    @property
    def label(self) -> str:
        return self._label() if callable(self._label) else self._label

    @property
    def lit(self) -> bool:
        return bool(self._lit and self._lit())

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        if self.lit:
            bg = self._lit_bg() if callable(self._lit_bg) else self._lit_bg
        else:
            bg = BTN_HOVER if self.hover else BTN_IDLE
        face = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(face, bg, face.get_rect(), border_radius=10)
        screen.blit(face, self.rect.topleft)
        if self.lit:
            pygame.draw.rect(screen, BTN_EDGE, self.rect, width=2, border_radius=10)
        text = font.render(self.label, True, TEXT_LIGHT)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos):
            self.on_click()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, spec: MapSpec, map_names: Optional[List[str]] = None):
        pygame.init()

        self.spec = spec
        self.map_names = (map_names if map_names is not None else list_maps())[:MAX_MAP_BUTTONS]
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.cell_size = self._auto_cell_size()
        win_w = GRID_MARGIN*2 + spec.grid.cols * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + spec.grid.rows * self.cell_size, 600)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"A* - {spec.name}")

        self._buttons: List[PanelButton] = []

        self.open_set: set = set()
        self.closed_set: set = set()
        self.current: Optional[Cell] = None
        self.path: List[Cell] = []

        self.alive = True
        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = 8
        self._last_step_t = 0.0
        self.state = "Idle"
        self.eager_goal = True

        self.algo = AStarAlgo(eager_goal=self.eager_goal)
        self.algo.init(spec.grid, spec.start, spec.goal)
        self._last_metrics: Dict = {}
        self._layout(win_w, win_h)
        self._reset()

    # ---------- layout ----------
    def _auto_cell_size(self) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(14, min(CELL_SIZE_DEFAULT, target_h // self.spec.grid.rows))

    def _layout(self, win_w: int, win_h: int):
        """Integer cell_size that fits the window; grid on the left, panel on the right."""
        grid = self.spec.grid
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(8, min(avail_w // grid.cols, avail_h // grid.rows)))

        plate_w = grid.cols * self.cell_size + 2 * GRID_MARGIN
        plate_h = grid.rows * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - plate_h) // 2)
        self.canvas_rect = pygame.Rect(0, top_y, plate_w, plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    # ---------- loop ----------
    def run(self):
        while self.alive:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            if self.alive:
                self._draw()
                self.clock.tick(60)
        pygame.quit()

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    def _do_step(self) -> StepResult:
        res = self.algo.step()
        for c in res.opened: self.open_set.add(c)
        for c in res.closed:
            self.closed_set.add(c)
            self.open_set.discard(c)
        self.current = res.current
        if res.path is not None: self.path = res.path
        if res.status == "done":
            self.state = "Done"; self.running = False
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
        elif res.status == "invalid":
            self.state = "Invalid endpoint"; self.running = False
        else:
            self.state = "Running" if self.running else "Paused"
        if res.metrics:
            self._last_metrics = res.metrics
        if res.error is not None and self.state != getattr(self, "_logged_state", None):
            log.info("%s: %s", self.state, res.error)
        self._logged_state = self.state
        return res

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self.alive = False
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    self.alive = False
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key == pygame.K_e:
                    self._toggle_eager()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif pygame.K_1 <= e.key <= pygame.K_9:
                    idx = e.key - pygame.K_1
                    if idx < len(self.map_names):
                        self._switch_map(self.map_names[idx])
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    # ---------- actions ----------
    def _switch_map(self, name: str):
        try:
            spec = load_map(name)
        except GridError as ex:
            log.error("Failed to load map %s: %s", name, ex)
            return
        self.spec = spec
        pygame.display.set_caption(f"A* - {spec.name}")
        self.algo.init(spec.grid, spec.start, spec.goal)
        self._layout(*self.screen.get_size())
        self._reset()

    def _toggle_eager(self):
        self.eager_goal = not self.eager_goal
        self.algo.eager_goal = self.eager_goal
        self._reset()

    def _reset_overlays(self):
        self.open_set.clear()
        self.closed_set.clear()
        self.current = None
        self.path = []
        self._last_metrics = {
            "algo": self.algo.name,
            "popped": 0,
            "open_size": 0,
            "closed_count": 0,
            "path_len": 0,
            "total_cost": None,
        }

    def _reset(self):
        self.running = False
        self.state = "Idle"
        self._logged_state = None
        self.algo.reset()
        self._reset_overlays()
        self.open_set.update(self.algo.open_set)
        if self.algo.path:
            self.path = list(self.algo.path)

    def _toggle_run(self):
        if self.state in ("Done", "No path", "Invalid endpoint"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = tuple(int(top[i] + (bot[i]-top[i]) * t) for i in range(3))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_rect(self, c: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        row, col = c
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _overlay(self, cells, rgba: Tuple[int, int, int, int]):
        cs = self.cell_size
        s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(rgba)
        for c in cells:
            self.screen.blit(s, self._cell_rect(c).topleft)

    def _draw_grid(self):
        grid = self.spec.grid
        for row in range(grid.rows):
            for col in range(grid.cols):
                rect = self._cell_rect((row, col))
                color = FLOOR_GRAY if grid.is_passable(row, col) else WALL_DARK
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        self._overlay(self.closed_set, NEON_MAG_A)
        self._overlay(self.open_set, NEON_CYAN_A)
        if self.current is not None and not self.path:
            self._overlay([self.current], CURRENT_A)

        if len(self.path) >= 2:
            pts = [self._cell_rect(c).center for c in self.path]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, 5)

        self._draw_badge(self.spec.start, "S", BLUE)
        self._draw_badge(self.spec.goal, "G", RED)

    def _draw_badge(self, cell: Cell, label: str, color: Tuple[int, int, int]):
        if not self.spec.grid.in_bounds(cell):
            return
        cx, cy = self._cell_rect(cell).center
        pygame.draw.circle(self.screen, color, (cx, cy), max(6, self.cell_size//2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=(cx, cy)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons = []
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 36
        gap = 8

        def row(*buttons):
            nonlocal y
            self._buttons.extend(buttons)
            y += h + gap

        row(PanelButton(lambda: "Pause" if self.running else "Run", pygame.Rect(x, y, w, h),
                        self._toggle_run, lit=lambda: self.running))
        row(PanelButton("Step Once", pygame.Rect(x, y, w, h), self._do_step))
        row(PanelButton("Reset", pygame.Rect(x, y, w, h), self._reset))

        half = (w - 8) // 2
        row(PanelButton("Speed -", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)),
            PanelButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))

        # always lit; the fill tells eager (blue) from on-pop (amber)
        row(PanelButton(lambda: f"Goal stop: {self._goal_stop_label()}", pygame.Rect(x, y, w, h),
                        self._toggle_eager, lit=lambda: True,
                        lit_bg=lambda: BTN_ON if self.eager_goal else BTN_LAZY))

        for i, name in enumerate(self.map_names):
            row(PanelButton(f"Map {i + 1}: {name}", pygame.Rect(x, y, w, h),
                            lambda n=name: self._switch_map(n),
                            lit=lambda n=name: n == self.spec.name))

    def _goal_stop_label(self) -> str:
        return "eager" if self.eager_goal else "on pop"

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 230), pygame.SRCALPHA)
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
        m = self._last_metrics
        line(f"Popped: {m.get('popped', 0)}")
        line(f"Open: {m.get('open_size', 0)}")
        line(f"Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("total_cost") is not None:
            line(f"Total Cost: {m['total_cost']:g}")
        line("-" * 26)
        line(f"State: {self.state}")
        line(f"Goal stop: {self._goal_stop_label()}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s: %(message)s")
    try:
        spec = load_map(resolve_map_name(argv))
    except GridError as ex:
        print(f"Failed to load map: {ex}")
        return 2
    Viewer(spec).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
