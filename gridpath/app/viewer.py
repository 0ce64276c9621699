# gridpath/app/viewer.py
#!/usr/bin/env python3
"""
Dijkstra Grid Viewer — header controls + grid sized to the window

- Mouse:
    click on grid   -> place start / end, or toggle a wall (by mode)
    drag on grid    -> paint walls (wall mode)
- Keyboard:
    [S]/[E]/[W]  -> mode: start / end / walls
    [SPACE]      -> visualize
    [X]          -> clear visualization
    [C]          -> clear all walls
    [M]          -> random maze
    [Q]/[ESC]    -> quit

Settings: see gridpath.app.config (ENV GRIDPATH_* or --key=value).
"""

# --- bootstrap import path so `from gridpath...` works when run as a script ---
import sys, time, random
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -----------------------------------------------------------------------------

from typing import Optional, Tuple
import pygame

from gridpath.app.config import Settings, resolve_settings
from gridpath.app.session import Session
from gridpath.core.grid import Grid
from gridpath.core.maps import load_map, resolve_map

# ---------- Config ----------
HEADER_H = 60
WINDOW_DEFAULT = (1000, 720)
MIN_WINDOW = (480, 240)
FONT_NAME = None  # default pygame font

# Colors
WHITE         = (255,255,255)
GRID_LINE     = (175,216,248)
WALL          = ( 12, 53, 71)
START         = ( 46,139, 87)
END           = (220, 50, 47)
VISITED       = ( 64,206,227)
SHORTEST_PATH = (255,254,106)
HEADER_BG     = ( 24, 28, 36)
TEXT_LIGHT    = (230,235,240)
ACCENT_GOLD   = (255,210,  0)

# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False   # highlight state
        self.enabled = True

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        if not self.enabled:
            bg = (30, 32, 38)
        elif self.active and self.togglable:
            bg = (58, 86, 160)
        elif self.hover:
            bg = (46, 50, 60)
        else:
            bg = (36, 40, 48)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        if self.active and self.togglable:
            pygame.draw.rect(screen, (120,170,255), self.rect, width=2, border_radius=8)

        color = (235,238,242) if self.enabled else (110,114,122)
        text = font.render(self.label, True, color)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.enabled and self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False

# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: Session, settings: Settings, *, fixed_grid: bool = False):
        pygame.init()

        self.session = session
        self.settings = settings
        self.cell_size = settings.cell_size
        self.fixed_grid = fixed_grid   # loaded maps keep their size on resize
        self.rng = random.Random(settings.seed)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_small = pygame.font.Font(FONT_NAME, 16)

        if fixed_grid:
            g = session.grid
            win = (max(MIN_WINDOW[0], g.cols * self.cell_size),
                   max(MIN_WINDOW[1], HEADER_H + g.rows * self.cell_size))
        else:
            win = WINDOW_DEFAULT
        self.screen = pygame.display.set_mode(win, pygame.RESIZABLE)
        pygame.display.set_caption("Dijkstra — Grid Visualizer")

        self._buttons: list[UIButton] = []
        self._build_buttons()
        if not fixed_grid:
            self.session.resize(*self._fit_grid(*win))

        self.clock = pygame.time.Clock()

    # ---------- layout ----------
    def _fit_grid(self, win_w: int, win_h: int) -> Tuple[int, int]:
        return Grid.size_for_window(win_w, win_h, self.cell_size, HEADER_H)

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        x, y = pos
        if y < HEADER_H:
            return None
        row = (y - HEADER_H) // self.cell_size
        col = x // self.cell_size
        if not self.session.grid.in_bounds(row, col):
            return None
        return row, col

    def _build_buttons(self):
        self._buttons.clear()
        x, y, h, gap = 10, 12, 36, 8

        def add(label, cb, w, *, togglable=False, store_as: str | None = None):
            nonlocal x
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)
            x += w + gap

        add("Set Start", lambda: self.session.set_mode("start"), 96, togglable=True, store_as="btn_start")
        add("Set End",   lambda: self.session.set_mode("end"),   88, togglable=True, store_as="btn_end")
        add("Walls",     lambda: self.session.set_mode("wall"),  76, togglable=True, store_as="btn_wall")
        add("Clear All", self._clear_all,                        92)
        add("Random Maze", self._random_maze,                    120)
        add("Visualize", self._visualize,                        104, store_as="btn_run")
        self._refresh_active_states()

    def _refresh_active_states(self):
        s = self.session
        for btn, mode in ((self.btn_start, "start"), (self.btn_end, "end"), (self.btn_wall, "wall")):
            btn.active = s.mode == mode
            btn.enabled = not s.busy
        self.btn_end.enabled = not s.busy and s.grid.start is not None
        self.btn_run.enabled = s.can_visualize
        self.btn_run.label = "Visualizing..." if s.busy else "Visualize"
        for btn in self._buttons[3:5]:
            btn.enabled = not s.busy

    # ---------- actions ----------
    def _clear_all(self):
        self.session.clear_all()

    def _random_maze(self):
        self.session.random_maze(self.rng)

    def _visualize(self):
        self.session.visualize(time.time())

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            self.session.tick(time.time())
            self._refresh_active_states()
            self._draw()
            self.clock.tick(60)

    def _handle_events(self):
        s = self.session
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._visualize()
                elif e.key == pygame.K_s:
                    s.set_mode("start")
                elif e.key == pygame.K_e:
                    s.set_mode("end")
                elif e.key == pygame.K_w:
                    s.set_mode("wall")
                elif e.key == pygame.K_x:
                    if not s.busy:
                        s.clear_visualization()
                elif e.key == pygame.K_c:
                    s.clear_all()
                elif e.key == pygame.K_m:
                    self._random_maze()
            elif e.type == pygame.VIDEORESIZE:
                w = max(MIN_WINDOW[0], e.w); h = max(MIN_WINDOW[1], e.h)
                self.screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
                if not self.fixed_grid:
                    s.resize(*self._fit_grid(w, h))
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                cell = self._cell_at(e.pos)
                if cell:
                    s.press(*cell)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                s.release()
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                cell = self._cell_at(e.pos)
                if cell:
                    s.enter(*cell)

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(WHITE)
        self._draw_grid()
        self._draw_header()
        pygame.display.flip()

    def _draw_grid(self):
        g = self.session.grid
        cs = self.cell_size
        for cell in g:
            rect = pygame.Rect(cell.col*cs, HEADER_H + cell.row*cs, cs, cs)
            if cell.is_start:
                color = START
            elif cell.is_end:
                color = END
            elif cell.is_wall:
                color = WALL
            elif g.is_shortest_path(cell):
                color = SHORTEST_PATH
            elif g.is_visited(cell):
                color = VISITED
            else:
                color = WHITE
            pygame.draw.rect(self.screen, color, rect)
            pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    def _draw_header(self):
        w = self.screen.get_width()
        pygame.draw.rect(self.screen, HEADER_BG, pygame.Rect(0, 0, w, HEADER_H))
        for b in self._buttons:
            b.draw(self.screen, self.font)

        s = self.session
        m = s.metrics
        info = f"{s.status}  |  visited {m['visited']}  wave {m['wave']}  path {m['path_len']}"
        surf = self.font_small.render(info, True, ACCENT_GOLD if s.busy else TEXT_LIGHT)
        x = self._buttons[-1].rect.right + 16
        if x + surf.get_width() > w:
            x = max(10, w - surf.get_width() - 10)
        self.screen.blit(surf, (x, (HEADER_H - surf.get_height()) // 2))

# ---------- main ----------
def build_session(settings: Settings) -> Tuple[Session, bool]:
    """Session for the configured map, or an empty one sized later by the viewer."""
    grid = None
    if settings.map_name:
        try:
            grid = load_map(resolve_map(settings.map_name))
        except (OSError, ValueError, KeyError) as ex:
            print(f"Failed to load map {settings.map_name}: {ex}")
    fixed = grid is not None
    if grid is None:
        grid = Grid.build(*Grid.size_for_window(*WINDOW_DEFAULT, settings.cell_size, HEADER_H))
    return Session(grid, settings.wave_delay, settings.path_delay), fixed

def main():
    try:
        settings = resolve_settings()
    except ValueError as ex:
        print(f"Bad settings: {ex}")
        sys.exit(1)
    session, fixed = build_session(settings)
    Viewer(session, settings, fixed_grid=fixed).run()

if __name__ == "__main__":
    main()
