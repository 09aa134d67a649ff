
"""
Rendering helpers for the pygame front end.

- Pre-render block cell Surfaces per color tag (solid + ghost outline).
- Pre-render static background (grid + panel frame) once per Dims.
- Cache a BOARD SURFACE with the settled blocks; rebuild it only when the
  snapshot's board changes.
- Cache HUD text surfaces; re-render only when values change.
- LineSweep: column-by-column highlight of cleared rows before the
  cleared board becomes visible.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Tuple, Optional
from tetris_board import drop_distance
from tetris_config import CONFIG
from tetris_game import GameState, Phase
from tetris_layout import Dims

# RGB per color tag
COLORS: Dict[str, Tuple[int,int,int]] = {
    "cyan": (102,224,255),
    "yellow": (255,224,102),
    "purple": (200,119,255),
    "green": (94,224,142),
    "red": (255,102,119),
    "blue": (106,119,255),
    "orange": (255,158,94),
}
SWEEP_COLOR = (255,255,255)
BG_COLOR = (10,13,34)


@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    next_color: str = ""
    next_shape: tuple = ()
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    next_s: Optional[pygame.Surface] = None
    controls: Optional[list] = None


class LineSweep:
    """Reveals a line clear one column every step_ms, then reports done."""
    def __init__(self, board, rows, cols: int, step_ms: Optional[int] = None):
        self.board = [list(r) for r in board]
        self.rows = tuple(rows)
        self.cols = cols
        self.step_ms = CONFIG["LINE_CLEAR_STEP_MS"] if step_ms is None else step_ms
        self.column = 0
        self.elapsed = 0

    @property
    def done(self) -> bool:
        return self.column > self.cols

    def update(self, dt) -> bool:
        self.elapsed += dt
        while not self.done and self.elapsed >= self.step_ms:
            self.elapsed -= self.step_ms
            self.column += 1
        return self.done


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: Optional[pygame.font.Font]):
        self.dims = dims
        self.font = font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_key = None

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG_COLOR)
        grid_col = (40,50,90)
        for x in range(d.cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(d.rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        # Next preview frame
        self.pv_cell = max(14, int(d.cell*0.75))
        self.pv_x = d.panel_x + 12
        self.pv_y = d.panel_y + 150
        frame = pygame.Rect(self.pv_x-6, self.pv_y-6, self.pv_cell*4+12, self.pv_cell*4+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        self.ghost_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for tag, col in list(COLORS.items()) + [("sweep", SWEEP_COLOR)]:
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[tag] = s
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0,0,c-8,c-8), 2)
            self.ghost_surf[tag] = g

    def cell_xy(self, bx: int, by: int) -> Tuple[int, int]:
        return self.dims.board_x + bx*self.dims.cell, self.dims.board_y + by*self.dims.cell

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, board):
        """Rebuilds the settled-blocks surface if the board contents changed."""
        key = tuple(tuple(r) for r in board)
        if key == self._board_key:
            return
        self._board_key = key
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y, row in enumerate(board):
            for x, tag in enumerate(row):
                if tag:
                    self.board_surface.blit(self.cell_surf[tag], (x*c + 1, y*c + 1))

    def draw_board(self, screen: pygame.Surface, board):
        screen.blit(self.bg, (0,0))
        self.rebuild_board_surface(board)
        screen.blit(self.board_surface, (self.dims.board_x, self.dims.board_y))

    def draw_piece(self, screen: pygame.Surface, state: GameState):
        p, pos = state.piece, state.position
        if p is None or pos is None:
            return
        gy = pos.y + drop_distance([list(r) for r in state.board], p, pos)
        for x, y in p.cells():
            if gy + y >= 0:
                rx, ry = self.cell_xy(pos.x + x, gy + y)
                screen.blit(self.ghost_surf[p.color], (rx + 4, ry + 4))
        for x, y in p.cells():
            if pos.y + y >= 0:
                rx, ry = self.cell_xy(pos.x + x, pos.y + y)
                screen.blit(self.cell_surf[p.color], (rx + 1, ry + 1))

    def draw_sweep(self, screen: pygame.Surface, sweep: LineSweep):
        for y in sweep.rows:
            for x in range(min(sweep.column, self.dims.cols)):
                rx, ry = self.cell_xy(x, y)
                screen.blit(self.cell_surf["sweep"], (rx + 1, ry + 1))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, state: GameState, muted: bool = False):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Tetris", True, (197,202,233))
        if state.score != self.hud.score:
            self.hud.score = state.score
            self.hud.score_s = f.render(f"Score: {state.score}", True, (200,210,240))
        level = state.level
        if level != self.hud.level:
            self.hud.level = level
            self.hud.level_s = f.render(f"Level: {level}", True, (200,210,240))
        if state.lines != self.hud.lines:
            self.hud.lines = state.lines
            self.hud.lines_s = f.render(f"Lines: {state.lines}", True, (200,210,240))
        nxt = state.next_piece
        if nxt is not None and (nxt.color, nxt.shape) != (self.hud.next_color, self.hud.next_shape):
            self.hud.next_color, self.hud.next_shape = nxt.color, nxt.shape
            s = pygame.Surface((self.pv_cell*4, self.pv_cell*4), pygame.SRCALPHA)
            offx = (4 - nxt.width) // 2
            offy = max(0, (4 - nxt.height) // 2)
            for x, y in nxt.cells():
                block = pygame.Surface((self.pv_cell-2, self.pv_cell-2))
                block.fill(COLORS[nxt.color])
                s.blit(block, ((x + offx) * self.pv_cell + 1, (y + offy) * self.pv_cell + 1))
            self.hud.next_s = s
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(f.render("Next:", True, (200,210,240)), (d.panel_x + 12, d.panel_y + 126))
        if nxt is not None and self.hud.next_s:
            screen.blit(self.hud.next_s, (self.pv_x, self.pv_y))
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, (200,210,240)),
                f.render("←/→ Move", True, (165,175,215)),
                f.render("↓ Soft drop", True, (165,175,215)),
                f.render("↑ Rotate", True, (165,175,215)),
                f.render("Space Hard drop", True, (165,175,215)),
                f.render("P Pause • R Restart", True, (165,175,215)),
                f.render("Enter Start • +/- Level", True, (165,175,215)),
                f.render("M Mute", True, (165,175,215)),
            ]
        y = d.panel_y + 260
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20
        if muted:
            screen.blit(f.render("Muted", True, (165,175,215)), (d.panel_x + 12, y + 8))

    def draw_banner(self, screen: pygame.Surface, state: GameState, big_font: pygame.font.Font):
        text = banner_text(state)
        if not text:
            return
        d = self.dims
        msg = big_font.render(text, True, (255,220,220))
        rect = msg.get_rect(center=(d.board_x + d.board_w // 2, d.board_y + d.board_h // 2))
        screen.blit(msg, rect)


def banner_text(state: GameState) -> str:
    if state.phase is Phase.NOT_STARTED:
        return "Enter to Start"
    if state.phase is Phase.PAUSED:
        return "PAUSED (P)"
    if state.phase is Phase.GAME_OVER:
        return "GAME OVER (R)"
    return ""
