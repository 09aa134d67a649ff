
import argparse
import logging
import sys

import pygame

from tetris_board import place
from tetris_config import CONFIG
from tetris_game import (Game, Intent, IntentResult, LinesCleared, Outcome, PauseToggled, Phase,
                         PieceLocked, PieceSpawned)
from tetris_gravity import GravityClock
from tetris_input import DOWN_KEYS, LEFT_KEYS, RIGHT_KEYS, ShiftRepeat, any_held, intent_for_key
from tetris_layout import compute_dims
from tetris_render import LineSweep, RenderAssets

logger = logging.getLogger(__name__)


def get_args(argv=None):
    parser = argparse.ArgumentParser("""Falling-block puzzle game (pygame front end)""")
    parser.add_argument("--start-level", type=int, default=CONFIG["START_LEVEL"],
                        help="Level to start at (1-30)")
    parser.add_argument("--seed", type=int, default=CONFIG["BAG_SEED"],
                        help="Seed for the piece randomizer")
    parser.add_argument("--cell-size", type=int, default=CONFIG["CELL_SIZE"],
                        help="Size of a block in pixels")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


class GameHost:
    """
    Drives a Game from outside: turns held keys and elapsed time into
    intents, and turns the engine's events into gravity resets and the
    line-clear sweep. Knows nothing about drawing.
    """
    def __init__(self, game: Game):
        self.game = game
        self.gravity = GravityClock()
        self.shift = ShiftRepeat()
        self.soft = ShiftRepeat("DAS_MS", "SOFT_DROP_ARR_MS")
        self.sweep = None
        self.muted = False

    def submit(self, intent: Intent) -> IntentResult:
        before = self.game.snapshot()
        result = self.game.apply(intent)
        if intent is Intent.TOGGLE_MUTE:
            self.muted = not self.muted
        if intent is Intent.RESTART:
            self.sweep = None
        locked = None
        for ev in result.events:
            if isinstance(ev, PieceSpawned):
                self.gravity.reset()
            elif isinstance(ev, PieceLocked):
                locked = place([list(r) for r in before.board], ev.piece, ev.position)
            elif isinstance(ev, LinesCleared) and self.game.phase is Phase.LINE_CLEARING:
                self.sweep = LineSweep(locked, ev.rows, self.game.cols)
            elif isinstance(ev, PauseToggled) and not ev.paused:
                self.gravity.reset()
        if result.outcome is not Outcome.IGNORED:
            logger.debug("%s -> %s", intent.value, result.outcome.value)
        return result

    def update(self, dt, keys):
        if self.sweep is not None:
            if self.sweep.update(dt):
                self.sweep = None
                self.submit(Intent.FINISH_LINE_CLEAR)
            return
        if self.game.phase is not Phase.FALLING:
            return
        step = self.shift.update(dt, any_held(keys, LEFT_KEYS), any_held(keys, RIGHT_KEYS))
        if step:
            self.submit(Intent.MOVE_LEFT if step < 0 else Intent.MOVE_RIGHT)
        if self.soft.update(dt, False, any_held(keys, DOWN_KEYS)):
            self.submit(Intent.SOFT_DROP)
        for _ in range(self.gravity.update(dt, self.game.level)):
            self.submit(Intent.GRAVITY_TICK)
            if self.game.phase is not Phase.FALLING:
                break


def main(argv=None):
    args = get_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])

    dims = compute_dims(cell=args.cell_size)
    try:
        screen = pygame.display.set_mode((dims.total_w, dims.total_h), pygame.DOUBLEBUF, vsync=1)
    except TypeError:
        screen = pygame.display.set_mode((dims.total_w, dims.total_h), pygame.DOUBLEBUF)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)
    render = RenderAssets(dims, font)
    clock = pygame.time.Clock()

    host = GameHost(Game(dims.cols, dims.rows, seed=args.seed, start_level=args.start_level,
                         hold_line_clears=True))

    while True:
        dt = clock.tick(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if e.type == pygame.KEYDOWN:
                intent = intent_for_key(e.key)
                if intent is not None:
                    host.submit(intent)

        host.update(dt, pygame.key.get_pressed())

        state = host.game.snapshot()
        if host.sweep is not None:
            render.draw_board(screen, host.sweep.board)
            render.draw_sweep(screen, host.sweep)
        else:
            render.draw_board(screen, state.board)
            render.draw_piece(screen, state)
        render.draw_panel_hud(screen, state, host.muted)
        render.draw_banner(screen, state, big_font)
        pygame.display.flip()


if __name__ == '__main__':
    main()
