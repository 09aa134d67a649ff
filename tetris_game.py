
"""
Game session state machine.

A Game owns one session: the settled board, the falling piece and its
position, the preview piece, score, level and line count, and the phase.
Every player or timer input arrives as an Intent and runs to completion
before the next one; the result says whether the intent was accepted,
rejected (blocked move or rotation), ended in a lock, or ignored because
the current phase does not allow it. Intents never raise.

Phases::

    NOT_STARTED --start--> FALLING <--toggle_pause--> PAUSED
    FALLING --lock with clear (hold mode)--> LINE_CLEARING --finish--> FALLING
    FALLING --spawn blocked--> GAME_OVER
    any --restart--> NOT_STARTED

Things that happen along the way (a lock, a line clear, game over) are
reported as event objects so a front end can play cues or animations
without the engine knowing about either.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from tetris_board import (Board, create_board, drop_distance, is_valid_placement,
                          overlay, place, scan_and_clear_full_rows)
from tetris_config import CONFIG
from tetris_piece import Piece, PieceKind, Position, resolve_rotation, spawn_position
from tetris_rng import BagRandomizer
from tetris_scoring import hard_drop_score, level_for, line_clear_score, soft_drop_score

logger = logging.getLogger(__name__)


class Phase(Enum):
    NOT_STARTED = "not_started"
    FALLING = "falling"
    LINE_CLEARING = "line_clearing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Intent(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"
    HARD_DROP = "hard_drop"
    TOGGLE_PAUSE = "toggle_pause"
    TOGGLE_MUTE = "toggle_mute"   # front end only, never changes the session
    GRAVITY_TICK = "gravity_tick"
    START = "start"
    RESTART = "restart"
    START_LEVEL_UP = "start_level_up"
    START_LEVEL_DOWN = "start_level_down"
    FINISH_LINE_CLEAR = "finish_line_clear"


class Outcome(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    LOCKED = "locked"
    IGNORED = "ignored"


# -------------------------------------------------------------
# EVENTS
# -------------------------------------------------------------
@dataclass(frozen=True)
class GameStarted:
    start_level: int

@dataclass(frozen=True)
class PieceSpawned:
    kind: PieceKind
    position: Position

@dataclass(frozen=True)
class PieceMoved:
    dx: int
    dy: int
    player: bool

@dataclass(frozen=True)
class PieceRotated:
    kick: Tuple[int, int]

@dataclass(frozen=True)
class HardDropped:
    distance: int
    points: int

@dataclass(frozen=True)
class PieceLocked:
    piece: Piece
    position: Position

@dataclass(frozen=True)
class LinesCleared:
    rows: Tuple[int, ...]
    count: int
    points: int

@dataclass(frozen=True)
class LevelChanged:
    level: int

@dataclass(frozen=True)
class PauseToggled:
    paused: bool

@dataclass(frozen=True)
class GameOver:
    score: int
    level: int
    lines: int


@dataclass(frozen=True)
class IntentResult:
    outcome: Outcome
    events: Tuple[object, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.outcome is Outcome.ACCEPTED


IGNORED = IntentResult(Outcome.IGNORED)
REJECTED = IntentResult(Outcome.REJECTED)


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot handed to renderers."""
    board: Tuple[Tuple[Optional[str], ...], ...]
    piece: Optional[Piece]
    position: Optional[Position]
    next_piece: Optional[Piece]
    score: int
    level: int
    lines: int
    start_level: int
    phase: Phase

    @property
    def started(self) -> bool:
        return self.phase not in (Phase.NOT_STARTED, Phase.GAME_OVER)

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def display_board(self) -> Board:
        return overlay([list(r) for r in self.board], self.piece, self.position)


def clamp_start_level(level: int) -> int:
    return max(CONFIG["MIN_START_LEVEL"], min(CONFIG["MAX_START_LEVEL"], level))


class Game:
    def __init__(self, cols: Optional[int] = None, rows: Optional[int] = None,
                 seed: Optional[int] = None, start_level: Optional[int] = None,
                 hold_line_clears: bool = False):
        self.cols = cols or CONFIG["COLS"]
        self.rows = rows or CONFIG["ROWS"]
        self.rng = BagRandomizer(seed)
        self.hold_line_clears = hold_line_clears
        self.start_level = clamp_start_level(start_level or CONFIG["START_LEVEL"])
        self._reset()

    def _reset(self):
        self.board: Board = create_board(self.cols, self.rows)
        self.piece: Optional[Piece] = None
        self.position: Optional[Position] = None
        self.next_piece: Optional[Piece] = None
        self.score = 0
        self.lines = 0
        self.level = self.start_level
        self.phase = Phase.NOT_STARTED

    def snapshot(self) -> GameState:
        return GameState(
            board=tuple(tuple(r) for r in self.board),
            piece=self.piece, position=self.position, next_piece=self.next_piece,
            score=self.score, level=self.level, lines=self.lines,
            start_level=self.start_level, phase=self.phase,
        )

    # ---------- session control ----------
    def start(self, start_level: Optional[int] = None) -> IntentResult:
        if self.phase is not Phase.NOT_STARTED:
            return IGNORED
        if start_level is not None:
            self.start_level = clamp_start_level(start_level)
        self._reset()
        self.rng.reset()
        self.next_piece = Piece.spawn(self.rng.next_piece())
        self.phase = Phase.FALLING
        logger.info("game started at level %d", self.start_level)
        events: List[object] = [GameStarted(self.start_level)]
        self._spawn(events)
        return IntentResult(Outcome.ACCEPTED, tuple(events))

    def restart(self) -> IntentResult:
        self._reset()
        return IntentResult(Outcome.ACCEPTED)

    def set_start_level(self, delta: int) -> IntentResult:
        if self.phase is not Phase.NOT_STARTED:
            return IGNORED
        level = clamp_start_level(self.start_level + delta)
        if level == self.start_level:
            return REJECTED
        self.start_level = self.level = level
        return IntentResult(Outcome.ACCEPTED, (LevelChanged(level),))

    def toggle_pause(self) -> IntentResult:
        if self.phase is Phase.FALLING:
            self.phase = Phase.PAUSED
        elif self.phase is Phase.PAUSED:
            self.phase = Phase.FALLING
        else:
            return IGNORED
        return IntentResult(Outcome.ACCEPTED, (PauseToggled(self.paused),))

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED

    def finish_line_clear(self) -> IntentResult:
        if self.phase is not Phase.LINE_CLEARING:
            return IGNORED
        self.phase = Phase.FALLING
        return IntentResult(Outcome.ACCEPTED)

    # ---------- piece control ----------
    def move(self, dx: int, dy: int, player: bool = False) -> IntentResult:
        if self.phase is not Phase.FALLING:
            return IGNORED
        target = self.position.moved(dx, dy)
        if is_valid_placement(self.board, self.piece, target):
            self.position = target
            if player and dy > 0:
                self.score += soft_drop_score(dy)
            return IntentResult(Outcome.ACCEPTED, (PieceMoved(dx, dy, player),))
        if dy > 0:
            events: List[object] = []
            self._lock(events)
            return IntentResult(Outcome.LOCKED, tuple(events))
        return REJECTED

    def gravity_tick(self) -> IntentResult:
        return self.move(0, 1, player=False)

    def rotate(self) -> IntentResult:
        if self.phase is not Phase.FALLING:
            return IGNORED
        res = resolve_rotation(self.board, self.piece, self.position)
        if not res.accepted:
            return REJECTED
        kick = (res.position.x - self.position.x, res.position.y - self.position.y)
        self.piece, self.position = res.piece, res.position
        return IntentResult(Outcome.ACCEPTED, (PieceRotated(kick),))

    def hard_drop(self) -> IntentResult:
        if self.phase is not Phase.FALLING:
            return IGNORED
        distance = drop_distance(self.board, self.piece, self.position)
        points = hard_drop_score(distance)
        self.position = self.position.moved(0, distance)
        self.score += points
        events: List[object] = [HardDropped(distance, points)]
        self._lock(events)
        return IntentResult(Outcome.LOCKED, tuple(events))

    # ---------- lock / clear / spawn ----------
    def _lock(self, events: List[object]):
        piece, pos = self.piece, self.position
        events.append(PieceLocked(piece, pos))
        cleared = scan_and_clear_full_rows(place(self.board, piece, pos))
        self.board = cleared.board
        logger.debug("locked %s at (%d, %d)", piece.kind.value, pos.x, pos.y)
        if cleared.cleared_count:
            points = line_clear_score(cleared.cleared_count, self.level)
            self.score += points
            self.lines += cleared.cleared_count
            events.append(LinesCleared(cleared.cleared_rows, cleared.cleared_count, points))
            logger.debug("cleared rows %s for %d points", cleared.cleared_rows, points)
        level = level_for(self.lines, self.start_level)
        if level != self.level:
            self.level = level
            events.append(LevelChanged(level))
            logger.debug("level %d", level)
        self.piece = self.position = None
        if self._spawn(events) and cleared.cleared_count and self.hold_line_clears:
            self.phase = Phase.LINE_CLEARING

    def _spawn(self, events: List[object]) -> bool:
        piece = self.next_piece
        self.next_piece = Piece.spawn(self.rng.next_piece())
        pos = spawn_position(piece, self.cols)
        if not is_valid_placement(self.board, piece, pos):
            self.phase = Phase.GAME_OVER
            events.append(GameOver(self.score, self.level, self.lines))
            logger.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines)
            return False
        self.piece, self.position = piece, pos
        events.append(PieceSpawned(piece.kind, pos))
        return True

    # ---------- intent dispatch ----------
    def apply(self, intent: Intent) -> IntentResult:
        if intent is Intent.MOVE_LEFT: return self.move(-1, 0, player=True)
        if intent is Intent.MOVE_RIGHT: return self.move(1, 0, player=True)
        if intent is Intent.SOFT_DROP: return self.move(0, 1, player=True)
        if intent is Intent.ROTATE: return self.rotate()
        if intent is Intent.HARD_DROP: return self.hard_drop()
        if intent is Intent.TOGGLE_PAUSE: return self.toggle_pause()
        if intent is Intent.TOGGLE_MUTE: return IGNORED
        if intent is Intent.GRAVITY_TICK: return self.gravity_tick()
        if intent is Intent.START: return self.start()
        if intent is Intent.RESTART: return self.restart()
        if intent is Intent.START_LEVEL_UP: return self.set_start_level(1)
        if intent is Intent.START_LEVEL_DOWN: return self.set_start_level(-1)
        if intent is Intent.FINISH_LINE_CLEAR: return self.finish_line_clear()
        raise ValueError(f"unknown intent: {intent!r}")


def apply_intent(game: Game, intent: Intent) -> Tuple[GameState, Tuple[object, ...]]:
    """Apply one intent and return the new snapshot with the events it produced."""
    result = game.apply(intent)
    return game.snapshot(), result.events
