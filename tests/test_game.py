import random

import pytest

from tetris_game import (Game, GameOver, GameStarted, HardDropped, Intent, LevelChanged,
                         LinesCleared, Outcome, PauseToggled, Phase, PieceLocked, PieceMoved,
                         PieceRotated, PieceSpawned, apply_intent)
from tetris_piece import Piece, PieceKind, Position


def vertical_i():
    return Piece(PieceKind.I, ((1,), (1,), (1,), (1,)), "cyan")


def started(start_level=1, **kw):
    game = Game(seed=11, **kw)
    game.start(start_level)
    return game


def put(game, piece, pos):
    game.piece, game.position = piece, pos


def single_clear_setup(game):
    game.board[19] = [None] * 4 + ["red"] * 6
    put(game, Piece.spawn(PieceKind.I), Position(0, 0))


def test_new_game_is_not_started():
    game = Game(seed=1)
    state = game.snapshot()
    assert state.phase is Phase.NOT_STARTED
    assert state.piece is None and state.next_piece is None
    assert not state.started


def test_start_spawns_piece_and_preview():
    game = Game(seed=1)
    result = game.start(4)
    state = game.snapshot()
    assert result.outcome is Outcome.ACCEPTED
    assert isinstance(result.events[0], GameStarted)
    assert isinstance(result.events[-1], PieceSpawned)
    assert state.phase is Phase.FALLING
    assert state.piece is not None and state.next_piece is not None
    assert state.position.y == 0
    assert state.position.x == (10 - state.piece.width) // 2
    assert (state.score, state.lines, state.level, state.start_level) == (0, 0, 4, 4)
    assert game.rng.remaining == 5


def test_start_only_from_not_started():
    game = started()
    assert game.start().outcome is Outcome.IGNORED


def test_intents_ignored_before_start():
    game = Game(seed=1)
    for intent in (Intent.MOVE_LEFT, Intent.SOFT_DROP, Intent.ROTATE, Intent.HARD_DROP,
                   Intent.GRAVITY_TICK, Intent.TOGGLE_PAUSE):
        assert game.apply(intent).outcome is Outcome.IGNORED
    assert game.snapshot().phase is Phase.NOT_STARTED


def test_sideways_move_and_wall():
    game = started()
    put(game, Piece.spawn(PieceKind.O), Position(1, 5))
    result = game.move(-1, 0, player=True)
    assert result.accepted
    assert result.events == (PieceMoved(-1, 0, True),)
    assert game.position == Position(0, 5)
    result = game.move(-1, 0, player=True)
    assert result.outcome is Outcome.REJECTED
    assert game.position == Position(0, 5)
    assert game.score == 0


def test_soft_drop_scores_gravity_does_not():
    game = started()
    put(game, Piece.spawn(PieceKind.O), Position(4, 0))
    assert game.apply(Intent.SOFT_DROP).accepted
    assert game.score == 1
    assert game.apply(Intent.GRAVITY_TICK).accepted
    assert game.score == 1
    assert game.position == Position(4, 2)


def test_failed_gravity_tick_locks_piece():
    game = started()
    put(game, Piece.spawn(PieceKind.O), Position(4, 17))
    assert game.gravity_tick().accepted
    result = game.gravity_tick()
    assert result.outcome is Outcome.LOCKED
    assert not result.accepted
    assert isinstance(result.events[0], PieceLocked)
    assert result.events[0].position == Position(4, 18)
    assert isinstance(result.events[-1], PieceSpawned)
    assert game.board[18][4] == game.board[19][5] == "yellow"
    assert game.position.y == 0
    assert game.score == 0


def test_failed_soft_drop_locks_without_bonus():
    game = started()
    put(game, Piece.spawn(PieceKind.O), Position(4, 18))
    result = game.apply(Intent.SOFT_DROP)
    assert result.outcome is Outcome.LOCKED
    assert game.score == 0
    assert game.board[19][4] == "yellow"


def test_rotate_at_spawn():
    game = started()
    result = game.apply(Intent.ROTATE)
    assert result.accepted
    assert result.events == (PieceRotated((0, 0)),)


def test_blocked_rotation_is_rejected():
    game = started()
    put(game, Piece.spawn(PieceKind.I), Position(3, 19))
    before = game.snapshot()
    assert game.rotate().outcome is Outcome.REJECTED
    assert game.snapshot() == before


def test_hard_drop_distance_and_bonus():
    game = started()
    piece, x = game.piece, game.position.x
    result = game.hard_drop()
    distance = 20 - piece.height
    assert result.outcome is Outcome.LOCKED
    assert result.events[0] == HardDropped(distance, 2 * distance)
    assert result.events[1] == PieceLocked(piece, Position(x, distance))
    assert game.score == 2 * distance


def test_single_clear_at_level_one():
    game = started()
    single_clear_setup(game)
    result = game.hard_drop()
    clears = [e for e in result.events if isinstance(e, LinesCleared)]
    assert clears == [LinesCleared((19,), 1, 100)]
    assert game.score == 19 * 2 + 100
    assert game.lines == 1
    assert all(c is None for row in game.board for c in row)


def test_four_rows_at_level_three():
    game = started(3)
    for y in range(16, 20):
        game.board[y] = [None] + ["red"] * 9
    put(game, vertical_i(), Position(0, 0))
    result = game.hard_drop()
    clears = [e for e in result.events if isinstance(e, LinesCleared)]
    assert clears == [LinesCleared((16, 17, 18, 19), 4, 2400)]
    assert game.score == 16 * 2 + 2400
    assert game.lines == 4
    assert game.level == 3


def test_clear_uses_level_before_level_up():
    game = started()
    game.lines = 9
    single_clear_setup(game)
    result = game.hard_drop()
    assert LinesCleared((19,), 1, 100) in result.events
    assert LevelChanged(2) in result.events
    assert game.level == 2


def test_level_follows_start_level_and_lines():
    game = started()
    game.lines = 22
    single_clear_setup(game)
    game.hard_drop()
    assert game.lines == 23
    assert game.level == 3


def test_blocked_spawn_ends_game():
    game = started()
    for y in range(2, 20):
        game.board[y] = ["red"] * 9 + [None]
    put(game, Piece.spawn(PieceKind.O), Position(4, 0))
    game.next_piece = Piece.spawn(PieceKind.O)
    result = game.gravity_tick()
    assert result.outcome is Outcome.LOCKED
    assert not any(isinstance(e, LinesCleared) for e in result.events)
    assert result.events[-1] == GameOver(0, 1, 0)
    state = game.snapshot()
    assert state.game_over and not state.started
    assert state.piece is None
    assert state.score == 0
    for intent in (Intent.MOVE_LEFT, Intent.ROTATE, Intent.HARD_DROP, Intent.TOGGLE_PAUSE,
                   Intent.GRAVITY_TICK, Intent.START):
        assert game.apply(intent).outcome is Outcome.IGNORED
    assert game.apply(Intent.RESTART).accepted
    assert game.snapshot().phase is Phase.NOT_STARTED


def test_pause_blocks_piece_intents():
    game = started()
    result = game.toggle_pause()
    assert result.events == (PauseToggled(True),)
    assert game.snapshot().paused
    board_before = game.snapshot()
    for intent in (Intent.MOVE_LEFT, Intent.SOFT_DROP, Intent.ROTATE, Intent.HARD_DROP,
                   Intent.GRAVITY_TICK):
        assert game.apply(intent).outcome is Outcome.IGNORED
    assert game.snapshot() == board_before
    assert game.toggle_pause().events == (PauseToggled(False),)
    assert game.snapshot().phase is Phase.FALLING


def test_start_level_adjusts_only_before_start():
    game = Game(seed=1)
    assert game.apply(Intent.START_LEVEL_DOWN).outcome is Outcome.REJECTED
    assert game.apply(Intent.START_LEVEL_UP).events == (LevelChanged(2),)
    game.set_start_level(100)
    assert game.start_level == 30
    assert game.set_start_level(1).outcome is Outcome.REJECTED
    game.start()
    assert game.level == 30
    assert game.apply(Intent.START_LEVEL_DOWN).outcome is Outcome.IGNORED


def test_start_level_is_clamped():
    assert Game(start_level=99).start_level == 30
    game = Game(seed=1)
    game.start(-4)
    assert game.level == 1


def test_restart_keeps_start_level():
    game = started(7)
    game.hard_drop()
    assert game.restart().accepted
    state = game.snapshot()
    assert state.phase is Phase.NOT_STARTED
    assert (state.score, state.lines, state.level, state.start_level) == (0, 0, 7, 7)
    assert all(c is None for row in state.board for c in row)


def test_hold_mode_waits_for_line_clear():
    game = started(hold_line_clears=True)
    single_clear_setup(game)
    game.hard_drop()
    assert game.snapshot().phase is Phase.LINE_CLEARING
    assert game.snapshot().piece is not None
    assert game.apply(Intent.GRAVITY_TICK).outcome is Outcome.IGNORED
    assert game.apply(Intent.TOGGLE_PAUSE).outcome is Outcome.IGNORED
    assert game.apply(Intent.FINISH_LINE_CLEAR).accepted
    assert game.snapshot().phase is Phase.FALLING
    assert game.finish_line_clear().outcome is Outcome.IGNORED


def test_lock_without_clear_skips_hold():
    game = started(hold_line_clears=True)
    game.hard_drop()
    assert game.snapshot().phase is Phase.FALLING


def test_mute_is_not_engine_state():
    game = started()
    before = game.snapshot()
    assert game.apply(Intent.TOGGLE_MUTE).outcome is Outcome.IGNORED
    assert game.snapshot() == before


def test_unknown_intent_raises():
    with pytest.raises(ValueError):
        Game().apply("jump")


def test_apply_intent_returns_snapshot_and_events():
    game = Game(seed=2)
    state, events = apply_intent(game, Intent.START)
    assert state.phase is Phase.FALLING
    assert isinstance(events[0], GameStarted)


def test_display_board_includes_falling_piece():
    game = started()
    put(game, Piece.spawn(PieceKind.O), Position(0, 0))
    state = game.snapshot()
    assert state.display_board()[1][1] == "yellow"
    assert state.board[1][1] is None


def test_random_play_keeps_invariants():
    rnd = random.Random(99)
    game = started()
    intents = [Intent.MOVE_LEFT, Intent.MOVE_RIGHT, Intent.SOFT_DROP, Intent.ROTATE,
               Intent.HARD_DROP, Intent.GRAVITY_TICK, Intent.GRAVITY_TICK]
    score = lines = 0
    for _ in range(2000):
        game.apply(rnd.choice(intents))
        state = game.snapshot()
        assert state.score >= score and state.lines >= lines
        score, lines = state.score, state.lines
        assert (state.piece is not None) == (state.phase in (Phase.FALLING, Phase.LINE_CLEARING))
        assert len(state.board) == 20 and all(len(r) == 10 for r in state.board)
        if state.game_over:
            game.restart()
            game.start()
            score = lines = 0
