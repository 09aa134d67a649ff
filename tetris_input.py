
"""Keyboard to intent mapping, DAS/ARR auto-repeat"""
from typing import Optional, Sequence
import pygame
from tetris_config import CONFIG
from tetris_game import Intent

# One intent per key press
KEYMAP = {
    pygame.K_UP: Intent.ROTATE,
    pygame.K_w: Intent.ROTATE,
    pygame.K_SPACE: Intent.HARD_DROP,
    pygame.K_p: Intent.TOGGLE_PAUSE,
    pygame.K_ESCAPE: Intent.TOGGLE_PAUSE,
    pygame.K_m: Intent.TOGGLE_MUTE,
    pygame.K_RETURN: Intent.START,
    pygame.K_KP_ENTER: Intent.START,
    pygame.K_r: Intent.RESTART,
    pygame.K_EQUALS: Intent.START_LEVEL_UP,
    pygame.K_PLUS: Intent.START_LEVEL_UP,
    pygame.K_KP_PLUS: Intent.START_LEVEL_UP,
    pygame.K_MINUS: Intent.START_LEVEL_DOWN,
    pygame.K_KP_MINUS: Intent.START_LEVEL_DOWN,
}

# Held keys, repeated by ShiftRepeat
LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
DOWN_KEYS = (pygame.K_DOWN, pygame.K_s)


def intent_for_key(key: int) -> Optional[Intent]:
    return KEYMAP.get(key)


def any_held(keys, codes: Sequence[int]) -> bool:
    return any(keys[c] for c in codes)


class ShiftRepeat:
    """
    Auto-repeat for a held direction.

    The first step fires on press, then nothing until das_ms has passed,
    then one step every arr_ms (0 => every update). Switching or releasing
    the direction resets the timers.
    """
    def __init__(self, das_key: str = "DAS_MS", arr_key: str = "ARR_MS"):
        self.das_key, self.arr_key = das_key, arr_key
        self.dir=0; self.held_ms=0; self.last=0; self.initial=False

    def update(self, dt, neg: bool, pos: bool) -> int:
        nd=(-1 if neg else 0)+(1 if pos else 0)
        if nd!=self.dir:
            self.dir=nd; self.held_ms=0; self.last=0; self.initial=False
        if self.dir==0: return 0
        self.held_ms+=dt
        if not self.initial:
            self.initial=True; return self.dir
        if self.held_ms < CONFIG[self.das_key]: return 0
        arr=CONFIG[self.arr_key]
        if arr==0: return self.dir
        self.last+=dt
        if self.last>=arr:
            self.last=0; return self.dir
        return 0
