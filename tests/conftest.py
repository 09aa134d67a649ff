import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from tetris_board import create_board


@pytest.fixture
def board():
    return create_board(10, 20)


@pytest.fixture
def font():
    import pygame
    pygame.font.init()
    yield pygame.font.Font(None, 22)
    pygame.font.quit()
