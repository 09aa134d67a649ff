
"""Scoring and level progression"""

LINES_PER_LEVEL = 10
LINE_CLEAR_POINTS = {1: 100, 2: 300, 3: 500, 4: 800}   # multiplied by level
SOFT_DROP_POINTS = 1   # per cell
HARD_DROP_POINTS = 2   # per cell


def line_clear_score(cleared: int, level: int) -> int:
    return LINE_CLEAR_POINTS.get(cleared, 0) * level


def soft_drop_score(cells: int) -> int:
    return cells * SOFT_DROP_POINTS


def hard_drop_score(distance: int) -> int:
    return distance * HARD_DROP_POINTS


def level_for(lines: int, start_level: int = 1) -> int:
    return lines // LINES_PER_LEVEL + (start_level - 1) + 1
