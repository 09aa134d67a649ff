
"""Gravity curve and tick accumulator"""


def fall_interval_ms(level: int) -> int:
    """Milliseconds between gravity ticks at the given level."""
    if level <= 9:
        return 1000 - (level - 1) * 100
    return max(50, 200 - (level - 10) * 10)


class GravityClock:
    """
    Turns elapsed time into gravity ticks.

    The host advances the clock with the milliseconds since its last frame
    and submits one gravity intent per returned tick. While the game is
    paused the host simply stops calling update().
    """
    def __init__(self):
        self.acc = 0

    def reset(self):
        self.acc = 0

    def update(self, dt_ms, level: int) -> int:
        interval = fall_interval_ms(level)
        self.acc += dt_ms
        ticks = 0
        while self.acc >= interval:
            self.acc -= interval
            ticks += 1
        return ticks
