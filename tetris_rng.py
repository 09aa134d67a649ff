
"""7-bag randomizer module"""
import random
from typing import List, Optional

from tetris_piece import PieceKind


class BagRandomizer:
    """
    Deals piece kinds from a shuffled bag holding one of each kind.

    When the bag runs empty it is refilled with a fresh permutation of all
    seven kinds, so every aligned window of seven draws contains each kind
    exactly once and the gap between two equal kinds is at most 12 draws.
    """

    PIECES = list(PieceKind)

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)
        self.bag: List[PieceKind] = []

    @property
    def remaining(self) -> int:
        return len(self.bag)

    def reset(self):
        self.bag.clear()

    def _refill(self):
        self.bag = self.PIECES[:]
        self.rng.shuffle(self.bag)

    def next_piece(self) -> PieceKind:
        if not self.bag:
            self._refill()
        return self.bag.pop()
