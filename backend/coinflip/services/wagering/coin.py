import itertools
import random

HEADS = 'HEADS'
TAILS = 'TAILS'


class RandomCoin:
    """Fair coin backed by the operating system's random source."""

    def __init__(self, rng=None):
        self._rng = rng or random.SystemRandom()

    def flip(self) -> str:
        return HEADS if self._rng.random() < 0.5 else TAILS


class SequenceCoin:
    """Coin that replays a fixed sequence of outcomes, cycling when exhausted."""

    def __init__(self, outcomes):
        outcomes = [str(o).upper() for o in outcomes]
        if not outcomes or any(o not in (HEADS, TAILS) for o in outcomes):
            raise ValueError('outcomes must be a non-empty list of HEADS/TAILS')
        self._outcomes = itertools.cycle(outcomes)

    def flip(self) -> str:
        return next(self._outcomes)
