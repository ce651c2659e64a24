import random
import string
import threading
import time
from typing import Optional

AWAITING_OPPONENT = 'awaiting_opponent'
READY = 'ready'
RESOLVED = 'resolved'

MATCH_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_match_id(length=8):
    """Generate a short base-36 match id. Uniqueness is checked by the registry."""
    return ''.join(random.choices(MATCH_ID_ALPHABET, k=length))


class Match:
    """One wager-matched pairing.

    ``lock`` guards state transitions; the registry holds it for the whole
    of a join or resolve so each transition happens at most once.
    """

    def __init__(self, match_id: str, creator, wager: int):
        self.id = match_id
        self.creator = creator
        self.joiner = None
        self.wager = wager
        self.state = AWAITING_OPPONENT
        self.outcome: Optional[str] = None
        self.winner = None
        self.created_at = time.time()
        self.lock = threading.Lock()

    @property
    def participants(self):
        return [p for p in (self.creator, self.joiner) if p is not None]

    def opponent_of(self, identity):
        if identity == self.creator:
            return self.joiner
        if identity == self.joiner:
            return self.creator
        return None

    def to_dict(self):
        return {
            'gameId': self.id,
            'creator': self.creator,
            'joiner': self.joiner,
            'bet': self.wager,
            'state': self.state,
            'outcome': self.outcome,
            'winner': self.winner,
            'createdAt': self.created_at,
        }
