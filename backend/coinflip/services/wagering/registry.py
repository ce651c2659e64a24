import logging
import threading
from typing import Dict, List, Optional

from coinflip.models import AWAITING_OPPONENT, READY, RESOLVED, Match, generate_match_id
from .coin import HEADS, RandomCoin
from .errors import AlreadyResolved, InvalidWager, MatchNotJoinable, MatchNotReady, SelfJoinForbidden
from .ledger import Ledger
from .settlement import LOSE_MESSAGE, WIN_MESSAGE, Settlement, SettlementView, split_pot


def parse_wager(value) -> int:
    """Coerce a client-supplied bet to a positive integer or raise InvalidWager."""
    if value is None or isinstance(value, bool):
        raise InvalidWager()
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise InvalidWager() from None
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidWager()
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise InvalidWager()
    return value


class MatchRegistry:
    """In-progress matches keyed by id.

    Transitions on a match run under that match's lock, so concurrent joins
    or resolves of the same match serialize while unrelated matches proceed
    in parallel. Lock order is always match -> ledger account.
    """

    def __init__(self, ledger: Ledger, coin=None, fee_percent: int = 10,
                 id_length: int = 8, logger: Optional[logging.Logger] = None):
        self.ledger = ledger
        self.coin = coin or RandomCoin()
        self.fee_percent = fee_percent
        self.id_length = id_length
        self.logger = logger or logging.getLogger(__name__)
        self._matches: Dict[str, Match] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._matches)

    def get(self, match_id) -> Optional[Match]:
        if not isinstance(match_id, str):
            return None
        return self._matches.get(match_id)

    def open_matches(self) -> List[Match]:
        with self._lock:
            matches = list(self._matches.values())
        waiting = [m for m in matches if m.state == AWAITING_OPPONENT]
        return sorted(waiting, key=lambda m: m.created_at)

    def create_match(self, creator, wager) -> Match:
        wager = parse_wager(wager)
        self.ledger.debit(creator, wager)
        with self._lock:
            match_id = generate_match_id(self.id_length)
            while match_id in self._matches:
                match_id = generate_match_id(self.id_length)
            match = Match(match_id, creator, wager)
            self._matches[match_id] = match
        self.logger.info(f"[match-create] match={match_id} creator={creator} wager={wager}")
        return match

    def join_match(self, joiner, match_id) -> Match:
        match = self.get(match_id)
        if match is None:
            raise MatchNotJoinable()
        with match.lock:
            if match.state != AWAITING_OPPONENT:
                raise MatchNotJoinable()
            if joiner == match.creator:
                raise SelfJoinForbidden()
            self.ledger.debit(joiner, match.wager)
            match.joiner = joiner
            match.state = READY
        self.logger.info(f"[match-ready] match={match.id} creator={match.creator} joiner={joiner}")
        return match

    def resolve(self, requester, match_id) -> Settlement:
        """Flip the coin for a ready match and pay the winner.

        Any identity may trigger resolution, not only the participants.
        """
        match = self.get(match_id)
        if match is None:
            raise MatchNotReady()
        with match.lock:
            if match.state == RESOLVED:
                raise AlreadyResolved()
            if match.state != READY:
                raise MatchNotReady()
            outcome = self.coin.flip()
            winner = match.creator if outcome == HEADS else match.joiner
            pot, fee, win_amount = split_pot(match.wager, self.fee_percent)
            balances = {p: self.ledger.get(p) for p in match.participants if p != winner}
            balances[winner] = self.ledger.credit(winner, win_amount)
            match.outcome = outcome
            match.winner = winner
            match.state = RESOLVED

        # Balances are snapshots taken under the match lock; another request by
        # the same identity can still change them before the events go out.
        settlement = Settlement(
            match_id=match.id,
            outcome=outcome,
            winner=winner,
            pot=pot,
            fee=fee,
            win_amount=win_amount,
        )
        for participant in match.participants:
            won = participant == winner
            settlement.views[participant] = SettlementView(
                outcome=outcome,
                message=WIN_MESSAGE if won else LOSE_MESSAGE,
                win_amount=win_amount if won else 0,
                fee=fee,
                new_balance=balances[participant],
            )
        self.logger.info(
            f"[match-resolve] match={match.id} requester={requester} outcome={outcome} "
            f"winner={winner} pot={pot} fee={fee}"
        )
        return settlement
