from dataclasses import dataclass, field
from typing import Any, Dict, Hashable

WIN_MESSAGE = 'You win!'
LOSE_MESSAGE = 'You lose!'


def split_pot(wager: int, fee_percent: int = 10):
    """Return ``(pot, fee, win_amount)`` for a two-sided wager.

    The fee is floored and burned; ``fee + win_amount == pot`` always holds.
    """
    pot = wager * 2
    fee = pot * fee_percent // 100
    return pot, fee, pot - fee


@dataclass
class SettlementView:
    outcome: str
    message: str
    win_amount: int
    fee: int
    new_balance: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'outcome': self.outcome,
            'message': self.message,
            'winAmount': self.win_amount,
            'fee': self.fee,
            'yourNewBalance': self.new_balance,
        }


@dataclass
class Settlement:
    """Result of resolving a match, with one view per participant."""

    match_id: str
    outcome: str
    winner: Hashable
    pot: int
    fee: int
    win_amount: int
    views: Dict[Hashable, SettlementView] = field(default_factory=dict)
