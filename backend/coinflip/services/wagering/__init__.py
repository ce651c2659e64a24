"""Wagering domain services: ledger, match registry and settlement.

This package holds the match lifecycle and fund movement, independent of
Flask and Socket.IO. ``Wagering`` wires one ledger and one registry into
each Flask application so socket handlers and HTTP routes share them.
"""

from flask import current_app

from .coin import HEADS, TAILS, RandomCoin, SequenceCoin
from .errors import (
    AlreadyResolved,
    InsufficientFunds,
    InvalidWager,
    MatchNotJoinable,
    MatchNotReady,
    SelfJoinForbidden,
    UnknownIdentity,
    WageringError,
)
from .ledger import Ledger
from .registry import MatchRegistry, parse_wager
from .settlement import Settlement, SettlementView, split_pot


class _State:
    def __init__(self, ledger: Ledger, registry: MatchRegistry):
        self.ledger = ledger
        self.registry = registry


class Wagering:
    """Flask extension holding process-scoped balances and matches.

    Nothing here survives a restart; state lives in ``app.extensions``.
    """

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        cfg = app.config
        ledger = Ledger(
            starting_balance=int(cfg.get('STARTING_BALANCE', 100)),
            logger=app.logger,
        )
        registry = MatchRegistry(
            ledger,
            coin=cfg.get('COIN'),
            fee_percent=int(cfg.get('HOUSE_FEE_PERCENT', 10)),
            id_length=int(cfg.get('MATCH_ID_LENGTH', 8)),
            logger=app.logger,
        )
        app.extensions['wagering'] = _State(ledger, registry)

    @staticmethod
    def _state(app=None) -> _State:
        app = app or current_app
        return app.extensions['wagering']

    @property
    def ledger(self) -> Ledger:
        return self._state().ledger

    @property
    def registry(self) -> MatchRegistry:
        return self._state().registry


__all__ = [
    'HEADS',
    'TAILS',
    'RandomCoin',
    'SequenceCoin',
    'AlreadyResolved',
    'InsufficientFunds',
    'InvalidWager',
    'MatchNotJoinable',
    'MatchNotReady',
    'SelfJoinForbidden',
    'UnknownIdentity',
    'WageringError',
    'Ledger',
    'MatchRegistry',
    'parse_wager',
    'Settlement',
    'SettlementView',
    'split_pot',
    'Wagering',
]
