import logging
import threading
from typing import Dict, Hashable, Optional

from .errors import InsufficientFunds, InvalidWager, UnknownIdentity


class _Account:
    __slots__ = ('balance', 'lock')

    def __init__(self, balance: int):
        self.balance = balance
        self.lock = threading.Lock()


class Ledger:
    """Per-identity coin balances held in process memory.

    Each account has its own lock so debits and credits on one identity are
    serialized while unrelated identities never contend. ``_lock`` only
    guards the identity -> account map.
    """

    def __init__(self, starting_balance: int = 100, logger: Optional[logging.Logger] = None):
        self.starting_balance = int(starting_balance)
        self.logger = logger or logging.getLogger(__name__)
        self._accounts: Dict[Hashable, _Account] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._accounts)

    def _account(self, identity) -> _Account:
        account = self._accounts.get(identity)
        if account is None:
            raise UnknownIdentity(identity)
        return account

    def ensure(self, identity) -> int:
        """Open an account with the starting grant unless one already exists."""
        with self._lock:
            account = self._accounts.get(identity)
            if account is None:
                account = _Account(self.starting_balance)
                self._accounts[identity] = account
                self.logger.info(f"[ledger-open] identity={identity} balance={self.starting_balance}")
        return account.balance

    def get(self, identity) -> int:
        return self._account(identity).balance

    def debit(self, identity, amount: int) -> int:
        if amount <= 0:
            raise InvalidWager()
        account = self._account(identity)
        with account.lock:
            if account.balance < amount:
                raise InsufficientFunds(identity, amount, account.balance)
            account.balance -= amount
            return account.balance

    def credit(self, identity, amount: int) -> int:
        if amount < 0:
            raise InvalidWager()
        account = self._account(identity)
        with account.lock:
            account.balance += amount
            return account.balance
