"""Request-local failures raised by the ledger and match registry.

Every error carries a short client-facing ``message``; the Socket.IO layer
turns it into an ``error`` event for the requesting connection only.
"""


class WageringError(Exception):
    message = 'Request rejected'

    def __init__(self, message=None):
        if message:
            self.message = message
        super().__init__(self.message)


class InvalidWager(WageringError):
    message = 'Invalid bet'


class InsufficientFunds(WageringError):
    message = 'Not enough coins'

    def __init__(self, identity=None, requested=0, available=0):
        self.identity = identity
        self.requested = requested
        self.available = available
        super().__init__()


class UnknownIdentity(WageringError):
    message = 'Unknown player'

    def __init__(self, identity=None):
        self.identity = identity
        super().__init__()


class MatchNotJoinable(WageringError):
    message = 'Game not found or already started'


class SelfJoinForbidden(WageringError):
    message = 'You cannot join your own game'


class MatchNotReady(WageringError):
    message = 'Game not ready or not found'


class AlreadyResolved(MatchNotReady):
    message = 'Game already finished'
