from flask_socketio import emit
from flask import current_app, request
from coinflip import socketio, wagering
from coinflip.services.wagering import (
    InsufficientFunds,
    InvalidWager,
    WageringError,
)
from typing import Any, Dict, Optional, Type

NAMESPACE = '/'

# Client-facing wording that depends on which request failed
_CREATE_MESSAGES: Dict[Type[WageringError], str] = {
    InvalidWager: 'Invalid bet or not enough coins',
    InsufficientFunds: 'Invalid bet or not enough coins',
}
_JOIN_MESSAGES: Dict[Type[WageringError], str] = {
    InsufficientFunds: 'Not enough coins to join',
}


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _field(data: Any, key: str) -> Optional[Any]:
    if isinstance(data, dict):
        return data.get(key)
    return None


def _send_to(identity, event: str, payload) -> None:
    socketio.emit(event, payload, to=identity, namespace=request.namespace)


def _reject(action: str, exc: WageringError, messages=None) -> None:
    message = (messages or {}).get(type(exc), exc.message)
    current_app.logger.info(f"[rejected] action={action} sid={_get_sid()} error={type(exc).__name__}")
    emit('error', message)


def handle_connect(auth=None):
    sid = _get_sid()
    balance = wagering.ledger.ensure(sid)
    current_app.logger.info(f"[connect] sid={sid} balance={balance}")
    emit('balanceUpdate', balance)


def handle_disconnect(*args):
    # Balances and unresolved matches are left untouched
    current_app.logger.info(f"[disconnect] sid={_get_sid()}")


def handle_create_game(data=None):
    sid = _get_sid()
    try:
        match = wagering.registry.create_match(sid, _field(data, 'bet'))
    except WageringError as exc:
        _reject('createGame', exc, _CREATE_MESSAGES)
        return
    emit('balanceUpdate', wagering.ledger.get(sid))
    emit('gameCreated', {
        'gameId': match.id,
        'message': f'Waiting for player 2... Bet: {match.wager} coins',
    })


def handle_join_game(data=None):
    sid = _get_sid()
    try:
        match = wagering.registry.join_match(sid, _field(data, 'gameId'))
    except WageringError as exc:
        _reject('joinGame', exc, _JOIN_MESSAGES)
        return
    emit('balanceUpdate', wagering.ledger.get(sid))
    opponent = match.opponent_of(sid)
    _send_to(opponent, 'gameReady', {'gameId': match.id, 'opponent': match.opponent_of(opponent)})
    emit('gameReady', {'gameId': match.id, 'opponent': opponent})


def handle_flip(data=None):
    sid = _get_sid()
    try:
        settlement = wagering.registry.resolve(sid, _field(data, 'gameId'))
    except WageringError as exc:
        _reject('flip', exc)
        return
    for identity, view in settlement.views.items():
        _send_to(identity, 'gameResult', view.to_dict())
    for identity, view in settlement.views.items():
        _send_to(identity, 'balanceUpdate', view.new_balance)


def register_socketio_handlers(namespace: str = NAMESPACE) -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('createGame', handle_create_game, namespace=namespace)
    socketio.on_event('joinGame', handle_join_game, namespace=namespace)
    socketio.on_event('flip', handle_flip, namespace=namespace)
