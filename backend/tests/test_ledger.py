import threading

import pytest

from coinflip.services.wagering import InsufficientFunds, InvalidWager, Ledger, UnknownIdentity


def test_ensure_grants_starting_balance_once(ledger):
    assert ledger.ensure('alice') == 100
    ledger.debit('alice', 30)
    # Second ensure must not reset the balance
    assert ledger.ensure('alice') == 70
    assert ledger.get('alice') == 70
    assert len(ledger) == 1


def test_get_unknown_identity(ledger):
    with pytest.raises(UnknownIdentity):
        ledger.get('ghost')
    with pytest.raises(UnknownIdentity):
        ledger.debit('ghost', 1)
    with pytest.raises(UnknownIdentity):
        ledger.credit('ghost', 1)


def test_debit_and_credit_return_new_balance(ledger):
    ledger.ensure('alice')
    assert ledger.debit('alice', 40) == 60
    assert ledger.credit('alice', 72) == 132
    assert ledger.credit('alice', 0) == 132


def test_debit_more_than_balance_leaves_balance_unchanged(ledger):
    ledger.ensure('alice')
    with pytest.raises(InsufficientFunds) as info:
        ledger.debit('alice', 150)
    assert info.value.requested == 150
    assert info.value.available == 100
    assert ledger.get('alice') == 100


def test_debit_whole_balance_reaches_zero(ledger):
    ledger.ensure('alice')
    assert ledger.debit('alice', 100) == 0
    with pytest.raises(InsufficientFunds):
        ledger.debit('alice', 1)


@pytest.mark.parametrize('amount', [0, -5])
def test_debit_rejects_non_positive_amounts(ledger, amount):
    ledger.ensure('alice')
    with pytest.raises(InvalidWager):
        ledger.debit('alice', amount)
    assert ledger.get('alice') == 100


def test_credit_rejects_negative_amounts(ledger):
    ledger.ensure('alice')
    with pytest.raises(InvalidWager):
        ledger.credit('alice', -1)


def test_custom_starting_balance():
    ledger = Ledger(starting_balance=25)
    assert ledger.ensure('bob') == 25


def test_concurrent_debits_never_overdraw():
    ledger = Ledger(starting_balance=50)
    ledger.ensure('alice')
    workers = 100
    barrier = threading.Barrier(workers)
    results = []
    lock = threading.Lock()

    def _debit():
        barrier.wait()
        try:
            ledger.debit('alice', 1)
            outcome = 'ok'
        except InsufficientFunds:
            outcome = 'short'
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=_debit) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count('ok') == 50
    assert results.count('short') == 50
    assert ledger.get('alice') == 0


def test_concurrent_ensure_creates_single_account():
    ledger = Ledger()
    barrier = threading.Barrier(20)

    def _ensure():
        barrier.wait()
        ledger.ensure('alice')
        ledger.debit('alice', 1)

    threads = [threading.Thread(target=_ensure) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(ledger) == 1
    assert ledger.get('alice') == 80
