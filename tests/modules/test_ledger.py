import pytest

from sharevault.ledger import ShareLedger, check_uint256
from sharevault.errors import AmountOutOfRange, InsufficientAllowance, InsufficientShares
from constants import MAX_UINT256


@pytest.fixture
def ledger():
    return ShareLedger()


def test_check_uint256():
    assert check_uint256(0) == 0
    assert check_uint256(MAX_UINT256) == MAX_UINT256

    for bad in (-1, MAX_UINT256 + 1, 1.0, "1", None, True):
        with pytest.raises(AmountOutOfRange):
            check_uint256(bad)


def test_credit_and_debit(ledger, bob, alice):
    ledger.credit_shares(bob, 100)
    ledger.credit_shares(alice, 50)
    assert ledger.balance_of(bob) == 100
    assert ledger.total_shares == 150

    ledger.debit_shares(bob, 40)
    assert ledger.balance_of(bob) == 60
    assert ledger.total_shares == 110
    ledger.check_invariants()


def test_debit_insufficient_shares(ledger, bob):
    ledger.credit_shares(bob, 100)

    with pytest.raises(InsufficientShares, match="insufficient shares"):
        ledger.debit_shares(bob, 101)

    # nothing changed
    assert ledger.balance_of(bob) == 100
    assert ledger.total_shares == 100


def test_zero_balance_is_absence(ledger, bob):
    assert ledger.balance_of(bob) == 0
    ledger.credit_shares(bob, 10)
    ledger.debit_shares(bob, 10)
    assert ledger.balance_of(bob) == 0
    assert list(ledger.holders()) == []
    ledger.check_invariants()


def test_credit_overflow(ledger, bob, alice):
    ledger.credit_shares(bob, MAX_UINT256)

    with pytest.raises(AmountOutOfRange):
        ledger.credit_shares(alice, 1)
    assert ledger.balance_of(alice) == 0
    assert ledger.total_shares == MAX_UINT256


def test_transfer_shares(ledger, bob, alice):
    ledger.credit_shares(bob, 100)
    ledger.transfer_shares(bob, alice, 30)
    assert ledger.balance_of(bob) == 70
    assert ledger.balance_of(alice) == 30
    assert ledger.total_shares == 100

    with pytest.raises(InsufficientShares):
        ledger.transfer_shares(alice, bob, 31)
    assert ledger.balance_of(alice) == 30
    ledger.check_invariants()


def test_transfer_shares_to_self(ledger, bob):
    ledger.credit_shares(bob, 100)
    ledger.transfer_shares(bob, bob, 100)
    assert ledger.balance_of(bob) == 100
    ledger.check_invariants()


def test_allowances(ledger, bob, alice):
    ledger.set_allowance(bob, alice, 100)
    assert ledger.allowance(bob, alice) == 100
    assert ledger.allowance(alice, bob) == 0

    ledger.consume_allowance(bob, alice, 60)
    assert ledger.allowance(bob, alice) == 40

    with pytest.raises(InsufficientAllowance, match="insufficient allowance"):
        ledger.consume_allowance(bob, alice, 41)
    assert ledger.allowance(bob, alice) == 40

    ledger.set_allowance(bob, alice, 0)
    assert ledger.allowance(bob, alice) == 0


def test_unlimited_allowance_never_decrements(ledger, bob, alice):
    ledger.set_allowance(bob, alice, MAX_UINT256)
    ledger.consume_allowance(bob, alice, 10 ** 30)
    ledger.consume_allowance(bob, alice, MAX_UINT256)
    assert ledger.allowance(bob, alice) == MAX_UINT256

    # one below the sentinel is a regular allowance
    ledger.set_allowance(bob, alice, MAX_UINT256 - 1)
    ledger.consume_allowance(bob, alice, 1)
    assert ledger.allowance(bob, alice) == MAX_UINT256 - 2
