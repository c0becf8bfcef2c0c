from concurrent.futures import ThreadPoolExecutor
from typing import List

import pytest

from token_ledger.checker import check_invariants
from token_ledger.errors import InvalidAmount, InvalidHolder, MintErrorKind, SubGranularAmount
from token_ledger.ledger import ZERO_ADDRESS, Ledger


def test_mint_credits_balance_and_supply(ledger: Ledger, accounts: List[str]) -> None:
    ledger.mint(accounts[1], 10)
    assert ledger.balance_of(accounts[1]) == 10
    assert ledger.total_supply() == 10


def test_negative_amount_is_rejected(ledger: Ledger, accounts: List[str]) -> None:
    with pytest.raises(InvalidAmount) as excinfo:
        ledger.mint(accounts[1], -10)
    assert excinfo.value.kind is MintErrorKind.INVALID_AMOUNT
    assert ledger.balance_of(accounts[1]) == 0
    assert ledger.total_supply() == 0


def test_zero_amount_is_invalid_not_sub_granular(accounts: List[str]) -> None:
    ledger = Ledger(granularity=10**18)
    with pytest.raises(InvalidAmount):
        ledger.mint(accounts[1], 0)


def test_sub_granular_amount_is_rejected(accounts: List[str]) -> None:
    ledger = Ledger(granularity=10**18)
    with pytest.raises(SubGranularAmount) as excinfo:
        ledger.mint(accounts[1], 7 * 10**15)
    assert excinfo.value.amount == 7 * 10**15
    assert excinfo.value.holder == accounts[1]
    assert ledger.balance_of(accounts[1]) == 0
    assert ledger.total_supply() == 0


def test_negative_sub_granular_amount_fails_positivity_first(accounts: List[str]) -> None:
    ledger = Ledger(granularity=100)
    with pytest.raises(InvalidAmount):
        ledger.mint(accounts[1], -7)


def test_mints_to_different_holders(ledger: Ledger, accounts: List[str]) -> None:
    ledger.mint(accounts[1], 10)
    ledger.mint(accounts[2], 10)
    assert ledger.balance_of(accounts[1]) == 10
    assert ledger.balance_of(accounts[2]) == 10
    assert ledger.total_supply() == 20
    assert set(ledger.holders()) == {accounts[1], accounts[2]}


def test_unseen_holder_has_zero_balance(ledger: Ledger, accounts: List[str]) -> None:
    assert ledger.balance_of(accounts[3]) == 0
    assert ledger.holders() == []


@pytest.mark.parametrize('holder', [None, ZERO_ADDRESS])
def test_invalid_holder_is_rejected(ledger: Ledger, holder) -> None:
    with pytest.raises(InvalidHolder):
        ledger.mint(holder, 10)
    assert ledger.total_supply() == 0


@pytest.mark.parametrize('amount', [10.0, '10', True])
def test_non_integer_amount_is_a_type_error(ledger: Ledger, accounts: List[str], amount) -> None:
    with pytest.raises(TypeError):
        ledger.mint(accounts[1], amount)


@pytest.mark.parametrize('granularity', [0, -1, 1.5, True])
def test_granularity_must_be_positive_int(granularity) -> None:
    with pytest.raises(ValueError):
        Ledger(granularity=granularity)


def test_amounts_beyond_machine_integers(ledger: Ledger, accounts: List[str]) -> None:
    huge = 2**256 + 1
    ledger.mint(accounts[1], huge)
    ledger.mint(accounts[1], huge)
    assert ledger.balance_of(accounts[1]) == 2 * huge
    assert ledger.total_supply() == 2 * huge


def test_snapshot_is_detached(ledger: Ledger, accounts: List[str]) -> None:
    ledger.mint(accounts[1], 5)
    snapshot = ledger.snapshot()
    ledger.mint(accounts[1], 5)
    assert snapshot.balances[accounts[1]] == 5
    assert snapshot.total_supply == 5
    with pytest.raises(TypeError):
        snapshot.balances[accounts[1]] = 0


def test_concurrent_mints_keep_supply_consistent(accounts: List[str]) -> None:
    ledger = Ledger(granularity=3)
    holders = accounts[1:]

    def mint_many(holder: str) -> None:
        for _ in range(500):
            ledger.mint(holder, 3)

    with ThreadPoolExecutor(max_workers=len(holders)) as executor:
        list(executor.map(mint_many, holders * 2))

    snapshot = check_invariants(ledger)
    assert snapshot.total_supply == 3 * 500 * 2 * len(holders)
    assert all(ledger.balance_of(holder) == 3000 for holder in holders)
