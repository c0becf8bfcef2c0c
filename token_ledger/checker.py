import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Final, List, Union

from token_ledger.errors import InvariantViolation, TransactionReverted
from token_ledger.ledger import Ledger, LedgerSnapshot
from token_ledger.token import TokenContract
from token_ledger.units import from_base_units, to_base_units

_LOGGER: Final = logging.getLogger(__name__)


def check_invariants(ledger: Ledger) -> LedgerSnapshot:
    """
    Check supply against the sum of balances and that no balance is negative

    Returns the snapshot that was checked.
    """
    snapshot = ledger.snapshot()
    negative = {holder: amount for holder, amount in snapshot.balances.items() if amount < 0}
    if negative:
        raise InvariantViolation(f'Negative balances: {negative}')
    total = sum(snapshot.balances.values())
    if total != snapshot.total_supply:
        raise InvariantViolation(f'Total supply {snapshot.total_supply} != sum of balances {total}')
    return snapshot


def assert_balance(token: TokenContract, holder: Any, expected_tokens: Union[str, int, Decimal]) -> None:
    balance = token.balance_of(holder)
    expected = to_base_units(expected_tokens, token.decimals)
    assert balance == expected, (
        f'Balance of {holder} is {from_base_units(balance, token.decimals)} {token.symbol}, '
        f'expected {expected_tokens}'
    )


def assert_total_supply(token: TokenContract, expected_tokens: Union[str, int, Decimal]) -> None:
    supply = token.total_supply()
    expected = to_base_units(expected_tokens, token.decimals)
    assert supply == expected, (
        f'Total supply is {from_base_units(supply, token.decimals)} {token.symbol}, expected {expected_tokens}'
    )


@dataclass(frozen=True)
class MintAttempt:
    holder: Any
    amount: int
    committed: bool
    before: LedgerSnapshot
    after: LedgerSnapshot


@dataclass
class MintRecorder:
    '''
    Drives mints through a token and checks every attempt against the state
    observed before and after it.
    '''

    token: TokenContract
    sender: str
    attempts: List[MintAttempt] = field(default_factory=list)

    def mint(self, holder: Any, amount: int) -> bool:
        before = check_invariants(self.token.ledger)
        committed = True
        try:
            self.token.mint(self.sender, holder, amount)
        except TransactionReverted:
            committed = False
        after = check_invariants(self.token.ledger)
        attempt = MintAttempt(holder, amount, committed, before, after)
        self._check_attempt(attempt)
        self.attempts.append(attempt)
        return committed

    def _check_attempt(self, attempt: MintAttempt) -> None:
        before, after = attempt.before, attempt.after
        if after.total_supply < before.total_supply:
            raise InvariantViolation(f'Total supply decreased from {before.total_supply} to {after.total_supply}')
        if not attempt.committed:
            if dict(before.balances) != dict(after.balances) or before.total_supply != after.total_supply:
                raise InvariantViolation(f'Rejected mint({attempt.holder}, {attempt.amount}) changed the ledger')
            return
        expected = before.balances.get(attempt.holder, 0) + attempt.amount
        if after.balances.get(attempt.holder, 0) != expected:
            raise InvariantViolation(f'mint({attempt.holder}, {attempt.amount}) credited the wrong amount')
