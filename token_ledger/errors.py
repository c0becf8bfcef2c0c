from enum import Enum
from typing import Any


class MintErrorKind(Enum):
    INVALID_HOLDER = 'invalid holder'
    INVALID_AMOUNT = 'invalid amount'
    SUB_GRANULAR_AMOUNT = 'amount is not a multiple of granularity'


class MintError(Exception):
    '''
    A mint request rejected by the ledger before any state was touched
    '''

    kind: MintErrorKind

    def __init__(self, holder: Any, amount: int) -> None:
        super().__init__(f'{self.kind.value}: mint({holder!r}, {amount})')
        self.holder = holder
        self.amount = amount


class InvalidHolder(MintError):
    kind = MintErrorKind.INVALID_HOLDER


class InvalidAmount(MintError):
    kind = MintErrorKind.INVALID_AMOUNT


class SubGranularAmount(MintError):
    kind = MintErrorKind.SUB_GRANULAR_AMOUNT


class TransactionReverted(Exception):
    '''
    What a caller of the token front-end observes for any rejected transaction.

    The underlying reason, if any, is chained as ``__cause__``.
    '''

    def __init__(self, method: str) -> None:
        super().__init__(f'VM Exception while processing transaction: revert ({method})')
        self.method = method


class InvariantViolation(AssertionError):
    pass
