from token_ledger.errors import (
    InvalidAmount,
    InvalidHolder,
    InvariantViolation,
    MintError,
    MintErrorKind,
    SubGranularAmount,
    TransactionReverted,
)
from token_ledger.ledger import ZERO_ADDRESS, Ledger, LedgerSnapshot
from token_ledger.token import Minted, TokenContract, Transfer
