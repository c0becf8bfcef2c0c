import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Final, Hashable, List, Mapping

from algosdk import encoding

from token_ledger.errors import InvalidAmount, InvalidHolder, SubGranularAmount

ZERO_ADDRESS: Final = encoding.encode_address(bytes(32))


@dataclass(frozen=True)
class LedgerSnapshot:
    balances: Mapping[Hashable, int]
    total_supply: int


class Ledger:
    '''
    Balances and total supply of a mint-only token.

    Every mint amount must be strictly positive and a multiple of the
    granularity given at creation. Balance and supply change together under
    one lock, so readers never see one without the other.
    '''

    def __init__(self, granularity: int = 1) -> None:
        if isinstance(granularity, bool) or not isinstance(granularity, int) or granularity < 1:
            raise ValueError(f'Granularity must be a positive integer, got {granularity!r}')
        self._granularity = granularity
        self._balances: Dict[Hashable, int] = {}
        self._total_supply = 0
        self._lock = threading.Lock()

    @property
    def granularity(self) -> int:
        return self._granularity

    def mint(self, holder: Any, amount: int) -> None:
        """
        Credit ``amount`` base units to ``holder``.

        Raises InvalidHolder, InvalidAmount or SubGranularAmount, checked in
        that order. A rejected mint leaves the ledger untouched.
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise TypeError(f'Mint amount must be an int, got {type(amount).__name__}')
        if holder is None or holder == ZERO_ADDRESS:
            raise InvalidHolder(holder, amount)
        if amount <= 0:
            raise InvalidAmount(holder, amount)
        if amount % self._granularity != 0:
            raise SubGranularAmount(holder, amount)

        with self._lock:
            self._balances[holder] = self._balances.get(holder, 0) + amount
            self._total_supply += amount

    def balance_of(self, holder: Any) -> int:
        return self._balances.get(holder, 0)

    def total_supply(self) -> int:
        return self._total_supply

    def holders(self) -> List[Hashable]:
        with self._lock:
            return list(self._balances)

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            return LedgerSnapshot(
                balances=MappingProxyType(dict(self._balances)),
                total_supply=self._total_supply,
            )
