import logging
from dataclasses import dataclass
from typing import Any, Final, List, Union

from algosdk import encoding

from token_ledger.errors import MintError, TransactionReverted
from token_ledger.ledger import ZERO_ADDRESS, Ledger
from token_ledger.units import DEFAULT_DECIMALS, format_account, from_base_units

_LOGGER: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class Minted:
    operator: str
    to: str
    amount: int
    data: bytes
    operator_data: bytes


@dataclass(frozen=True)
class Transfer:
    from_: str
    to: str
    amount: int


Event = Union[Minted, Transfer]


class TokenContract:
    '''
    Contract-style front-end over a Ledger:
      * only the owner may mint
      * every rejection surfaces as TransactionReverted, whatever the reason
      * committed mints are recorded as events, with an ERC20 Transfer
        alongside Minted while ERC20 compatibility is on
    '''

    def __init__(
        self,
        name: str,
        symbol: str,
        owner: str,
        granularity: int = 1,
        decimals: int = DEFAULT_DECIMALS,
    ) -> None:
        if not encoding.is_valid_address(owner):
            raise ValueError(f'Owner is not a valid address: {owner!r}')
        self.name = name
        self.symbol = symbol
        self.owner = owner
        self.decimals = decimals
        self.ledger = Ledger(granularity)
        self.events: List[Event] = []
        self._erc20_enabled = True
        _LOGGER.info(f'Created {symbol} owned by {format_account(owner)} with granularity {granularity}')

    @property
    def granularity(self) -> int:
        return self.ledger.granularity

    @property
    def erc20_enabled(self) -> bool:
        return self._erc20_enabled

    def disable_erc20(self) -> None:
        self._erc20_enabled = False

    def enable_erc20(self) -> None:
        self._erc20_enabled = True

    def mint(self, sender: str, holder: Any, amount: int, data: bytes = b'', operator_data: bytes = b'') -> None:
        """
        Mint ``amount`` base units to ``holder`` on behalf of ``sender``

        Raises TransactionReverted if the sender is not the owner, the holder
        is not a valid address, or the ledger rejects the amount.
        """
        method = f'mint({holder}, {amount})'
        if sender != self.owner:
            _LOGGER.warning(f'{method} reverted: {sender} is not the owner')
            raise TransactionReverted(method)
        if isinstance(holder, str) and holder != ZERO_ADDRESS and not encoding.is_valid_address(holder):
            _LOGGER.warning(f'{method} reverted: malformed address')
            raise TransactionReverted(method)
        try:
            self.ledger.mint(holder, amount)
        except MintError as err:
            _LOGGER.warning(f'{method} reverted: {err.kind.value}')
            raise TransactionReverted(method) from err

        self.events.append(Minted(sender, holder, amount, data, operator_data))
        if self._erc20_enabled:
            self.events.append(Transfer(ZERO_ADDRESS, holder, amount))
        _LOGGER.info(
            f'Minted {from_base_units(amount, self.decimals)} {self.symbol} for {format_account(str(holder))}'
        )

    def balance_of(self, holder: Any) -> int:
        return self.ledger.balance_of(holder)

    def total_supply(self) -> int:
        return self.ledger.total_supply()
