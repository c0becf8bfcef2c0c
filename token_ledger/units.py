from decimal import Decimal, InvalidOperation
from typing import Final, Union

DEFAULT_DECIMALS: Final = 18


def to_base_units(value: Union[str, int, Decimal], decimals: int = DEFAULT_DECIMALS) -> int:
    """
    Convert a token amount to base units, e.g. '0.007' -> 7 * 10**15 with 18 decimals.

    Floats are refused since they cannot represent most decimal amounts exactly.
    """
    if isinstance(value, (float, bool)):
        raise TypeError(f'Token amounts must be str, int or Decimal, got {type(value).__name__}')
    try:
        numerator, denominator = Decimal(value).as_integer_ratio()
    except (InvalidOperation, ValueError, OverflowError):
        raise ValueError(f'Not a token amount: {value!r}')
    scaled, remainder = divmod(numerator * 10**decimals, denominator)
    if remainder:
        raise ValueError(f'{value} has more precision than {decimals} decimals')
    return scaled


def from_base_units(amount: int, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """
    Exact inverse of to_base_units, without trailing zeros: 10 * 10**18 -> Decimal('10')
    """
    if amount == 0:
        return Decimal(0)
    exponent = -decimals
    while exponent < 0 and amount % 10 == 0:
        amount //= 10
        exponent += 1
    return Decimal(f'{amount}e{exponent}')


def format_account(address: str, chars: int = 6) -> str:
    if len(address) <= 2 * chars:
        return address
    return f'{address[:chars]}...{address[-chars:]}'
