import logging
import re
from decimal import Decimal
from typing import Dict, Final, List, Optional, Tuple

from algosdk import encoding
from algosdk.account import generate_account

from token_ledger.checker import MintRecorder
from token_ledger.token import TokenContract
from token_ledger.units import to_base_units

_LOGGER: Final = logging.getLogger(__name__)

_RE_MINT: Final = re.compile(r'mint\(\s*([A-Za-z0-9_]+)\s*,\s*(-?[0-9]*\.?[0-9]+)\s*\)')


def parse_method(method: str) -> Tuple[str, Decimal]:
    """
    Parse 'mint(alice,10)' into ('alice', Decimal('10')). Amounts are in tokens.
    """
    match = _RE_MINT.fullmatch(method.strip())
    if match is None:
        raise ValueError(f'No such method {method}')
    return match.group(1), Decimal(match.group(2))


def run_methods(
    token: TokenContract,
    sender: str,
    methods: List[str],
    accounts: Optional[Dict[str, str]] = None,
) -> List[Tuple[str, bool]]:
    """
    Apply each method to the token in order, checking the ledger invariants after every one.

    Holders that are not addresses are treated as aliases and bound to a
    freshly generated address, recorded in ``accounts``.
    Amounts finer than the token's decimals count as reverted.
    """
    if accounts is None:
        accounts = {}
    recorder = MintRecorder(token, sender)
    outcomes = []
    _LOGGER.info(f'Running method sequence: {methods}')
    for method in methods:
        holder, tokens = parse_method(method)
        if not encoding.is_valid_address(holder) and holder not in accounts:
            _, accounts[holder] = generate_account()
        address = accounts.get(holder, holder)
        try:
            amount = to_base_units(tokens, token.decimals)
        except ValueError as err:
            _LOGGER.warning(f'{method} => reverted: {err}')
            outcomes.append((method, False))
            continue
        committed = recorder.mint(address, amount)
        _LOGGER.info(f'{method} => {"committed" if committed else "reverted"}')
        outcomes.append((method, committed))
    return outcomes
