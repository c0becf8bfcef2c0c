import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError, Namespace
from pathlib import Path
from typing import Dict, Final, List, Optional

import coloredlogs
import pytest
from algosdk.account import generate_account

from token_ledger.simulate import run_methods
from token_ledger.token import TokenContract
from token_ledger.units import format_account, from_base_units, to_base_units

_LOGGER: Final = logging.getLogger(__name__)
_LOG_FORMAT: Final = '%(levelname)s %(asctime)s %(name)s - %(message)s'

_PACKAGE_DIR: Final = Path(__file__).parent


def main(argv: Optional[List[str]] = None) -> None:
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    if args.command == 'simulate':
        try:
            to_base_units(args.granularity_tokens, args.decimals)
        except ValueError as err:
            parser.error(f'--granularity-tokens: {err}')
    coloredlogs.install(level=_loglevel(args), fmt=_LOG_FORMAT)

    if args.command == 'test':
        sys.exit(
            exec_test(
                test_code_file=args.test_code_file,
                granularity_tokens=args.granularity_tokens,
                verbose=args.verbose,
            )
        )
    elif args.command == 'simulate':
        exec_simulate(
            methods=args.methods,
            granularity_tokens=args.granularity_tokens,
            decimals=args.decimals,
        )


def exec_test(test_code_file: Optional[Path], granularity_tokens: str = '1', verbose: bool = False) -> int:
    if test_code_file is None:
        test_code_file = _PACKAGE_DIR
    if not test_code_file.exists():
        raise FileNotFoundError(f'No such test file or directory: {test_code_file}')
    if not verbose:
        logging.getLogger('token_ledger.token').setLevel(logging.ERROR)
    return pytest.main(
        [
            f"--tb={'short' if verbose else 'no'}",
            f"--hypothesis-verbosity={'verbose' if verbose else 'normal'}",
            "--hypothesis-show-statistics",
            f"--granularity={to_base_units(granularity_tokens)}",
            str(test_code_file),
        ]
    )


def exec_simulate(methods: str, granularity_tokens: str = '1', decimals: int = 18) -> None:
    _, owner = generate_account()
    token = TokenContract(
        name='Simulated Token',
        symbol='SIM',
        owner=owner,
        granularity=to_base_units(granularity_tokens, decimals),
        decimals=decimals,
    )
    accounts: Dict[str, str] = {}
    outcomes = run_methods(token, owner, methods.split(), accounts)

    for method, committed in outcomes:
        print(f'{method:<40} {"committed" if committed else "reverted"}')
    for alias, address in accounts.items():
        balance = from_base_units(token.balance_of(address), decimals)
        print(f'{alias:<16} {format_account(address)} {balance} {token.symbol}')
    print(f'total supply: {from_base_units(token.total_supply(), decimals)} {token.symbol}')


def create_argument_parser() -> ArgumentParser:
    def positive_tokens(s: str) -> str:
        try:
            positive = to_base_units(s) > 0
        except ValueError:
            positive = False
        if not positive:
            raise ArgumentTypeError(f'expected a positive token amount, got {s!r}')
        return s

    parser = ArgumentParser(prog='token-ledger')

    shared_args = ArgumentParser(add_help=False)
    shared_args.add_argument('--verbose', '-v', default=False, action='store_true', help='Verbose output.')
    shared_args.add_argument('--debug', default=False, action='store_true', help='Debug output.')
    shared_args.add_argument(
        '--granularity-tokens',
        dest='granularity_tokens',
        type=positive_tokens,
        default='1',
        help='Granularity of the token, in whole tokens',
    )

    command_parser = parser.add_subparsers(dest='command', required=True, help='Command to execute')

    # test
    test_subparser = command_parser.add_parser(
        'test',
        help='Run the ledger property tests',
        parents=[shared_args],
        allow_abbrev=False,
    )
    test_subparser.add_argument(
        '--test-code-file',
        dest='test_code_file',
        type=Path,
        help='Path to the Python file with the testing code',
    )

    # simulate
    simulate_subparser = command_parser.add_parser(
        'simulate',
        help='Run a mint sequence against a fresh token',
        parents=[shared_args],
        allow_abbrev=False,
    )
    simulate_subparser.add_argument(
        '--methods',
        dest='methods',
        type=str,
        required=True,
        help='Method sequence to call, for example \'mint(alice,10) mint(bob,0.007)\'',
    )
    simulate_subparser.add_argument(
        '--decimals',
        dest='decimals',
        type=int,
        default=18,
        help='Decimals of the simulated token',
    )

    return parser


def _loglevel(args: Namespace) -> int:
    if args.debug:
        return logging.DEBUG

    if args.verbose:
        return logging.INFO

    return logging.WARNING


if __name__ == '__main__':
    main()
