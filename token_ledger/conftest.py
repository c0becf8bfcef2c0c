from typing import List

import pytest
from algosdk.account import generate_account

from token_ledger.ledger import Ledger
from token_ledger.token import TokenContract

ONE_TOKEN = 10**18


def pytest_addoption(parser):
    parser.addoption(
        '--granularity',
        action='store',
        type=int,
        default=ONE_TOKEN,
        help='Granularity of the token under test, in base units',
    )
    parser.addoption(
        '--methods',
        type=str,
        default='',
        help='Method sequence to call',
    )


@pytest.fixture(scope='session')
def granularity(pytestconfig) -> int:
    return pytestconfig.getoption('granularity', default=ONE_TOKEN)


@pytest.fixture(scope='session')
def methods(pytestconfig) -> List[str]:
    return pytestconfig.getoption('methods', default='').split()


@pytest.fixture(scope='session')
def accounts() -> List[str]:
    return [generate_account()[1] for _ in range(4)]


@pytest.fixture
def owner(accounts: List[str]) -> str:
    return accounts[0]


@pytest.fixture
def ledger() -> Ledger:
    return Ledger(granularity=1)


@pytest.fixture
def token(owner: str, granularity: int) -> TokenContract:
    return TokenContract(name='ERC777 Reference Token', symbol='XRT', owner=owner, granularity=granularity)
