import pytest
from eth_account import Account

from credential_nft.onchain.credential_nft import CredentialNFT

GATEWAY_KEY = "0x" + "11" * 32
ADMIN_KEY = "0x" + "22" * 32
ALICE_KEY = "0x" + "33" * 32
BOB_KEY = "0x" + "44" * 32
MALLORY_KEY = "0x" + "55" * 32

GENESIS_TIME = 1_700_000_000


class FixedClock:
    def __init__(self, now: int = GENESIS_TIME):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def gateway():
    return Account.from_key(GATEWAY_KEY)


@pytest.fixture
def admin():
    return Account.from_key(ADMIN_KEY)


@pytest.fixture
def alice():
    return Account.from_key(ALICE_KEY)


@pytest.fixture
def bob():
    return Account.from_key(BOB_KEY)


@pytest.fixture
def mallory():
    return Account.from_key(MALLORY_KEY)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def contract(admin, gateway, clock):
    return CredentialNFT(admin.address, gateway.address, clock=clock)
