import pytest
from eth_account import Account

from credential_nft.offchain.util import sign_nonce
from credential_nft.onchain.errors import BadSignature, NullAuthority, ReplayedNonce
from credential_nft.onchain.mint_gate import authorize, is_nonce_used, set_authority
from credential_nft.onchain.signature import Signature
from credential_nft.onchain.types import GateState, ZERO_ADDRESS

GATEWAY = Account.from_key("0x" + "11" * 32)
MALLORY = Account.from_key("0x" + "55" * 32)


def test_authorize_consumes_nonce():
    gate = GateState(GATEWAY.address)
    authorize(gate, "n1", sign_nonce(GATEWAY, "n1"))
    assert is_nonce_used(gate, "n1")
    assert gate.used_nonces == {"n1"}


def test_replayed_nonce_rejected():
    gate = GateState(GATEWAY.address)
    authorize(gate, "n1", sign_nonce(GATEWAY, "n1"))
    with pytest.raises(ReplayedNonce):
        authorize(gate, "n1", sign_nonce(GATEWAY, "n1"))
    assert gate.used_nonces == {"n1"}


def test_bad_signature_leaves_ledger_untouched():
    gate = GateState(GATEWAY.address)
    with pytest.raises(BadSignature):
        authorize(gate, "n1", sign_nonce(MALLORY, "n1"))
    with pytest.raises(BadSignature):
        authorize(gate, "n1", Signature(29, 1, 1))
    assert gate.used_nonces == set()


def test_signature_checked_before_replay():
    gate = GateState(GATEWAY.address, {"n1"})
    with pytest.raises(BadSignature):
        authorize(gate, "n1", sign_nonce(MALLORY, "n1"))


def test_set_authority():
    gate = GateState(GATEWAY.address)
    assert set_authority(gate, MALLORY.address) == GATEWAY.address
    with pytest.raises(BadSignature):
        authorize(gate, "n1", sign_nonce(GATEWAY, "n1"))
    authorize(gate, "n1", sign_nonce(MALLORY, "n1"))


@pytest.mark.parametrize("address", [ZERO_ADDRESS, "", None])
def test_set_null_authority(address):
    gate = GateState(GATEWAY.address)
    with pytest.raises(NullAuthority):
        set_authority(gate, address)
    assert gate.minter_allower == GATEWAY.address
