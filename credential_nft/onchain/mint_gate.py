"""
Authorization of signature gated mints.

The off-chain gateway authorizes a single mint by signing a nonce with the key
of the minter allower. The contract accepts a (nonce, signature) pair exactly
once. Note that the signature only covers the nonce, so whoever holds a valid
pair chooses recipient and metadata of the resulting credential.
"""

from credential_nft.onchain.errors import BadSignature, NullAuthority, ReplayedNonce
from credential_nft.onchain.signature import Signature, verify
from credential_nft.onchain.types import GateState, ZERO_ADDRESS


def check_authority(address: str) -> None:
    if not address or address == ZERO_ADDRESS:
        raise NullAuthority("minter allower must not be the zero address")


def is_nonce_used(gate: GateState, nonce: str) -> bool:
    return nonce in gate.used_nonces


def authorize(gate: GateState, nonce: str, signature: Signature) -> None:
    """
    Consume nonce if signature is the minter allower's signature over it.

    Must run on the working copy of a transaction: if the mint that follows
    fails, the consumption is discarded with the rest of the transaction.
    """
    if not verify(nonce, gate.minter_allower, signature):
        raise BadSignature(
            f"signature over nonce {nonce!r} is not from the minter allower"
        )
    if is_nonce_used(gate, nonce):
        raise ReplayedNonce(f"nonce {nonce!r} already used")
    gate.used_nonces.add(nonce)


def set_authority(gate: GateState, address: str) -> str:
    """
    Replace the minter allower, returns the previous one
    """
    check_authority(address)
    previous = gate.minter_allower
    gate.minter_allower = address
    return previous
