"""
Stateless verification of Ethereum personal-sign signatures.

The signed payload of a message is
keccak256("\\x19Ethereum Signed Message:\\n32" || keccak256(message)),
which is what `Account.sign_message(encode_defunct(primitive=message_hash(m)))`
produces off-chain.
"""

from dataclasses import dataclass
from typing import Optional, Union

from eth_keys import keys
from eth_keys.exceptions import BadSignature as _BadKeySignature
from eth_keys.exceptions import ValidationError
from eth_utils import keccak, to_bytes

SIGNED_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n"
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

Message = Union[str, bytes]


@dataclass(frozen=True)
class Signature:
    v: int
    r: int
    s: int

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Signature":
        """
        Split a 65 byte r || s || v signature as returned by eth_sign
        """
        if len(raw) != 65:
            raise ValueError(f"signature must be 65 bytes, got {len(raw)}")
        return cls(
            v=raw[64],
            r=int.from_bytes(raw[:32], "big"),
            s=int.from_bytes(raw[32:64], "big"),
        )

    @classmethod
    def from_hex(cls, raw: str) -> "Signature":
        return cls.from_bytes(to_bytes(hexstr=raw))

    def to_bytes(self) -> bytes:
        return (
            self.r.to_bytes(32, "big")
            + self.s.to_bytes(32, "big")
            + bytes([self.v])
        )

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()


def _message_bytes(message: Message) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)


def message_hash(message: Message) -> bytes:
    return keccak(_message_bytes(message))


def eth_signed_message_hash(message: bytes) -> bytes:
    return keccak(SIGNED_MESSAGE_PREFIX + str(len(message)).encode() + message)


def canonicalize(message: Message) -> bytes:
    """
    Digest that the authority actually signs for the given message
    """
    return eth_signed_message_hash(message_hash(message))


def _standard_v(v: int) -> Optional[int]:
    if v in (27, 28):
        return v - 27
    if v in (0, 1):
        return v
    return None


def recover_signer(digest: bytes, signature: Signature) -> Optional[str]:
    """
    Recover the checksum address that produced signature over digest.
    Returns None if the signature components are malformed.
    """
    v = _standard_v(signature.v)
    if v is None:
        return None
    if not (0 < signature.r < SECP256K1_N and 0 < signature.s < SECP256K1_N):
        return None
    try:
        key_signature = keys.Signature(vrs=(v, signature.r, signature.s))
        public_key = key_signature.recover_public_key_from_msg_hash(digest)
    except (_BadKeySignature, ValidationError):
        return None
    return public_key.to_checksum_address()


def verify(message: Message, claimed_signer: str, signature: Signature) -> bool:
    recovered = recover_signer(canonicalize(message), signature)
    return recovered is not None and recovered == claimed_signer
