import uuid
from pathlib import Path
from typing import Any, List, Optional, Union

import structlog
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount

from credential_nft.onchain.credential_nft import CredentialNFT
from credential_nft.onchain.events import event_to_dict
from credential_nft.onchain.signature import Signature, message_hash
from credential_nft.utils.context import save_contract, show_events

logger = structlog.get_logger(__name__)


def new_nonce() -> str:
    # fire leaves uuid strings as text, a bare hex token may be parsed as a number
    return str(uuid.uuid4())


def sign_nonce(signer: Union[LocalAccount, bytes, str], nonce: str) -> Signature:
    """
    Sign nonce the way the gateway does: personal_sign over keccak256(nonce)
    """
    key = signer.key if isinstance(signer, LocalAccount) else signer
    signed = Account.sign_message(encode_defunct(primitive=message_hash(nonce)), key)
    return Signature(v=signed.v, r=signed.r, s=signed.s)


def signature_arg(raw: Any) -> Any:
    """
    fire parses a 0x prefixed signature into an int, restore its 65 byte hex form
    """
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return "0x" + format(raw, "0130x")
    return raw


def list_arg(raw: Any) -> List[Any]:
    """
    fire only parses [a,b] into a list if every item is a python literal or bare
    word, anything else (e.g. uris) arrives as the raw string
    """
    if isinstance(raw, str):
        return [item.strip() for item in raw.strip("[]").split(",") if item.strip()]
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return [raw]


def persist(contract: CredentialNFT, since: int, state_path: Optional[Path] = None):
    """
    Store the contract and print the events emitted after index since
    """
    path = save_contract(contract, state_path)
    events = contract.events(since)
    for event in events:
        fields = event_to_dict(event)
        logger.debug(fields.pop("event"), **fields)
    show_events(events)
    print(f"contract state: {path}")
