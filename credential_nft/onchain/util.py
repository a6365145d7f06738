"""
Guards invoked at the top of contract operations. Each check raises the
matching error and leaves the state untouched.
"""

from typing import Any, List

from eth_utils import is_address, to_checksum_address

from credential_nft.onchain.errors import (
    InvalidAddress,
    InvalidBatchInput,
    NotOwnerNorApproved,
    TokenPaused,
    TransfersDisabled,
    Unauthorized,
)
from credential_nft.onchain.types import ContractState, ZERO_ADDRESS, ROLES


def normalize_address(address: Any) -> str:
    """
    EIP-55 checksum form of address, raises InvalidAddress for anything else
    """
    if not isinstance(address, str) or not is_address(address):
        raise InvalidAddress(f"{address!r} is not a valid address")
    return to_checksum_address(address)


def check_nonzero_address(address: Any) -> str:
    address = normalize_address(address)
    if address == ZERO_ADDRESS:
        raise InvalidAddress("zero address not allowed")
    return address


def has_role(state: ContractState, role: str, account: str) -> bool:
    return account in state.roles.get(role, set())


def check_role(state: ContractState, role: str, account: str) -> None:
    if not has_role(state, role, account):
        raise Unauthorized(f"account {account} is missing role {role}")


def check_known_role(role: str) -> None:
    if role not in ROLES:
        raise Unauthorized(f"unknown role {role}")


def check_not_paused(state: ContractState, sender: str, recipient: str) -> None:
    if state.paused:
        raise TokenPaused("token transfer while paused")


def check_transfer_enabled(state: ContractState, sender: str, recipient: str) -> None:
    # mints and burns are not transfers between holders
    if sender == ZERO_ADDRESS or recipient == ZERO_ADDRESS:
        return
    if not state.transfer_enabled:
        raise TransfersDisabled("transfers are disabled")


# run in order before every mint, burn and transfer
BEFORE_TOKEN_TRANSFER_CHECKS = [
    check_not_paused,
    check_transfer_enabled,
]


def before_token_transfer(state: ContractState, sender: str, recipient: str) -> None:
    for check in BEFORE_TOKEN_TRANSFER_CHECKS:
        check(state, sender, recipient)


def check_approved_or_owner(state: ContractState, spender: str, token_id: int) -> None:
    if not state.ledger.ownership.is_approved_or_owner(spender, token_id):
        raise NotOwnerNorApproved(
            f"{spender} is neither owner nor approved for token {token_id}"
        )


def check_batch_lengths(*columns: List[Any]) -> int:
    """
    Check that all columns of a batch have the same length and hold
    more than one entry. Returns the batch size.
    """
    lengths = {len(c) for c in columns}
    if len(lengths) != 1:
        raise InvalidBatchInput(
            f"batch columns differ in length: {[len(c) for c in columns]}"
        )
    (size,) = lengths
    if size <= 1:
        raise InvalidBatchInput(f"batch must hold more than one entry, got {size}")
    return size
