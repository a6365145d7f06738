"""
The contributor credential token. Credentials are ERC721 style tokens that are
either minted by holders of the minter role or by anyone presenting a nonce
signed by the minter allower (the off-chain gateway).

Every state changing call is applied as one transaction: it runs on a private
copy of the contract state under a single writer lock, and the copy replaces
the published state only if the call completes. Queries read the published
state without locking.
"""

import copy
import threading
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

import structlog

from credential_nft.onchain.errors import (
    BadSignature,
    CredentialNFTError,
    ReentrantCall,
    TokenPaused,
    Unauthorized,
    UnsafeRecipient,
)
from credential_nft.onchain.events import (
    Approval,
    ApprovalForAll,
    CredentialCreated,
    Event,
    GuildAdded,
    MinterAllowerChanged,
    Paused,
    RoleGranted,
    RoleRevoked,
    Transfer,
    TransferabilityToggled,
    Unpaused,
    ValidityToggled,
)
from credential_nft.onchain.guilds import Guild
from credential_nft.onchain.mint_gate import (
    authorize,
    check_authority,
    is_nonce_used,
    set_authority,
)
from credential_nft.onchain.signature import Signature
from credential_nft.onchain.token.metadata import CredentialMetadata
from credential_nft.onchain.types import (
    ContractState,
    DEFAULT_ADMIN_ROLE,
    GateState,
    MINTER_ROLE,
    PAUSER_ROLE,
    ROLES,
    Transaction,
    ZERO_ADDRESS,
)
from credential_nft.onchain.util import (
    before_token_transfer,
    check_approved_or_owner,
    check_batch_lengths,
    check_known_role,
    check_nonzero_address,
    check_role,
    has_role,
    normalize_address,
)

logger = structlog.get_logger(__name__)

# bytes4(keccak256("onERC721Received(address,address,uint256,bytes)"))
ERC721_RECEIVED = bytes.fromhex("150b7a02")

# (operator, sender, token_id, data) -> ERC721_RECEIVED
ReceiverHook = Callable[[str, str, int, bytes], bytes]
SignatureLike = Union[Signature, str, bytes, bytearray]


def _now() -> int:
    return int(time.time())


def _as_signature(signature: SignatureLike) -> Signature:
    if isinstance(signature, Signature):
        return signature
    try:
        if isinstance(signature, str):
            return Signature.from_hex(signature)
        if isinstance(signature, (bytes, bytearray)):
            return Signature.from_bytes(bytes(signature))
    except (TypeError, ValueError) as e:
        raise BadSignature(f"malformed signature: {e}") from e
    raise BadSignature(f"unsupported signature type {type(signature).__name__}")


class CredentialNFT:
    def __init__(
        self,
        deployer: str,
        minter_allower: str,
        name: str = "CredentialNFT",
        symbol: str = "CRED",
        clock: Callable[[], int] = _now,
        transfer_enabled: bool = False,
    ):
        check_authority(minter_allower)
        minter_allower = normalize_address(minter_allower)
        deployer = check_nonzero_address(deployer)
        state = ContractState(
            name=name,
            symbol=symbol,
            gate=GateState(minter_allower),
            roles={role: {deployer} for role in ROLES},
            transfer_enabled=transfer_enabled,
        )
        self._setup(state, clock, [])

    @classmethod
    def from_state(
        cls,
        state: ContractState,
        clock: Callable[[], int] = _now,
        events: Iterable[Event] = (),
    ) -> "CredentialNFT":
        """
        Restore a contract from a previously taken snapshot
        """
        contract = cls.__new__(cls)
        contract._setup(copy.deepcopy(state), clock, list(events))
        return contract

    def _setup(
        self, state: ContractState, clock: Callable[[], int], events: List[Event]
    ) -> None:
        self._state = state
        self._clock = clock
        self._events = events
        self._receivers: Dict[str, ReceiverHook] = {}
        self._lock = threading.Lock()
        self._local = threading.local()

    @contextmanager
    def _transaction(self, operation: str, caller: str) -> Iterator[Transaction]:
        if getattr(self._local, "active", False):
            raise ReentrantCall(f"{operation} called during another transaction")
        caller = normalize_address(caller)
        with self._lock:
            self._local.active = True
            tx = Transaction(copy.deepcopy(self._state), caller)
            try:
                yield tx
            except Exception as e:
                logger.warning(
                    "transaction_reverted",
                    operation=operation,
                    caller=caller,
                    error=type(e).__name__,
                    reason=str(e),
                )
                raise
            finally:
                self._local.active = False
            self._state = tx.state
            self._events.extend(tx.events)

    def _issue_credential(
        self, tx: Transaction, recipient: str, token_uri: str, ceramic_uri: str
    ) -> int:
        state = tx.state
        recipient = check_nonzero_address(recipient)
        before_token_transfer(state, ZERO_ADDRESS, recipient)
        token_id = state.token_id_counter
        state.token_id_counter += 1
        record = CredentialMetadata(token_uri, ceramic_uri, created_at=self._clock())
        state.ledger.mint(recipient, token_id, record)
        tx.emit(Transfer(ZERO_ADDRESS, recipient, token_id))
        tx.emit(CredentialCreated(token_id))
        return token_id

    # Minting

    def authorize_and_mint(
        self,
        caller: str,
        recipient: str,
        token_uri: str,
        ceramic_uri: str,
        nonce: str,
        signature: SignatureLike,
    ) -> int:
        """
        Mint a credential authorized by the minter allower's signature over nonce.
        Open to any caller; each nonce can be used once.
        """
        with self._transaction("authorize_and_mint", caller) as tx:
            authorize(tx.state.gate, nonce, _as_signature(signature))
            token_id = self._issue_credential(tx, recipient, token_uri, ceramic_uri)
        logger.info(
            "credential_minted",
            token_id=token_id,
            recipient=recipient,
            nonce=nonce,
            path="signature",
        )
        return token_id

    def admin_mint(
        self, caller: str, recipient: str, token_uri: str, ceramic_uri: str
    ) -> int:
        with self._transaction("admin_mint", caller) as tx:
            check_role(tx.state, MINTER_ROLE, tx.caller)
            token_id = self._issue_credential(tx, recipient, token_uri, ceramic_uri)
        logger.info(
            "credential_minted", token_id=token_id, recipient=recipient, path="admin"
        )
        return token_id

    def batch_admin_mint(
        self,
        caller: str,
        recipients: List[str],
        token_uris: List[str],
        ceramic_uris: List[str],
    ) -> List[int]:
        with self._transaction("batch_admin_mint", caller) as tx:
            check_role(tx.state, MINTER_ROLE, tx.caller)
            check_batch_lengths(recipients, token_uris, ceramic_uris)
            token_ids = [
                self._issue_credential(tx, recipient, token_uri, ceramic_uri)
                for recipient, token_uri, ceramic_uri in zip(
                    recipients, token_uris, ceramic_uris
                )
            ]
        logger.info("credentials_minted", token_ids=token_ids, path="admin_batch")
        return token_ids

    def burn(self, caller: str, token_id: int) -> None:
        with self._transaction("burn", caller) as tx:
            state = tx.state
            owner = state.ledger.ownership.owner_of(token_id)
            before_token_transfer(state, owner, ZERO_ADDRESS)
            check_approved_or_owner(state, tx.caller, token_id)
            state.ledger.burn(token_id)
            tx.emit(Transfer(owner, ZERO_ADDRESS, token_id))

    # Administration

    def toggle_validity(self, caller: str, token_id: int) -> bool:
        with self._transaction("toggle_validity", caller) as tx:
            check_role(tx.state, DEFAULT_ADMIN_ROLE, tx.caller)
            valid = tx.state.ledger.metadata.toggle_validity(token_id)
            tx.emit(ValidityToggled(token_id, valid))
        return valid

    def toggle_transferability(self, caller: str) -> bool:
        with self._transaction("toggle_transferability", caller) as tx:
            check_role(tx.state, DEFAULT_ADMIN_ROLE, tx.caller)
            tx.state.transfer_enabled = not tx.state.transfer_enabled
            tx.emit(TransferabilityToggled(tx.state.transfer_enabled))
        return tx.state.transfer_enabled

    def add_guild(self, caller: str, name: str, admins: List[str]) -> int:
        with self._transaction("add_guild", caller) as tx:
            check_role(tx.state, DEFAULT_ADMIN_ROLE, tx.caller)
            admins = [normalize_address(a) for a in admins]
            guild_id = tx.state.guilds.add(name, admins)
            tx.emit(GuildAdded(guild_id, name, tuple(admins)))
        return guild_id

    def set_minter_allower(self, caller: str, minter_allower: str) -> None:
        with self._transaction("set_minter_allower", caller) as tx:
            check_role(tx.state, DEFAULT_ADMIN_ROLE, tx.caller)
            check_authority(minter_allower)
            previous = set_authority(tx.state.gate, normalize_address(minter_allower))
            tx.emit(MinterAllowerChanged(previous, tx.state.gate.minter_allower))

    def pause(self, caller: str) -> None:
        with self._transaction("pause", caller) as tx:
            check_role(tx.state, PAUSER_ROLE, tx.caller)
            if tx.state.paused:
                raise TokenPaused("already paused")
            tx.state.paused = True
            tx.emit(Paused(tx.caller))

    def unpause(self, caller: str) -> None:
        with self._transaction("unpause", caller) as tx:
            check_role(tx.state, PAUSER_ROLE, tx.caller)
            if not tx.state.paused:
                raise CredentialNFTError("not paused")
            tx.state.paused = False
            tx.emit(Unpaused(tx.caller))

    def grant_role(self, caller: str, role: str, account: str) -> None:
        with self._transaction("grant_role", caller) as tx:
            check_known_role(role)
            check_role(tx.state, DEFAULT_ADMIN_ROLE, tx.caller)
            account = check_nonzero_address(account)
            members = tx.state.roles.setdefault(role, set())
            if account not in members:
                members.add(account)
                tx.emit(RoleGranted(role, account, tx.caller))

    def revoke_role(self, caller: str, role: str, account: str) -> None:
        with self._transaction("revoke_role", caller) as tx:
            check_known_role(role)
            check_role(tx.state, DEFAULT_ADMIN_ROLE, tx.caller)
            self._revoke(tx, role, normalize_address(account))

    def renounce_role(self, caller: str, role: str, account: str) -> None:
        with self._transaction("renounce_role", caller) as tx:
            check_known_role(role)
            account = normalize_address(account)
            if account != tx.caller:
                raise Unauthorized("can only renounce roles for self")
            self._revoke(tx, role, account)

    def _revoke(self, tx: Transaction, role: str, account: str) -> None:
        members = tx.state.roles.get(role, set())
        if account in members:
            members.discard(account)
            tx.emit(RoleRevoked(role, account, tx.caller))

    # Approvals and transfers

    def approve(self, caller: str, approved: str, token_id: int) -> None:
        with self._transaction("approve", caller) as tx:
            approved = normalize_address(approved)
            owner = tx.state.ledger.ownership.approve(
                tx.caller, None if approved == ZERO_ADDRESS else approved, token_id
            )
            tx.emit(Approval(owner, approved, token_id))

    def set_approval_for_all(self, caller: str, operator: str, approved: bool) -> None:
        with self._transaction("set_approval_for_all", caller) as tx:
            operator = normalize_address(operator)
            tx.state.ledger.ownership.set_approval_for_all(
                tx.caller, operator, approved
            )
            tx.emit(ApprovalForAll(tx.caller, operator, approved))

    def _transfer(
        self, tx: Transaction, sender: str, recipient: str, token_id: int
    ) -> Tuple[str, str]:
        state = tx.state
        sender = normalize_address(sender)
        recipient = check_nonzero_address(recipient)
        state.ledger.ownership.owner_of(token_id)
        before_token_transfer(state, sender, recipient)
        check_approved_or_owner(state, tx.caller, token_id)
        state.ledger.transfer(sender, recipient, token_id)
        tx.emit(Transfer(sender, recipient, token_id))
        return sender, recipient

    def transfer_from(
        self, caller: str, sender: str, recipient: str, token_id: int
    ) -> None:
        with self._transaction("transfer_from", caller) as tx:
            self._transfer(tx, sender, recipient, token_id)

    def safe_transfer_from(
        self,
        caller: str,
        sender: str,
        recipient: str,
        token_id: int,
        data: bytes = b"",
    ) -> None:
        """
        Transfer that additionally requires a recipient with a registered
        receiver hook to acknowledge the token with ERC721_RECEIVED.
        """
        with self._transaction("safe_transfer_from", caller) as tx:
            sender, recipient = self._transfer(tx, sender, recipient, token_id)
            hook = self._receivers.get(recipient)
            if hook is not None and hook(tx.caller, sender, token_id, data) != (
                ERC721_RECEIVED
            ):
                raise UnsafeRecipient(f"{recipient} did not accept token {token_id}")

    def register_receiver(self, address: str, hook: Optional[ReceiverHook]) -> None:
        """
        Mark address as a contract account whose hook is called on safe transfers.
        Passing None removes the hook.
        """
        address = normalize_address(address)
        if hook is None:
            self._receivers.pop(address, None)
        else:
            self._receivers[address] = hook

    # Queries

    def snapshot(self) -> ContractState:
        return copy.deepcopy(self._state)

    def events(self, since: int = 0) -> List[Event]:
        return self._events[since:]

    def name(self) -> str:
        return self._state.name

    def symbol(self) -> str:
        return self._state.symbol

    def minter_allower(self) -> str:
        return self._state.gate.minter_allower

    def is_nonce_used(self, nonce: str) -> bool:
        return is_nonce_used(self._state.gate, nonce)

    def token_uri(self, token_id: int) -> str:
        return self._state.ledger.metadata.get(token_id).token_uri

    def ceramic_uri(self, token_id: int) -> str:
        return self._state.ledger.metadata.get(token_id).ceramic_uri

    def is_valid(self, token_id: int) -> bool:
        return self._state.ledger.metadata.get(token_id).valid

    def creation_date(self, token_id: int) -> int:
        return self._state.ledger.metadata.get(token_id).created_at

    def guild(self, guild_id: int) -> Guild:
        guild = self._state.guilds.get(guild_id)
        return Guild(guild.name, list(guild.admins))

    def guild_count(self) -> int:
        return self._state.guilds.counter

    def transfer_enabled(self) -> bool:
        return self._state.transfer_enabled

    def paused(self) -> bool:
        return self._state.paused

    def has_role(self, role: str, account: str) -> bool:
        return has_role(self._state, role, normalize_address(account))

    def owner_of(self, token_id: int) -> str:
        return self._state.ledger.ownership.owner_of(token_id)

    def balance_of(self, owner: str) -> int:
        return self._state.ledger.ownership.balance_of(check_nonzero_address(owner))

    def get_approved(self, token_id: int) -> str:
        approved = self._state.ledger.ownership.get_approved(token_id)
        return ZERO_ADDRESS if approved is None else approved

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return self._state.ledger.ownership.is_approved_for_all(
            normalize_address(owner), normalize_address(operator)
        )

    def total_supply(self) -> int:
        return self._state.ledger.enumeration.total_supply()

    def token_by_index(self, index: int) -> int:
        return self._state.ledger.enumeration.token_by_index(index)

    def token_of_owner_by_index(self, owner: str, index: int) -> int:
        return self._state.ledger.enumeration.token_of_owner_by_index(
            normalize_address(owner), index
        )

    def tokens_of_owner(self, owner: str) -> List[int]:
        return self._state.ledger.enumeration.tokens_of_owner(
            normalize_address(owner)
        )
