from dataclasses import dataclass, field
from typing import Dict, List, Set

from credential_nft.onchain.events import Event
from credential_nft.onchain.guilds import GuildRegistry
from credential_nft.onchain.token.ledger import TokenLedger

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

DEFAULT_ADMIN_ROLE = "DEFAULT_ADMIN_ROLE"
MINTER_ROLE = "MINTER_ROLE"
PAUSER_ROLE = "PAUSER_ROLE"
ROLES = (DEFAULT_ADMIN_ROLE, MINTER_ROLE, PAUSER_ROLE)


@dataclass
class GateState:
    # The only address whose signatures authorize signature gated mints
    minter_allower: str
    # Nonces consumed by successful mints, never removed
    used_nonces: Set[str] = field(default_factory=set)

    def to_dict(self) -> dict:
        return {
            "minter_allower": self.minter_allower,
            "used_nonces": sorted(self.used_nonces),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "GateState":
        return cls(d["minter_allower"], set(d["used_nonces"]))


@dataclass
class ContractState:
    name: str
    symbol: str
    gate: GateState
    ledger: TokenLedger = field(default_factory=TokenLedger)
    guilds: GuildRegistry = field(default_factory=GuildRegistry)
    roles: Dict[str, Set[str]] = field(default_factory=dict)
    # next token id to be minted, never decremented
    token_id_counter: int = 0
    transfer_enabled: bool = False
    paused: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "gate": self.gate.to_dict(),
            "ledger": self.ledger.to_dict(),
            "guilds": self.guilds.to_dict(),
            "roles": {k: sorted(v) for k, v in self.roles.items()},
            "token_id_counter": self.token_id_counter,
            "transfer_enabled": self.transfer_enabled,
            "paused": self.paused,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ContractState":
        return cls(
            name=d["name"],
            symbol=d["symbol"],
            gate=GateState.from_dict(d["gate"]),
            ledger=TokenLedger.from_dict(d["ledger"]),
            guilds=GuildRegistry.from_dict(d["guilds"]),
            roles={k: set(v) for k, v in d["roles"].items()},
            token_id_counter=d["token_id_counter"],
            transfer_enabled=d["transfer_enabled"],
            paused=d["paused"],
        )


@dataclass
class Transaction:
    """
    A state changing call in flight. The state is a private working copy
    that only replaces the contract state if the call completes.
    """

    state: ContractState
    caller: str
    events: List[Event] = field(default_factory=list)

    def emit(self, event: Event) -> None:
        self.events.append(event)
