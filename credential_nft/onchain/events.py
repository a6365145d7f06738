"""
Events emitted by the contract. They are collected per transaction and only
appended to the public event log once the transaction is committed.
"""

from dataclasses import dataclass, asdict, fields
from typing import Dict, Tuple, Type, Union


@dataclass(frozen=True)
class Transfer:
    sender: str
    recipient: str
    token_id: int


@dataclass(frozen=True)
class Approval:
    owner: str
    approved: str
    token_id: int


@dataclass(frozen=True)
class ApprovalForAll:
    owner: str
    operator: str
    approved: bool


@dataclass(frozen=True)
class CredentialCreated:
    token_id: int


@dataclass(frozen=True)
class ValidityToggled:
    token_id: int
    valid: bool


@dataclass(frozen=True)
class TransferabilityToggled:
    transfer_enabled: bool


@dataclass(frozen=True)
class GuildAdded:
    guild_id: int
    name: str
    admins: Tuple[str, ...]


@dataclass(frozen=True)
class Paused:
    account: str


@dataclass(frozen=True)
class Unpaused:
    account: str


@dataclass(frozen=True)
class RoleGranted:
    role: str
    account: str
    sender: str


@dataclass(frozen=True)
class RoleRevoked:
    role: str
    account: str
    sender: str


@dataclass(frozen=True)
class MinterAllowerChanged:
    previous: str
    current: str


Event = Union[
    Transfer,
    Approval,
    ApprovalForAll,
    CredentialCreated,
    ValidityToggled,
    TransferabilityToggled,
    GuildAdded,
    Paused,
    Unpaused,
    RoleGranted,
    RoleRevoked,
    MinterAllowerChanged,
]

EVENT_TYPES: Dict[str, Type] = {t.__name__: t for t in Event.__args__}


def event_to_dict(event: Event) -> dict:
    return {"event": type(event).__name__, **asdict(event)}


def event_from_dict(d: dict) -> Event:
    event_type = EVENT_TYPES[d["event"]]
    kwargs = {f.name: d[f.name] for f in fields(event_type)}
    if event_type is GuildAdded:
        kwargs["admins"] = tuple(kwargs["admins"])
    return event_type(**kwargs)
