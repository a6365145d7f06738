"""
Ownership index of the token ledger: owners, balances and approvals.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from credential_nft.onchain.errors import (
    NonexistentToken,
    InvalidAddress,
    NotOwnerNorApproved,
)


@dataclass
class OwnershipIndex:
    owners: Dict[int, str] = field(default_factory=dict)
    balances: Dict[str, int] = field(default_factory=dict)
    token_approvals: Dict[int, str] = field(default_factory=dict)
    operator_approvals: Dict[str, Set[str]] = field(default_factory=dict)

    def exists(self, token_id: int) -> bool:
        return token_id in self.owners

    def owner_of(self, token_id: int) -> str:
        owner = self.owners.get(token_id)
        if owner is None:
            raise NonexistentToken(f"token {token_id} does not exist")
        return owner

    def balance_of(self, owner: str) -> int:
        return self.balances.get(owner, 0)

    def assign(self, token_id: int, owner: str) -> None:
        self.owners[token_id] = owner
        self.balances[owner] = self.balances.get(owner, 0) + 1

    def release(self, token_id: int) -> str:
        """
        Remove the token from its owner, clearing its approval
        """
        owner = self.owner_of(token_id)
        self.token_approvals.pop(token_id, None)
        del self.owners[token_id]
        self.balances[owner] -= 1
        if self.balances[owner] == 0:
            del self.balances[owner]
        return owner

    def get_approved(self, token_id: int) -> Optional[str]:
        self.owner_of(token_id)
        return self.token_approvals.get(token_id)

    def approve(self, caller: str, approved: Optional[str], token_id: int) -> str:
        owner = self.owner_of(token_id)
        if approved == owner:
            raise InvalidAddress("approval to current owner")
        if caller != owner and not self.is_approved_for_all(owner, caller):
            raise NotOwnerNorApproved(
                f"{caller} is neither owner of nor approved for all of {owner}"
            )
        if approved is None:
            self.token_approvals.pop(token_id, None)
        else:
            self.token_approvals[token_id] = approved
        return owner

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return operator in self.operator_approvals.get(owner, set())

    def set_approval_for_all(self, owner: str, operator: str, approved: bool) -> None:
        if owner == operator:
            raise InvalidAddress("approve to caller")
        operators = self.operator_approvals.setdefault(owner, set())
        if approved:
            operators.add(operator)
        else:
            operators.discard(operator)
            if not operators:
                del self.operator_approvals[owner]

    def is_approved_or_owner(self, spender: str, token_id: int) -> bool:
        owner = self.owner_of(token_id)
        return (
            spender == owner
            or self.is_approved_for_all(owner, spender)
            or self.token_approvals.get(token_id) == spender
        )

    def to_dict(self) -> dict:
        return {
            "owners": {str(k): v for k, v in self.owners.items()},
            "balances": dict(self.balances),
            "token_approvals": {str(k): v for k, v in self.token_approvals.items()},
            "operator_approvals": {
                k: sorted(v) for k, v in self.operator_approvals.items()
            },
        }

    @classmethod
    def from_dict(cls, d: dict) -> "OwnershipIndex":
        return cls(
            owners={int(k): v for k, v in d["owners"].items()},
            balances=dict(d["balances"]),
            token_approvals={int(k): v for k, v in d["token_approvals"].items()},
            operator_approvals={
                k: set(v) for k, v in d["operator_approvals"].items()
            },
        )
