"""
Enumeration index of the token ledger. Removal swaps the last element into the
freed slot, so token order changes on burns and transfers.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from credential_nft.onchain.errors import NonexistentToken


def _swap_and_pop(tokens: List[int], token_id: int) -> None:
    index = tokens.index(token_id)
    last = tokens.pop()
    if last != token_id:
        tokens[index] = last


@dataclass
class EnumerationIndex:
    all_tokens: List[int] = field(default_factory=list)
    owned_tokens: Dict[str, List[int]] = field(default_factory=dict)

    def total_supply(self) -> int:
        return len(self.all_tokens)

    def token_by_index(self, index: int) -> int:
        if not 0 <= index < len(self.all_tokens):
            raise NonexistentToken(f"global index {index} out of bounds")
        return self.all_tokens[index]

    def token_of_owner_by_index(self, owner: str, index: int) -> int:
        tokens = self.owned_tokens.get(owner, [])
        if not 0 <= index < len(tokens):
            raise NonexistentToken(f"owner index {index} out of bounds")
        return tokens[index]

    def tokens_of_owner(self, owner: str) -> List[int]:
        return list(self.owned_tokens.get(owner, []))

    def add_to_owner(self, owner: str, token_id: int) -> None:
        self.owned_tokens.setdefault(owner, []).append(token_id)

    def remove_from_owner(self, owner: str, token_id: int) -> None:
        tokens = self.owned_tokens[owner]
        _swap_and_pop(tokens, token_id)
        if not tokens:
            del self.owned_tokens[owner]

    def add_token(self, token_id: int) -> None:
        self.all_tokens.append(token_id)

    def remove_token(self, token_id: int) -> None:
        _swap_and_pop(self.all_tokens, token_id)

    def to_dict(self) -> dict:
        return {
            "all_tokens": list(self.all_tokens),
            "owned_tokens": {k: list(v) for k, v in self.owned_tokens.items()},
        }

    @classmethod
    def from_dict(cls, d: dict) -> "EnumerationIndex":
        return cls(
            all_tokens=list(d["all_tokens"]),
            owned_tokens={k: list(v) for k, v in d["owned_tokens"].items()},
        )
