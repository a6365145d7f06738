"""
The token ledger combines the ownership index, the enumeration index
and the metadata store. Authorization and lifecycle checks happen in
the contract before any of these primitives are called.
"""

from dataclasses import dataclass, field

from credential_nft.onchain.errors import IncorrectOwner
from credential_nft.onchain.token.enumeration import EnumerationIndex
from credential_nft.onchain.token.metadata import CredentialMetadata, MetadataStore
from credential_nft.onchain.token.ownership import OwnershipIndex


@dataclass
class TokenLedger:
    ownership: OwnershipIndex = field(default_factory=OwnershipIndex)
    enumeration: EnumerationIndex = field(default_factory=EnumerationIndex)
    metadata: MetadataStore = field(default_factory=MetadataStore)

    def mint(self, recipient: str, token_id: int, record: CredentialMetadata) -> None:
        assert not self.ownership.exists(token_id), "Token already minted"
        self.ownership.assign(token_id, recipient)
        self.enumeration.add_token(token_id)
        self.enumeration.add_to_owner(recipient, token_id)
        self.metadata.put(token_id, record)

    def burn(self, token_id: int) -> str:
        owner = self.ownership.release(token_id)
        self.enumeration.remove_from_owner(owner, token_id)
        self.enumeration.remove_token(token_id)
        self.metadata.delete(token_id)
        return owner

    def transfer(self, sender: str, recipient: str, token_id: int) -> None:
        owner = self.ownership.owner_of(token_id)
        if owner != sender:
            raise IncorrectOwner(f"token {token_id} is not owned by {sender}")
        self.ownership.release(token_id)
        self.enumeration.remove_from_owner(sender, token_id)
        self.ownership.assign(token_id, recipient)
        self.enumeration.add_to_owner(recipient, token_id)

    def to_dict(self) -> dict:
        return {
            "ownership": self.ownership.to_dict(),
            "enumeration": self.enumeration.to_dict(),
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "TokenLedger":
        return cls(
            ownership=OwnershipIndex.from_dict(d["ownership"]),
            enumeration=EnumerationIndex.from_dict(d["enumeration"]),
            metadata=MetadataStore.from_dict(d["metadata"]),
        )
