"""
Per token credential metadata: metadata URI, ceramic stream pointer,
creation time and validity flag.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict

from credential_nft.onchain.errors import NonexistentToken


@dataclass
class CredentialMetadata:
    token_uri: str
    ceramic_uri: str
    # seconds since epoch, taken from the contract clock at mint time
    created_at: int
    valid: bool = False


@dataclass
class MetadataStore:
    records: Dict[int, CredentialMetadata] = field(default_factory=dict)

    def get(self, token_id: int) -> CredentialMetadata:
        record = self.records.get(token_id)
        if record is None:
            raise NonexistentToken(f"token {token_id} does not exist")
        return record

    def put(self, token_id: int, record: CredentialMetadata) -> None:
        self.records[token_id] = record

    def delete(self, token_id: int) -> None:
        self.records.pop(token_id, None)

    def toggle_validity(self, token_id: int) -> bool:
        record = self.get(token_id)
        record.valid = not record.valid
        return record.valid

    def to_dict(self) -> dict:
        return {str(k): asdict(v) for k, v in self.records.items()}

    @classmethod
    def from_dict(cls, d: dict) -> "MetadataStore":
        return cls({int(k): CredentialMetadata(**v) for k, v in d.items()})
