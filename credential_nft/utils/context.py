"""
The persisted contract the command line scripts operate on.
A JSON file holding the contract state and its committed event log.
"""

import json
import os
from pathlib import Path
from typing import List, Optional

from credential_nft.onchain.credential_nft import CredentialNFT
from credential_nft.onchain.events import Event, event_from_dict, event_to_dict
from credential_nft.onchain.types import ContractState

state_path = Path(os.getenv("CREDENTIAL_NFT_STATE", "credential_nft_state.json"))


def load_contract(path: Optional[Path] = None) -> CredentialNFT:
    path = Path(path or state_path)
    if not path.exists():
        raise FileNotFoundError(
            f"no contract state at {path}, deploy the contract first"
        )
    with open(path) as f:
        raw = json.load(f)
    return CredentialNFT.from_state(
        ContractState.from_dict(raw["state"]),
        events=[event_from_dict(e) for e in raw["events"]],
    )


def save_contract(contract: CredentialNFT, path: Optional[Path] = None) -> Path:
    path = Path(path or state_path)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with open(tmp_path, "w") as f:
        json.dump(
            {
                "state": contract.snapshot().to_dict(),
                "events": [event_to_dict(e) for e in contract.events()],
            },
            f,
            indent=2,
        )
    # replace in one step so a crash never leaves a half written state
    os.replace(tmp_path, path)
    return path


def show_events(events: List[Event]):
    for event in events:
        d = event_to_dict(event)
        name = d.pop("event")
        print(f"{name}: " + ", ".join(f"{k}={v}" for k, v in d.items()))
