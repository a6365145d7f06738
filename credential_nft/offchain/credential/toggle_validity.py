from typing import Optional

import fire

from credential_nft.offchain.util import persist
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(token_id: int, name: str = "admin", state_path: Optional[str] = None) -> bool:
    contract = load_contract(state_path)
    since = len(contract.events())
    valid = contract.toggle_validity(get_address(name), int(token_id))
    persist(contract, since, state_path)
    print(f"credential {token_id} is now {'valid' if valid else 'invalid'}")
    return valid


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
