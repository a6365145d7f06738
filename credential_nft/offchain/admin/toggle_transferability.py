from typing import Optional

import fire

from credential_nft.offchain.util import persist
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(name: str = "admin", state_path: Optional[str] = None) -> bool:
    contract = load_contract(state_path)
    since = len(contract.events())
    enabled = contract.toggle_transferability(get_address(name))
    persist(contract, since, state_path)
    print(f"transfers {'enabled' if enabled else 'disabled'}")
    return enabled


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
