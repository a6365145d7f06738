from typing import Optional

import fire

from credential_nft.offchain.util import persist
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(name: str = "admin", unpause: bool = False, state_path: Optional[str] = None):
    """
    Pause (or with --unpause resume) all mints, burns and transfers
    """
    contract = load_contract(state_path)
    since = len(contract.events())
    if unpause:
        contract.unpause(get_address(name))
    else:
        contract.pause(get_address(name))
    persist(contract, since, state_path)


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
