from typing import Optional

import fire

from credential_nft.offchain.util import persist
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(
    minter_allower: str, name: str = "admin", state_path: Optional[str] = None
) -> str:
    """
    Hand signature gated minting over to a new gateway key
    """
    contract = load_contract(state_path)
    since = len(contract.events())
    contract.set_minter_allower(get_address(name), get_address(minter_allower))
    persist(contract, since, state_path)
    return contract.minter_allower()


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
