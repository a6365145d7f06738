from typing import Optional

import fire

from credential_nft.offchain.util import persist
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(token_id: int, name: str = "contributor", state_path: Optional[str] = None):
    contract = load_contract(state_path)
    since = len(contract.events())
    contract.burn(get_address(name), int(token_id))
    persist(contract, since, state_path)


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
