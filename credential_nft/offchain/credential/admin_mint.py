from typing import Optional

import fire

from credential_nft.offchain.util import persist
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(
    recipient: str,
    token_uri: str = "",
    ceramic_uri: str = "",
    name: str = "admin",
    state_path: Optional[str] = None,
) -> int:
    contract = load_contract(state_path)
    since = len(contract.events())
    recipient = get_address(recipient)
    token_id = contract.admin_mint(get_address(name), recipient, token_uri, ceramic_uri)
    persist(contract, since, state_path)
    print(f"minted credential {token_id} to {recipient}")
    return token_id


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
