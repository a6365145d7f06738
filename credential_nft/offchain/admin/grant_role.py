from typing import Optional

import fire

from credential_nft.offchain.util import persist
from credential_nft.onchain.types import MINTER_ROLE
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(
    account: str,
    role: str = MINTER_ROLE,
    name: str = "admin",
    revoke: bool = False,
    state_path: Optional[str] = None,
):
    contract = load_contract(state_path)
    since = len(contract.events())
    if revoke:
        contract.revoke_role(get_address(name), role, get_address(account))
    else:
        contract.grant_role(get_address(name), role, get_address(account))
    persist(contract, since, state_path)


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
