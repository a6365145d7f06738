from typing import List, Optional

import fire

from credential_nft.offchain.util import list_arg, persist
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(
    guild_name: str,
    admins: List[str] = (),
    name: str = "admin",
    state_path: Optional[str] = None,
) -> int:
    contract = load_contract(state_path)
    since = len(contract.events())
    guild_id = contract.add_guild(
        get_address(name), str(guild_name), [get_address(a) for a in list_arg(admins)]
    )
    persist(contract, since, state_path)
    print(f"registered guild {guild_name} with id {guild_id}")
    return guild_id


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
