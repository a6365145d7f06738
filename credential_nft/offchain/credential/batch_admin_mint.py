from typing import List, Optional

import fire

from credential_nft.offchain.util import list_arg, persist
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(
    recipients: List[str],
    token_uris: List[str],
    ceramic_uris: List[str],
    name: str = "admin",
    state_path: Optional[str] = None,
) -> List[int]:
    """
    Mint one credential per recipient, e.g.
    --recipients='[alice,bob]' --token_uris='[ipfs://a,ipfs://b]' ...
    """
    contract = load_contract(state_path)
    since = len(contract.events())
    token_ids = contract.batch_admin_mint(
        get_address(name),
        [get_address(r) for r in list_arg(recipients)],
        [str(u) for u in list_arg(token_uris)],
        [str(u) for u in list_arg(ceramic_uris)],
    )
    persist(contract, since, state_path)
    print(f"minted credentials {token_ids}")
    return token_ids


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
