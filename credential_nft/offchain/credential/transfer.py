from typing import Optional

import fire

from credential_nft.offchain.util import persist
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(
    token_id: int,
    recipient: str,
    name: str = "contributor",
    sender: Optional[str] = None,
    safe: bool = True,
    state_path: Optional[str] = None,
):
    """
    Transfer a credential. name is the caller, sender defaults to the caller.
    """
    caller = get_address(name)
    sender = caller if sender is None else get_address(sender)
    contract = load_contract(state_path)
    since = len(contract.events())
    recipient = get_address(recipient)
    if safe:
        contract.safe_transfer_from(caller, sender, recipient, int(token_id))
    else:
        contract.transfer_from(caller, sender, recipient, int(token_id))
    persist(contract, since, state_path)


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
