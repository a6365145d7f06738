from typing import Optional, Union

import fire

from credential_nft.offchain.util import persist, signature_arg
from credential_nft.utils import get_address, load_contract
from credential_nft.utils.logging import configure_logging


def main(
    nonce: str,
    signature: Union[str, int],
    name: str = "contributor",
    recipient: Optional[str] = None,
    token_uri: str = "",
    ceramic_uri: str = "",
    state_path: Optional[str] = None,
) -> int:
    """
    Mint a credential with a nonce and signature issued by the gateway.
    The credential goes to name unless a different recipient is given.
    """
    caller = get_address(name)
    recipient = caller if recipient is None else get_address(recipient)
    contract = load_contract(state_path)
    since = len(contract.events())
    token_id = contract.authorize_and_mint(
        caller,
        recipient,
        token_uri,
        ceramic_uri,
        str(nonce),
        signature_arg(signature),
    )
    persist(contract, since, state_path)
    print(f"minted credential {token_id} to {recipient}")
    return token_id


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
