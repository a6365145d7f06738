from pathlib import Path
from typing import Optional

import fire

from credential_nft.onchain.credential_nft import CredentialNFT
from credential_nft.utils import context, get_address, save_contract
from credential_nft.utils.logging import configure_logging


def main(
    name: str = "admin",
    minter_allower: str = "gateway",
    token_name: str = "CredentialNFT",
    symbol: str = "CRED",
    transfer_enabled: bool = False,
    state_path: Optional[str] = None,
    overwrite: bool = False,
) -> CredentialNFT:
    """
    Create a fresh contract. name receives all roles, minter_allower is the
    key name or address of the gateway.
    """
    path = Path(state_path or context.state_path)
    if path.exists() and not overwrite:
        raise FileExistsError(f"contract state {path} already exists")
    print("Deploying ...")
    contract = CredentialNFT(
        deployer=get_address(name),
        minter_allower=get_address(minter_allower),
        name=token_name,
        symbol=symbol,
        transfer_enabled=transfer_enabled,
    )
    save_contract(contract, path)
    print(f"{token_name} ({symbol}): {path}")
    print(f"admin: {get_address(name)}")
    print(f"minter allower: {contract.minter_allower()}")
    return contract


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
