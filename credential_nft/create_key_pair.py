from pathlib import Path

import click
from eth_account import Account

from credential_nft.utils import keys


@click.command()
@click.argument("name")
def main(name):
    """
    Creates a secp256k1 signing key and its address.
    """
    keys_dir = Path(keys.keys_dir)
    keys_dir.mkdir(parents=True, exist_ok=True)
    skey_path = keys_dir.joinpath(f"{name}.skey")
    addr_path = keys_dir.joinpath(f"{name}.addr")

    if skey_path.exists():
        raise FileExistsError(f"signing key file {skey_path} already exists")
    if addr_path.exists():
        raise FileExistsError(f"address file {addr_path} already exists")

    account = Account.create()
    with open(skey_path, mode="w") as f:
        f.write(account.key.hex())
    skey_path.chmod(0o600)

    with open(addr_path, mode="w") as f:
        f.write(account.address)

    print(f"wrote signing key to: {skey_path}")
    print(f"wrote address to: {addr_path}")


if __name__ == "__main__":
    main()
