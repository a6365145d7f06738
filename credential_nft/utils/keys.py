import os
from pathlib import Path
from typing import Tuple, Union

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import is_address, to_checksum_address

keys_dir = Path(
    os.getenv("CREDENTIAL_NFT_KEYS_DIR", Path(__file__).parent.parent.parent / "keys")
)


def get_signing_info(name: str) -> Tuple[LocalAccount, str]:
    """
    Load the account stored under keys/<name>.skey
    """
    skey_path = Path(keys_dir) / f"{name}.skey"
    with open(skey_path) as f:
        account = Account.from_key(f.read().strip())
    return account, account.address


def get_address(name: Union[str, int]) -> str:
    """
    Resolve a key name to its address; literal addresses are returned checksummed.
    A 0x address given on the command line reaches us as an int from fire.
    """
    if isinstance(name, int) and not isinstance(name, bool):
        name = "0x" + format(name, "040x")
    if is_address(name):
        return to_checksum_address(name)
    with open(Path(keys_dir) / f"{name}.addr") as f:
        return to_checksum_address(f.read().strip())
