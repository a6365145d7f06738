"""
Gateway side of signature gated minting: sign a fresh (or given) nonce with
the minter allower key. The printed nonce and signature are handed to the
contributor, who submits them with credential/mint.py.
"""

from typing import Optional, Tuple

import fire

from credential_nft.offchain.util import new_nonce, sign_nonce
from credential_nft.onchain.signature import Signature
from credential_nft.utils import get_signing_info
from credential_nft.utils.logging import configure_logging


def main(name: str = "gateway", nonce: Optional[str] = None) -> Tuple[str, Signature]:
    account, address = get_signing_info(name)
    if nonce is None:
        nonce = new_nonce()
    signature = sign_nonce(account, str(nonce))
    print(f"signer: {address}")
    print(f"nonce: {nonce}")
    print(f"signature: {signature.to_hex()}")
    return str(nonce), signature


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
