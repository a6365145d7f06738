import datetime
from typing import Optional

import fire

from credential_nft.utils import load_contract
from credential_nft.utils.logging import configure_logging


def main(token_id: Optional[int] = None, state_path: Optional[str] = None) -> dict:
    """
    Print a credential, or the contract overview if no token id is given
    """
    contract = load_contract(state_path)
    if token_id is None:
        info = {
            "name": contract.name(),
            "symbol": contract.symbol(),
            "minter_allower": contract.minter_allower(),
            "total_supply": contract.total_supply(),
            "guild_count": contract.guild_count(),
            "transfer_enabled": contract.transfer_enabled(),
            "paused": contract.paused(),
        }
    else:
        created = contract.creation_date(token_id)
        info = {
            "token_id": token_id,
            "owner": contract.owner_of(token_id),
            "token_uri": contract.token_uri(token_id),
            "ceramic_uri": contract.ceramic_uri(token_id),
            "valid": contract.is_valid(token_id),
            "created": datetime.datetime.fromtimestamp(
                created, tz=datetime.timezone.utc
            ).isoformat(),
        }
    for k, v in info.items():
        print(f"{k}: {v}")
    return info


if __name__ == "__main__":
    configure_logging()
    fire.Fire(main)
