from credential_nft.utils.keys import get_signing_info, get_address, keys_dir
from credential_nft.utils.context import load_contract, save_contract, show_events
