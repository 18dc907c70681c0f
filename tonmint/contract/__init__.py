from .contract import ContractError, CodeNotFoundError, WalletCodeCache, contract_address, load_code_cell
from .jetton import get_jetton_wallet_address, build_mint_body, build_mint_payload, build_mint_payload_base64, \
    build_mint_transaction
