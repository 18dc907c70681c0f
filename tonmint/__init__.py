from .boc import Cell, CellError, CellRangeError, CellUnderflowError, CellTypes, Slice, Builder, begin_cell, Boc, \
    BocError, Address, AddressError
from .tlb import TlbError, TlbScheme, StateInit, TickTock, JettonWalletData, JettonMintBody
from .contract import ContractError, CodeNotFoundError, WalletCodeCache, contract_address, load_code_cell, \
    get_jetton_wallet_address, build_mint_body, build_mint_payload, build_mint_payload_base64, build_mint_transaction
from .service import ConfigError, MinterConfig, MintRequestError, MintService
