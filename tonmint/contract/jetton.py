import base64
import typing

from .contract import contract_address
from ..boc import Address, Cell
from ..tlb import JettonWalletData, JettonMintBody


def get_jetton_wallet_address(master: typing.Union[Address, str], owner: typing.Union[Address, str],
                              wallet_code: Cell, workchain: int = 0) -> Address:
    """
    :param master: jetton minter (master) contract address
    :param owner: owner of the jetton wallet
    :param wallet_code: jetton wallet code cell
    :return: address of the owner's jetton wallet
    """
    data = JettonWalletData(owner=owner, master=master).serialize()
    return contract_address(workchain, wallet_code, data)


def build_mint_body(amount: int, recipient_wallet: typing.Union[Address, str]) -> Cell:
    return JettonMintBody(amount=amount, recipient=recipient_wallet).serialize()


def build_mint_payload(amount: int, recipient_wallet: typing.Union[Address, str]) -> bytes:
    """
    :return: bag of cells with mint message body, with crc32c like wallets send it
    """
    return build_mint_body(amount, recipient_wallet).to_boc(hash_crc32=True)


def build_mint_payload_base64(amount: int, recipient_wallet: typing.Union[Address, str]) -> str:
    return base64.b64encode(build_mint_payload(amount, recipient_wallet)).decode()


def build_mint_transaction(minter: typing.Union[Address, str], amount: int,
                           recipient_wallet: typing.Union[Address, str], value: str = '1500000') -> dict:
    """
    TonConnect transaction message: destination, nanoTON value and base64 payload
    """
    if isinstance(minter, Address):
        minter = minter.to_str()
    return {
        'to': minter,
        'value': value,
        'payload': build_mint_payload_base64(amount, recipient_wallet),
    }
