import logging
import typing

from .artifacts import load_wallet_code
from .config import MinterConfig
from ..boc import Address, AddressError, Cell, CellError
from ..contract import CodeNotFoundError, WalletCodeCache, build_mint_payload_base64, get_jetton_wallet_address
from ..tlb import TlbError


class MintRequestError(BaseException):
    """
    :param status: HTTP-like status: 400 - bad request, 500 - server is not ready
    """
    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status = status

    def to_dict(self) -> dict:
        return {'error': self.message}


class MintService:
    """
    Builds jetton mint payloads. Does not sign or send anything: result is a message skeleton for a wallet.
    """

    def __init__(self, config: MinterConfig, code_cache: typing.Optional[WalletCodeCache] = None,
                 code_loader: typing.Optional[typing.Callable[[], Cell]] = None):
        self.config = config
        self.code_cache = code_cache if code_cache is not None else WalletCodeCache()
        self.code_loader = code_loader if code_loader is not None else self._load_code
        self.logger = logging.getLogger(self.__class__.__name__)

    def _load_code(self) -> Cell:
        return load_wallet_code(self.config.wallet_code_candidates)

    def try_load_code(self) -> bool:
        """
        eager load on startup, failure is not fatal: code will be loaded on the first request
        """
        try:
            self.code_cache.get_or_load(self.code_loader)
        except CodeNotFoundError as e:
            self.logger.warning(f'Wallet code cell not loaded at startup: {e}')
            return False
        return True

    def get_wallet_code(self) -> Cell:
        try:
            return self.code_cache.get_or_load(self.code_loader)
        except CodeNotFoundError as e:
            self.logger.warning(f'Wallet code cell is not available: {e}')
            raise MintRequestError(f'Wallet code cell not available on server: {e}', status=500) from e

    @staticmethod
    def parse_amount(amount: typing.Union[int, str]) -> int:
        if isinstance(amount, bool) or not isinstance(amount, (int, str)):
            raise MintRequestError('Invalid amount; provide positive integer string or number')
        if isinstance(amount, str):
            amount = amount.strip()
            if not amount.isdecimal():
                raise MintRequestError('Invalid amount; provide positive integer string or number')
            amount = int(amount)
        if amount < 0:
            raise MintRequestError('Invalid amount; provide positive integer string or number')
        return amount

    def build_mint(self, recipient_owner: typing.Optional[str], amount: typing.Union[int, str, None]) -> dict:
        """
        :param recipient_owner: owner address of jetton wallet that receives minted jettons
        :param amount: jetton amount in minimal units
        :return: {payloadBase64, recipientWalletAddress, message}
        """
        if not self.config.minter_address:
            raise MintRequestError('Server misconfigured: MINTER_ADDRESS env var is not set', status=500)
        if not recipient_owner or amount is None or amount == '' or (amount == 0 and not isinstance(amount, str)):
            raise MintRequestError('Missing required fields: recipientOwner, amount')

        wallet_code = self.get_wallet_code()

        try:
            owner = Address(recipient_owner)
        except AddressError as e:
            raise MintRequestError('Invalid recipientOwner address format') from e

        amount = self.parse_amount(amount)
        if amount > self.config.max_mint_amount:
            raise MintRequestError(f'Amount exceeds server cap ({self.config.max_mint_amount})')

        try:
            master = Address(self.config.minter_address)
        except AddressError as e:
            raise MintRequestError('Server misconfigured: MINTER_ADDRESS is not a valid address', status=500) from e

        recipient_wallet = get_jetton_wallet_address(master, owner, wallet_code)
        try:
            payload = build_mint_payload_base64(amount, recipient_wallet)
        except (CellError, TlbError) as e:
            raise MintRequestError(f'Can not build mint payload: {e}') from e

        self.logger.debug(f'Built mint payload for {recipient_wallet.to_str()}, amount {amount}')

        return {
            'payloadBase64': payload,
            'recipientWalletAddress': recipient_wallet.to_str(),
            'message': {
                'to': self.config.minter_address,
                'value': self.config.default_msg_value,
                'data': {'payload': payload},
            },
        }

    def ping(self) -> dict:
        return {
            'status': 'ok',
            'walletCodeLoaded': self.code_cache.is_loaded,
            'minterAddressConfigured': bool(self.config.minter_address),
        }
