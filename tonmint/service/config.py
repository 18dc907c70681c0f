import os
import typing


class ConfigError(BaseException):
    pass


DEFAULT_WALLET_CODE_PATHS = (
    os.path.join('artifacts', 'jetton_wallet.cell.boc'),
    os.path.join('build', 'JettonWallet.json'),
)


class MinterConfig:

    def __init__(self,
                 minter_address: typing.Optional[str] = None,
                 wallet_code_path: typing.Optional[str] = None,
                 max_mint_amount: int = 10 ** 18,
                 default_msg_value: str = '1500000',  # nanoTON sent with the mint message
                 port: int = 3001,
                 base_dir: typing.Optional[str] = None,
                 ):
        self.minter_address = minter_address
        self.wallet_code_path = wallet_code_path
        self.max_mint_amount = max_mint_amount
        self.default_msg_value = default_msg_value
        self.port = port
        self.base_dir = base_dir if base_dir is not None else os.getcwd()

    @property
    def wallet_code_candidates(self) -> typing.List[str]:
        """
        explicit WALLET_CODE_PATH wins, otherwise default artifact locations in order
        """
        if self.wallet_code_path:
            return [self.wallet_code_path]
        return [os.path.join(self.base_dir, p) for p in DEFAULT_WALLET_CODE_PATHS]

    @classmethod
    def from_env(cls, environ: typing.Optional[typing.Mapping[str, str]] = None, **kwargs) -> "MinterConfig":
        if environ is None:
            environ = os.environ
        try:
            max_mint_amount = int(environ.get('MAX_MINT_AMOUNT', 10 ** 18))
            port = int(environ.get('PORT', 3001))
        except ValueError as e:
            raise ConfigError(f'invalid numeric setting: {e}') from e
        if max_mint_amount < 0:
            raise ConfigError('MAX_MINT_AMOUNT must not be negative')
        return cls(
            minter_address=environ.get('MINTER_ADDRESS') or None,
            wallet_code_path=environ.get('WALLET_CODE_PATH') or None,
            max_mint_amount=max_mint_amount,
            default_msg_value=environ.get('DEFAULT_MSG_VALUE', '1500000'),
            port=port,
            **kwargs
        )

    def __repr__(self):
        return f'<MinterConfig {self.__dict__}>'
