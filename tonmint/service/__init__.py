from .config import ConfigError, MinterConfig
from .artifacts import read_artifact, find_artifact, load_wallet_code
from .minter import MintRequestError, MintService
