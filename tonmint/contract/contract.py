import logging
import typing

from ..boc import Address, Boc, BocError, Cell
from ..tlb import StateInit


class ContractError(BaseException):
    pass


class CodeNotFoundError(ContractError):
    """
    no valid code cell can be obtained from the supplied bytes
    """


def contract_address(workchain: int, code: Cell, data: Cell) -> Address:
    """
    Address of a contract is the hash of its StateInit, so it is known before deploy.
    """
    state_init = StateInit(code=code, data=data)
    return Address((workchain, state_init.serialize().hash))


def load_code_cell(data: typing.Union[bytes, str]) -> Cell:
    """
    :param data: serialized bag of cells (bytes, hex or base64) with contract code as the first root
    :return: code cell
    """
    try:
        roots = Boc(data).deserialize()
    except BocError as e:
        raise CodeNotFoundError(f'code is not a valid bag of cells: {e}') from e
    if not roots:
        raise CodeNotFoundError('bag of cells has no root cells')
    return roots[0]


class WalletCodeCache:
    """
    Process-wide holder of a code cell. Written at most once per successful load and read-only afterwards.
    Concurrent loaders may both store a cell: cells are compared by hash, so the second write is a no-op.
    """

    def __init__(self):
        self._cell: typing.Optional[Cell] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def cell(self) -> typing.Optional[Cell]:
        return self._cell

    @property
    def is_loaded(self) -> bool:
        return self._cell is not None

    def get_or_load(self, loader: typing.Callable[[], Cell]) -> Cell:
        cell = self._cell
        if cell is not None:
            return cell
        return self.store(loader())

    def store(self, cell: Cell) -> Cell:
        current = self._cell
        if current is None:
            self._cell = cell
            self.logger.info(f'Wallet code cell loaded: {cell.hash.hex()}')
            return cell
        if current != cell:
            raise ContractError(f'code cell is already loaded with another hash: {current.hash.hex()}')
        self.logger.debug('Wallet code cell was loaded concurrently, keeping the first one')
        return current
