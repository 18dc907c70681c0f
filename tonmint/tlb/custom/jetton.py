import typing

from ..tlb import TlbScheme, TlbError
from ...boc import Address, Builder, Cell, Slice


class JettonWalletData(TlbScheme):
    """
    jetton_wallet_data#_ owner:MsgAddress master:MsgAddress = JettonWalletData;

    Field order is part of the wallet contract ABI: swapped fields still give a valid cell, but a wrong address.
    """
    def __init__(self, owner: Address, master: Address):
        self.owner = Address(owner)
        self.master = Address(master)

    def serialize(self) -> Cell:
        return Builder()\
            .store_address(self.owner)\
            .store_address(self.master)\
            .end_cell()

    @classmethod
    def deserialize(cls, cell_slice: Slice):
        owner = cell_slice.load_address()
        master = cell_slice.load_address()
        if owner is None or master is None:
            raise TlbError('owner/master must be addr_std')
        return cls(owner=owner, master=master)


class JettonMintBody(TlbScheme):
    """
    mint#00000023 amount:uint128 recipient:MsgAddress = JettonMintBody;
    """
    OP = 0x23

    def __init__(self, amount: int, recipient: typing.Union[Address, str]):
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TlbError(f'amount must be an integer, got {type(amount).__name__}')
        self.amount = amount
        self.recipient = Address(recipient)

    def serialize(self) -> Cell:
        return Builder()\
            .store_uint(self.OP, 32)\
            .store_uint(self.amount, 128)\
            .store_address(self.recipient)\
            .end_cell()

    @classmethod
    def deserialize(cls, cell_slice: Slice):
        op = cell_slice.load_uint(32)
        if op != cls.OP:
            raise TlbError(f'unexpected mint op: {hex(op)}')
        return cls(amount=cell_slice.load_uint(128), recipient=cell_slice.load_address())
