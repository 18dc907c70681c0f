import math
import typing

from bitarray import bitarray
from bitarray.util import int2ba

from .address import Address
from .cell import Cell, CellRangeError, CellTypes


class Builder:
    """
    Accumulates bits and refs of a future cell.
    Limits (1023 bits, 4 refs) are checked by .end_cell(), values are checked on every store.
    """

    def __init__(self, type_: int = CellTypes.ordinary):
        self._bits = bitarray()
        self._refs: typing.List[Cell] = []
        self._type = type_

    @property
    def bits(self) -> bitarray:
        return self._bits

    @property
    def refs(self) -> typing.List[Cell]:
        return self._refs

    def store_cell(self, cell: Cell):
        self._bits.extend(cell.bits)
        self._refs.extend(cell.refs)
        return self

    def store_ref(self, ref: Cell):
        self._refs.append(ref)
        return self

    def store_maybe_ref(self, ref: typing.Optional[Cell]):
        if ref is None:
            self.store_bit(0)
        else:
            self.store_bit(1)
            self.store_ref(ref)
        return self

    def store_bool(self, value: bool):
        self._bits.append(bool(value))
        return self

    def store_bit(self, bit: typing.Union[int, bool, str]):
        if isinstance(bit, str):
            bit = int(bit)
        if bit not in (0, 1):
            raise CellRangeError(f'bit must be 0 or 1, got {bit}')
        self._bits.append(bit)
        return self

    def store_bits(self, bits: typing.Union[str, typing.Iterable[int], bitarray]):
        self._bits.extend(bits)
        return self

    def store_uint(self, value: int, size: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise CellRangeError(f'integer expected, got {type(value).__name__}')
        if size < 0:
            raise CellRangeError(f'negative bit width: {size}')
        if value < 0 or value.bit_length() > size:
            raise CellRangeError(f'{value} does not fit into uint{size}')
        if size:
            self._bits.extend(int2ba(value, size, endian='big', signed=False))
        return self

    def store_int(self, value: int, size: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise CellRangeError(f'integer expected, got {type(value).__name__}')
        if size < 1:
            if value != 0 or size < 0:
                raise CellRangeError(f'{value} does not fit into int{size}')
            return self
        if not -(1 << (size - 1)) <= value < (1 << (size - 1)):
            raise CellRangeError(f'{value} does not fit into int{size}')
        self._bits.extend(int2ba(value, size, endian='big', signed=True))
        return self

    def store_var_uint(self, value: int, bit_length: int):
        if value == 0:
            return self.store_uint(0, bit_length)
        byte_length = math.ceil(value.bit_length() / 8)
        return self.store_uint(byte_length, bit_length).store_uint(value, byte_length * 8)

    def store_coins(self, amount: int):
        # VarUInteger 16
        return self.store_var_uint(amount, 4)

    def store_bytes(self, value: typing.Union[bytes, bytearray]):
        self._bits.frombytes(bytes(value))
        return self

    def store_address(self, address: typing.Union[Address, str, None]):
        if address is None:
            self.store_bits('00')  # addr_none$00
            return self
        if not isinstance(address, Address):
            address = Address(address)

        self.store_bits('100')  # addr_std$10 + maybe anycast = 0

        return self.store_int(address.wc, 8).store_bytes(address.hash_part)

    def end_cell(self) -> Cell:
        return Cell(self._bits, self._refs, self._type)

    def __repr__(self) -> str:
        return f'<Builder {len(self._bits)}[{self._bits.tobytes().hex().upper()}] -> {len(self._refs)} refs>'


def begin_cell() -> Builder:
    return Builder()
