import typing

from bitarray import bitarray
from bitarray.util import ba2int

from .address import Address
from .cell import Cell, CellError, CellTypes, CellUnderflowError


class Slice:
    """
    Reader over cell bits and refs. Cell stays untouched, slice keeps its own copy of bits.
    """

    def __init__(self, bits: bitarray, refs: typing.Sequence[Cell], type_: int = CellTypes.ordinary):
        self.bits = bitarray(bits)
        self.refs = list(refs)
        self.type_ = type_
        self.ref_offset = 0

    @property
    def remaining_bits(self) -> int:
        return len(self.bits)

    @property
    def remaining_refs(self) -> int:
        return len(self.refs) - self.ref_offset

    def _check_bits(self, length: int) -> None:
        if length < 0 or len(self.bits) < length:
            raise CellUnderflowError(f'bitstring underflow: {length} bits requested, {len(self.bits)} left')

    def _check_refs(self) -> None:
        if self.ref_offset >= len(self.refs):
            raise CellUnderflowError('refs underflow')

    def preload_bit(self) -> int:
        self._check_bits(1)
        return self.bits[0]

    def load_bit(self) -> int:
        bit = self.preload_bit()
        del self.bits[0]
        return bit

    def load_bool(self) -> bool:
        return bool(self.load_bit())

    def skip_bits(self, length: int) -> "Slice":
        self._check_bits(length)
        del self.bits[:length]
        return self

    def preload_bits(self, length: int) -> bitarray:
        self._check_bits(length)
        return self.bits[:length]

    def load_bits(self, length: int) -> bitarray:
        bits = self.preload_bits(length)
        del self.bits[:length]
        return bits

    def preload_uint(self, length: int) -> int:
        if length == 0:
            return 0
        return ba2int(self.preload_bits(length), signed=False)

    def load_uint(self, length: int) -> int:
        uint = self.preload_uint(length)
        del self.bits[:length]
        return uint

    def preload_int(self, length: int) -> int:
        if length == 0:
            return 0
        return ba2int(self.preload_bits(length), signed=True)

    def load_int(self, length: int) -> int:
        integer = self.preload_int(length)
        del self.bits[:length]
        return integer

    def preload_bytes(self, length: int) -> bytes:
        return self.preload_bits(length * 8).tobytes()

    def load_bytes(self, length: int) -> bytes:
        bytes_ = self.preload_bytes(length)
        del self.bits[:length * 8]
        return bytes_

    def load_address(self) -> typing.Optional[Address]:
        # address := flags 2bits, anycast 1bit, workchain 8bits, hash_part 256bits = 267 bits
        tag = self.load_uint(2)
        if tag == 0:
            return None
        if tag != 2:
            raise CellError(f'only addr_std is supported, got tag {tag:02b}')
        if self.load_bit():
            raise CellError('anycast addresses are not supported')
        wc = self.load_int(8)
        hash_part = self.load_bytes(32)
        return Address((wc, hash_part))

    def load_var_uint(self, bit_length: int) -> int:
        length = self.load_uint(bit_length)
        return self.load_uint(length * 8)

    def load_coins(self) -> int:
        return self.load_var_uint(4)

    def preload_ref(self) -> Cell:
        self._check_refs()
        return self.refs[self.ref_offset]

    def load_ref(self) -> Cell:
        ref = self.preload_ref()
        self.ref_offset += 1
        return ref

    def load_maybe_ref(self) -> typing.Optional[Cell]:
        if self.load_bit():
            return self.load_ref()
        return None

    def __repr__(self) -> str:
        return f'<Slice {len(self.bits)}[{self.bits.tobytes().hex().upper()}] -> {self.remaining_refs} refs>'
