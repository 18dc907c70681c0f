import hashlib
import typing

from bitarray import bitarray, frozenbitarray
from bitarray.util import ba2int


class CellError(BaseException):
    pass


class CellRangeError(CellError):
    """
    value does not fit into the requested bit width or cell limits are exceeded
    """


class CellUnderflowError(CellError):
    pass


class CellTypes:
    ordinary = -1
    library_ref = 2


MAX_BITS = 1023
MAX_REFS = 4
MAX_DEPTH = 1024


class Cell:
    """
    Cell is immutable type: up to 1023 bits and up to 4 refs to other cells.
    If you want to read from cell use .begin_parse() method.
    If you want to write a new cell use begin_cell().

    Hash and depth are calculated once, in the constructor, so refs must be built before parents.
    Only level 0 cells are supported (ordinary and library cells).
    """

    def __init__(self, bits: bitarray, refs: typing.List["Cell"], cell_type: int = CellTypes.ordinary) -> None:
        if len(bits) > MAX_BITS:
            raise CellRangeError(f'cell bits overflow: {len(bits)} > {MAX_BITS}')
        if len(refs) > MAX_REFS:
            raise CellRangeError(f'cell refs overflow: {len(refs)} > {MAX_REFS}')
        if cell_type not in (CellTypes.ordinary, CellTypes.library_ref):
            raise CellError(f'unsupported cell type: {cell_type}')

        self.bits: frozenbitarray = frozenbitarray(bits)
        self.refs: typing.Tuple["Cell", ...] = tuple(refs)
        self.type_: int = cell_type
        self.is_exotic: bool = cell_type != CellTypes.ordinary

        if self.is_exotic and (len(self.bits) < 8 or ba2int(self.bits[:8], signed=True) != cell_type):
            raise CellError('exotic cell must start with its 8-bit type')

        self._depth: int = 0
        if self.refs:
            self._depth = max(r.depth for r in self.refs) + 1
            if self._depth >= MAX_DEPTH:
                raise CellRangeError('depth is more than max depth')

        self._descriptors: bytes = self.get_descriptors()
        self._data_bytes: bytes = self.get_data_bytes()
        self._hash: bytes = self.calculate_hash()

    @classmethod
    def empty(cls) -> "Cell":
        return cls(bitarray(), [])

    def get_refs_descriptor(self) -> bytes:
        # d1 = r + 8s + 32l, level is always 0 here
        d1 = len(self.refs) + 8 * self.is_exotic
        return d1.to_bytes(1, 'big')

    def get_bits_descriptor(self) -> bytes:
        # d2 = ceil(b/8) + floor(b/8)
        bit_len = len(self.bits)
        d2 = (bit_len // 8) * 2
        d2 += 1 if bit_len % 8 else 0
        return d2.to_bytes(1, 'big')

    def get_descriptors(self) -> bytes:
        return self.get_refs_descriptor() + self.get_bits_descriptor()

    def get_data_bytes(self) -> bytes:
        result = bitarray(self.bits)
        if len(result) % 8:
            # completion tag: single 1 bit, then zeros up to the byte boundary
            result.append(1)
            result.fill()
        return result.tobytes()

    def get_representation(self) -> bytes:
        # CellRepr(c) = d1d2 + data + depth(r_i) for all i + hash(r_i) for all i
        result = self._descriptors + self._data_bytes
        depths = b''
        hashes = b''
        for ref in self.refs:
            depths += ref.depth.to_bytes(2, 'big')
            hashes += ref.hash
        return result + depths + hashes

    def calculate_hash(self) -> bytes:
        # Hash_repr(c) := sha256(CellRepr(c))
        return hashlib.sha256(self.get_representation()).digest()

    @property
    def hash(self) -> bytes:
        return self._hash

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def data(self) -> bytes:
        return self._data_bytes

    @property
    def descriptors(self) -> bytes:
        return self._descriptors

    def serialize(self, indexes: typing.Dict["Cell", int], byte_len: int) -> bytes:
        """
        cell representation inside a bag of cells: descriptors, data and indexes of refs
        """
        result = self._descriptors + self._data_bytes
        for ref in self.refs:
            result += indexes[ref].to_bytes(byte_len, 'big')
        return result

    def to_boc(self, has_idx: bool = False, hash_crc32: bool = False) -> bytes:
        from .boc import Boc
        return Boc.serialize([self], has_idx=has_idx, hash_crc32=hash_crc32)

    @classmethod
    def from_boc(cls, data: typing.Union[bytes, str], strict: bool = True) -> typing.List["Cell"]:
        from .boc import Boc
        return Boc(data).deserialize(strict=strict)

    @classmethod
    def one_from_boc(cls, data: typing.Union[bytes, str]) -> "Cell":
        cells = cls.from_boc(data)
        if len(cells) != 1:
            raise CellError('expected one root cell')
        return cells[0]

    def begin_parse(self):
        from .slice import Slice
        return Slice(self.bits, self.refs, self.type_)

    def __hash__(self) -> int:  # for dicts
        return int.from_bytes(self._hash, 'big')

    def __getitem__(self, ref_i: int) -> "Cell":
        """
        my_cell: Cell
        new_cell = begin_cell().store_ref(my_cell).end_cell()
        assert new_cell[0] == my_cell
        """
        return self.refs[ref_i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self._hash == other.hash

    def __repr__(self) -> str:
        return f'<Cell {len(self.bits)}[{self.bits.tobytes().hex().upper()}] -> {len(self.refs)} refs>'
