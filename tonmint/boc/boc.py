import base64
import binascii
import typing

from bitarray import bitarray
from bitarray.util import ba2int

from .cell import Cell, CellError, CellTypes
from .utils import bytes_to_uint
from ..crypto.crc import crc32c


class BocError(BaseException):
    """
    bag of cells does not pass structural validation
    """


# https://github.com/ton-blockchain/ton/blob/24dc184a2ea67f9c47042b4104bbb4d82289fac1/crypto/tl/boc.tlb#L25
SERIALIZED_BOC_IDX_CRC32C = b'\xac\xc3\xa7('  # LEAN_BOC_MAGIC_PREFIX_CRC acc3a728
SERIALIZED_BOC_IDX_PREFIX = b'h\xffe\xf3'  # LEAN_BOC_MAGIC_PREFIX 68ff65f3
SERIALIZED_BOC_PREFIX = b'\xb5\xee\x9cr'  # REACH_BOC_MAGIC_PREFIX b5ee9c72


def topological_order(roots: typing.Sequence[Cell]) -> typing.Dict[Cell, int]:
    """
    :return: dict {<Cell>: <index>}, every cell goes before its refs, equal cells are stored once
    """
    visited = set()
    post_order = []
    stack = [(root, False) for root in roots]
    while stack:
        cell, expanded = stack.pop()
        if expanded:
            post_order.append(cell)
            continue
        if cell in visited:
            continue
        visited.add(cell)
        stack.append((cell, True))
        for ref in cell.refs:
            stack.append((ref, False))
    return {cell: i for i, cell in enumerate(reversed(post_order))}


class Boc:

    def __init__(self, data: typing.Union[bytes, bytearray, str]):
        if isinstance(data, bytearray):
            data = bytes(data)
        if not isinstance(data, (bytes, str)):
            raise BocError(f'unsupported boc data type: {type(data).__name__}')
        if isinstance(data, str):
            try:
                data = bytes.fromhex(data)
            except ValueError:
                try:
                    data = base64.b64decode(data, validate=True)
                except (binascii.Error, ValueError):
                    raise BocError('boc data in unknown form')
        self.data = data
        self.data_len = len(data)

    @staticmethod
    def serialize(roots: typing.Sequence[Cell], has_idx: bool = False, hash_crc32: bool = False) -> bytes:
        if not roots:
            raise BocError('at least one root cell is required')
        ordered_cells = topological_order(roots)  # {root_cell: 0, cell1: 1, cell2: 2 ...}

        cells_num = len(ordered_cells)

        cells_len = (cells_num.bit_length() + 7) // 8  # equals to math.ceil(math.log2(cells_num + 1) / 8)

        payload = b''
        serialized_cells_ends = []

        for cell in ordered_cells:
            payload += cell.serialize(ordered_cells, cells_len)
            serialized_cells_ends.append(len(payload))

        payload_len = max((len(payload).bit_length() + 7) // 8, 1)

        # flags = 0_0_0_00_000: has_idx 1bit, hash_crc32 1bit, has_cache_bits 1bit, flags 2bit, size_bytes 3 bit
        flags = has_idx * 128 + hash_crc32 * 64 + cells_len

        result = SERIALIZED_BOC_PREFIX + \
            flags.to_bytes(1, 'big') + \
            payload_len.to_bytes(1, 'big') + \
            cells_num.to_bytes(cells_len, 'big') + \
            len(roots).to_bytes(cells_len, 'big') + \
            (0).to_bytes(cells_len, 'big') + \
            len(payload).to_bytes(payload_len, 'big')

        for root in roots:
            result += ordered_cells[root].to_bytes(cells_len, 'big')

        if has_idx:
            for end in serialized_cells_ends:
                result += end.to_bytes(payload_len, 'big')
        result += payload
        if hash_crc32:
            result += crc32c(result)
        return result

    @staticmethod
    def deserialize_boc_header(data: bytes, strict: bool = True) -> dict:
        data_len = len(data)
        if data_len < 6:
            raise BocError(f'not enough bytes to deserialize boc header: {data.hex()}')
        result = {
            'has_idx': True,
            'hash_crc32': False,
            'has_cache_bits': False,
            'size_bytes': data[4],
            'offset_bytes': None,
            'cells_num': None,
            'roots_num': None,
            'absent_num': None,
            'tot_cells_size': None,
            'root_list': None,
            'index': None,
            'cells_data': None,
        }
        if data[:4] == SERIALIZED_BOC_PREFIX:
            flags_byte = data[4]
            result['has_idx'] = bool(flags_byte & 128)
            result['hash_crc32'] = bool(flags_byte & 64)
            result['has_cache_bits'] = bool(flags_byte & 32)
            result['size_bytes'] = flags_byte % 8
        elif data[:4] == SERIALIZED_BOC_IDX_PREFIX:
            result['hash_crc32'] = False
        elif data[:4] == SERIALIZED_BOC_IDX_CRC32C:
            result['hash_crc32'] = True
        else:
            raise BocError(f'unknown boc prefix: {data[:4].hex()}')

        size_bytes = result['size_bytes']
        offset_bytes = data[5]
        result['offset_bytes'] = offset_bytes
        if not 1 <= size_bytes <= 4:
            raise BocError(f'invalid size bytes: {size_bytes}')
        if not 1 <= offset_bytes <= 8:
            raise BocError(f'invalid offset bytes: {offset_bytes}')
        if data_len - 6 < 3 * size_bytes + offset_bytes:
            raise BocError('can\'t parse boc header: not enough bytes')

        end = 6 + 3 * size_bytes
        result['cells_num'], result['roots_num'], result['absent_num'] \
            = [bytes_to_uint(data[i: i + size_bytes]) for i in range(6, end, size_bytes)]

        if result['roots_num'] < 1 or result['roots_num'] > result['cells_num']:
            raise BocError(f'invalid roots number: {result["roots_num"]}')
        if result['absent_num']:
            raise BocError('absent cells are not supported')

        i = end + offset_bytes
        result['tot_cells_size'] = bytes_to_uint(data[end: i])

        if data_len - i < result['roots_num'] * size_bytes:
            raise BocError('not enough bytes for root cells indexes')
        end = i + result['roots_num'] * size_bytes
        result['root_list'] = [bytes_to_uint(data[j: j + size_bytes]) for j in range(i, end, size_bytes)]
        i = end
        if result['has_idx']:
            if data_len - i < offset_bytes * result['cells_num']:
                raise BocError('not enough bytes for index encoding')
            end = i + result['cells_num'] * offset_bytes
            result['index'] = [bytes_to_uint(data[j: j + offset_bytes]) for j in range(i, end, offset_bytes)]
            i = end

        if data_len - i < result['tot_cells_size']:
            raise BocError('not enough bytes for cells data')

        end = i + result['tot_cells_size']
        result['cells_data'] = data[i: end]
        i = end

        if result['hash_crc32']:
            if data_len - i < 4:
                raise BocError('not enough bytes for crc32c hashsum')
            if crc32c(data[: i]) != data[i: i + 4]:
                raise BocError('crc32c hashsum mismatch')
            i += 4
        if strict and data_len - i:  # != 0
            raise BocError('too many bytes in boc')
        return result

    @staticmethod
    def deserialize_cell(data: bytes, offset: int, ref_index_size: int) -> typing.Tuple[dict, int]:
        """
        :return: raw cell dict and offset of the next cell in data
        """
        if len(data) - offset < 2:
            raise BocError('not enough bytes to encode cell descriptors')
        refs_descriptor = data[offset]
        level = refs_descriptor >> 5
        total_refs = refs_descriptor & 7
        has_hashes = (refs_descriptor & 16) != 0
        is_exotic = (refs_descriptor & 8) != 0
        if total_refs == 7 and has_hashes:
            raise BocError('can\'t deserialize absent cell')
        if total_refs > 4:
            raise BocError(f'cell refs count is more than 4: {total_refs}')
        if level:
            raise BocError(f'cells with level {level} are not supported')
        bits_descriptor = data[offset + 1]
        is_augmented = bits_descriptor & 1
        data_size = (bits_descriptor >> 1) + is_augmented
        hashes_size = 32 if has_hashes else 0
        depth_size = 2 if has_hashes else 0
        i = offset + 2

        if len(data) - i < hashes_size + depth_size + data_size + ref_index_size * total_refs:
            raise BocError('not enough bytes to encode cell data')

        stored_hash = data[i: i + hashes_size] if has_hashes else None
        stored_depth = bytes_to_uint(data[i + hashes_size: i + hashes_size + depth_size]) if has_hashes else None
        i += hashes_size + depth_size
        bits = bitarray()
        bits.frombytes(data[i: i + data_size])
        i += data_size

        if is_augmented:
            # strip completion tag: trailing zeros and the single 1 bit
            end = None
            for j in range(len(bits) - 1, len(bits) - 9, -1):
                if bits[j]:
                    end = j
                    break
            if end is None:
                raise BocError('cell data has no completion tag')
            del bits[end:]

        if is_exotic:
            if len(bits) < 8:
                raise BocError('not enough bits for an exotic cell type')
            cell_type = ba2int(bits[:8], signed=True)
        else:
            cell_type = CellTypes.ordinary

        cell_refs_indexes = []
        for r in range(total_refs):
            cell_refs_indexes.append(bytes_to_uint(data[i: i + ref_index_size]))
            i += ref_index_size

        cell = {'bits': bits, 'refs': cell_refs_indexes, 'type': cell_type, 'hash': stored_hash, 'depth': stored_depth,
                'result': None}

        return cell, i

    def deserialize(self, strict: bool = True) -> typing.List[Cell]:
        """
        :param strict: fail if there are bytes left after the container
        :return: root cells
        """
        header = self.deserialize_boc_header(self.data, strict)
        cells_data = header['cells_data']
        cells_num = header['cells_num']
        cells_array = []

        i = 0
        for _ in range(cells_num):
            cell, i = self.deserialize_cell(cells_data, i, header['size_bytes'])
            cells_array.append(cell)
        if i != len(cells_data):
            raise BocError('cells data size mismatch')

        for ci in reversed(range(cells_num)):
            c = cells_array[ci]
            refs = []
            for r in c['refs']:
                if r >= cells_num:
                    raise BocError(f'cell {ci} refers to non-existent cell {r}')
                if r <= ci:
                    raise BocError('topological order is broken')
                refs.append(cells_array[r]['result'])
            try:
                c['result'] = Cell(c['bits'], refs, c['type'])
            except CellError as e:
                raise BocError(f'invalid cell {ci}: {e}') from e
            if c['hash'] is not None and (c['hash'] != c['result'].hash or c['depth'] != c['result'].depth):
                raise BocError(f'cell {ci} stored hash or depth does not match its content')

        root_cells = []
        for ri in header['root_list']:
            if ri >= cells_num:
                raise BocError(f'root index {ri} is out of cells table')
            root_cells.append(cells_array[ri]['result'])

        return root_cells
