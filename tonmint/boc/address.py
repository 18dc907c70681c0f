import base64
import binascii
import typing

from ..crypto.crc import crc16


class AddressError(BaseException):
    """
    address text (or tuple) does not describe a valid workchain + hash pair
    """


class Address:

    def __init__(self, address: typing.Union[str, tuple, "Address"]):
        """
        Address('0:83dfd552e63729b472fcbcc8c45ebcc6691702558b68ec7527e1ba403a0f31a8')
        Address('EQCD39VS5jcptHL8vMjEXrzGaRcCVYto7HUn4bpAOg8xqB2N')
        Address((0, b'\x83\xdf...'))
        """
        self.wc: int = None
        self.hash_part: bytes = None
        self.is_bounceable = False
        self.is_test_only = False

        if isinstance(address, tuple):
            if len(address) != 2:
                raise AddressError('expected (workchain, hash_part) tuple')
            self._set(*address)
            return
        if isinstance(address, self.__class__):
            self.wc = address.wc
            self.hash_part = address.hash_part
            self.is_bounceable = address.is_bounceable
            self.is_test_only = address.is_test_only
            return
        if not isinstance(address, str):
            raise AddressError(f'unknown address type provided: {type(address)}')
        if ':' in address:
            self._parse_raw(address)
            return
        self._parse_user_friendly(address)

    def _set(self, wc: int, hash_part: bytes) -> None:
        if not isinstance(wc, int) or not -128 <= wc <= 127:
            raise AddressError(f'workchain must be a signed 8-bit integer, got {wc}')
        if not isinstance(hash_part, bytes) or len(hash_part) != 32:
            raise AddressError('expected 32 bytes address hash part')
        self.wc = wc
        self.hash_part = hash_part

    def _parse_raw(self, addr: str) -> None:
        try:
            wc, hash_part = addr.split(':')
            wc = int(wc)
            if len(hash_part) != 64:
                raise ValueError('hash part must be 64 hex symbols')
            hash_part = bytes.fromhex(hash_part)
        except ValueError as e:
            raise AddressError(f'invalid raw address {addr!r}: {e}') from e
        self._set(wc, hash_part)

    def _parse_user_friendly(self, addr: str) -> None:
        if len(addr) != 48:
            raise AddressError(f'user-friendly address must be 48 symbols long, got {len(addr)}')
        try:
            if '-' in addr or '_' in addr:
                decoded = base64.urlsafe_b64decode(addr)
            else:
                decoded = base64.b64decode(addr, validate=True)
        except (binascii.Error, ValueError) as e:
            raise AddressError(f'invalid base64 address {addr!r}') from e
        if len(decoded) != 36:
            raise AddressError(f'invalid base64 address {addr!r}')
        if decoded[34:] != crc16(decoded[:34]):
            raise AddressError('the address checksum is invalid')
        tag = decoded[0]
        if tag & 0x80:  # test flag
            self.is_test_only = True
            tag ^= 0x80
        if tag == 0x11:  # bounceable
            self.is_bounceable = True
        elif tag != 0x51:  # non-bounceable
            raise AddressError(f'unknown address tag: {tag}')
        self._set(int.from_bytes(decoded[1:2], 'big', signed=True), decoded[2:34])

    def to_str(self, is_user_friendly=True, is_url_safe=True, is_bounceable=True, is_test_only=False) -> str:
        if not is_user_friendly:
            return f'{self.wc}:{self.hash_part.hex()}'

        tag = 0x11  # bounceable tag

        if not is_bounceable:
            tag = 0x51
        if is_test_only:
            tag |= 0x80

        result = tag.to_bytes(1, 'big') + self.wc.to_bytes(1, 'big', signed=True) + self.hash_part

        result += crc16(result)

        if is_url_safe:
            result = base64.urlsafe_b64encode(result).decode()
        else:
            result = base64.b64encode(result).decode()

        return result

    def __eq__(self, other) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self.wc == other.wc and self.hash_part == other.hash_part

    def __hash__(self) -> int:
        return hash((self.wc, self.hash_part))

    def __str__(self):
        return self.to_str()

    def __repr__(self):
        return f'Address<{self.to_str()}>'
