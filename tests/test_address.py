import pytest

from tonmint import Address, AddressError
from tonmint.crypto.crc import crc16, crc32c

ZERO_RAW = '0:' + '00' * 32
ZERO_FRIENDLY = 'EQAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAM9c'
FOUNDATION_FRIENDLY = 'EQCD39VS5jcptHL8vMjEXrzGaRcCVYto7HUn4bpAOg8xqB2N'
FOUNDATION_RAW = '0:83dfd552e63729b472fcbcc8c45ebcc6691702558b68ec7527e1ba403a0f31a8'


def test_crc():
    assert crc16(b'123456789') == b'\x31\xc3'
    assert crc32c(b'123456789') == (0xE3069283).to_bytes(4, 'little')


def test_zero_address():
    address = Address(ZERO_RAW)
    assert address.wc == 0
    assert address.hash_part == b'\x00' * 32
    assert address.to_str() == ZERO_FRIENDLY
    assert Address(ZERO_FRIENDLY) == address


def test_user_friendly():
    address = Address(FOUNDATION_FRIENDLY)
    assert address.is_bounceable
    assert not address.is_test_only
    assert address.to_str(is_user_friendly=False) == FOUNDATION_RAW
    assert address == Address(FOUNDATION_RAW)


def test_flags():
    address = Address((-1, bytes(range(32))))
    text = address.to_str(is_bounceable=False, is_test_only=True)
    parsed = Address(text)
    assert parsed == address
    assert parsed.wc == -1
    assert not parsed.is_bounceable
    assert parsed.is_test_only
    assert Address(address.to_str(is_url_safe=False)) == address


@pytest.mark.parametrize('text', [
    'abc',
    '0:zz',
    '0:' + '00' * 31,
    '300:' + '00' * 32,
    'EQAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAM9d',  # checksum
    'EQAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA!9c',
])
def test_invalid(text):
    with pytest.raises(AddressError):
        Address(text)


def test_invalid_tuple():
    with pytest.raises(AddressError):
        Address((0, b'\x00' * 31))
    with pytest.raises(AddressError):
        Address((128, b'\x00' * 32))
