import base64

import pytest

from tonmint import Address, Cell, CellRangeError, JettonMintBody, TlbError, begin_cell, build_mint_payload, \
    build_mint_payload_base64, build_mint_transaction
from tonmint.crypto.crc import crc32c

RECIPIENT_WALLET = Address('0:' + 'ab' * 32)
MINTER = Address('-1:' + 'cd' * 32)


def test_payload_layout():
    root = Cell.one_from_boc(build_mint_payload(1000, RECIPIENT_WALLET))
    assert len(root.bits) == 32 + 128 + 267
    assert len(root.refs) == 0
    cs = root.begin_parse()
    assert cs.load_uint(32) == 0x23
    assert cs.load_uint(128) == 1000
    assert cs.load_address() == RECIPIENT_WALLET
    assert cs.remaining_bits == 0


def test_payload_base64():
    payload = build_mint_payload_base64(1000, RECIPIENT_WALLET)
    assert base64.b64decode(payload) == build_mint_payload(1000, RECIPIENT_WALLET)
    body = JettonMintBody.deserialize(Cell.one_from_boc(payload).begin_parse())
    assert body.amount == 1000
    assert body.recipient == RECIPIENT_WALLET


def test_amount_bounds():
    assert Cell.one_from_boc(build_mint_payload(2 ** 128 - 1, RECIPIENT_WALLET)).begin_parse()\
        .skip_bits(32).load_uint(128) == 2 ** 128 - 1
    with pytest.raises(CellRangeError):
        build_mint_payload(2 ** 128, RECIPIENT_WALLET)
    with pytest.raises(CellRangeError):
        build_mint_payload(-1, RECIPIENT_WALLET)
    with pytest.raises(TlbError):
        build_mint_payload(1.5, RECIPIENT_WALLET)


def test_wrong_op():
    cell = begin_cell().store_uint(0x24, 32).store_uint(1, 128).store_address(RECIPIENT_WALLET).end_cell()
    with pytest.raises(TlbError):
        JettonMintBody.deserialize(cell.begin_parse())


def test_transaction():
    tx = build_mint_transaction(MINTER, 5, RECIPIENT_WALLET)
    assert tx == {
        'to': MINTER.to_str(),
        'value': '1500000',
        'payload': build_mint_payload_base64(5, RECIPIENT_WALLET),
    }
    assert build_mint_transaction('EQ-minter', 5, RECIPIENT_WALLET, value='10')['to'] == 'EQ-minter'


MINT_1000_BOC_HEX = 'b5ee9c72' '41' '01' '01' '01' '00' '38' '00' \
    '006b' '00000023' '000000000000000000000000000003e8' '8015' + '75' * 31 + '70'


def test_payload_bytes():
    payload = build_mint_payload_base64(1000, RECIPIENT_WALLET)
    assert payload.startswith('te6cckEB')
    boc = base64.b64decode(payload)
    assert boc[4] == 0x41  # crc32c flag, size_bytes = 1
    assert boc[:-4] == bytes.fromhex(MINT_1000_BOC_HEX)
    assert boc[-4:] == crc32c(boc[:-4])
