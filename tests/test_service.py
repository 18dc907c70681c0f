import base64
import json

import pytest

from tonmint import Address, Cell, CodeNotFoundError, ConfigError, MintRequestError, MintService, MinterConfig, \
    begin_cell, get_jetton_wallet_address
from tonmint.service import load_wallet_code, read_artifact

CODE = begin_cell().store_uint(0xC0DE, 16).store_ref(begin_cell().store_uint(1, 8).end_cell()).end_cell()
MINTER = Address('0:' + '22' * 32).to_str()
OWNER = Address('0:' + '11' * 32).to_str()


@pytest.fixture
def config():
    return MinterConfig(minter_address=MINTER)


@pytest.fixture
def service(config):
    return MintService(config, code_loader=lambda: CODE)


def test_config_from_env(tmp_path):
    config = MinterConfig.from_env({}, base_dir=str(tmp_path))
    assert config.minter_address is None
    assert config.max_mint_amount == 10 ** 18
    assert config.default_msg_value == '1500000'
    assert config.port == 3001
    assert config.wallet_code_candidates == [
        str(tmp_path / 'artifacts' / 'jetton_wallet.cell.boc'),
        str(tmp_path / 'build' / 'JettonWallet.json'),
    ]

    config = MinterConfig.from_env({'MINTER_ADDRESS': MINTER, 'WALLET_CODE_PATH': '/tmp/code.boc',
                                    'MAX_MINT_AMOUNT': '100', 'DEFAULT_MSG_VALUE': '2000000', 'PORT': '8080'})
    assert config.minter_address == MINTER
    assert config.wallet_code_candidates == ['/tmp/code.boc']
    assert config.max_mint_amount == 100
    assert config.default_msg_value == '2000000'
    assert config.port == 8080

    with pytest.raises(ConfigError):
        MinterConfig.from_env({'MAX_MINT_AMOUNT': 'a lot'})


def test_artifacts(tmp_path):
    boc_path = tmp_path / 'code.boc'
    boc_path.write_bytes(CODE.to_boc())
    assert load_wallet_code([str(boc_path)]) == CODE

    hex_path = tmp_path / 'hex.json'
    hex_path.write_text(json.dumps({'hash': CODE.hash.hex(), 'hex': CODE.to_boc().hex()}))
    assert load_wallet_code([str(hex_path)]) == CODE

    b64_path = tmp_path / 'b64.json'
    b64_path.write_text(json.dumps({'codeBoc': base64.b64encode(CODE.to_boc()).decode()}))
    assert read_artifact(str(b64_path)) == CODE.to_boc()

    ambiguous = tmp_path / 'ambiguous.json'
    ambiguous.write_text(json.dumps({'hex': CODE.to_boc().hex(), 'codeBoc': base64.b64encode(CODE.to_boc()).decode()}))
    with pytest.raises(CodeNotFoundError):
        load_wallet_code([str(ambiguous)])

    guessing = tmp_path / 'guessing.json'
    guessing.write_text(json.dumps({'code': base64.b64encode(CODE.to_boc()).decode()}))
    with pytest.raises(CodeNotFoundError):
        load_wallet_code([str(guessing)])

    with pytest.raises(CodeNotFoundError):
        load_wallet_code([str(tmp_path / 'missing.boc')])


def test_first_existing_artifact_wins(tmp_path):
    broken = tmp_path / 'broken.boc'
    broken.write_bytes(b'not a bag of cells')
    good = tmp_path / 'good.boc'
    good.write_bytes(CODE.to_boc())

    assert load_wallet_code([str(tmp_path / 'missing.boc'), str(good)]) == CODE
    with pytest.raises(CodeNotFoundError):
        load_wallet_code([str(broken), str(good)])


def test_build_mint(service):
    result = service.build_mint(OWNER, '1000')
    wallet = get_jetton_wallet_address(Address(MINTER), Address(OWNER), CODE)
    assert result['recipientWalletAddress'] == wallet.to_str()
    assert result['message'] == {'to': MINTER, 'value': '1500000', 'data': {'payload': result['payloadBase64']}}

    cs = Cell.one_from_boc(result['payloadBase64']).begin_parse()
    assert cs.load_uint(32) == 0x23
    assert cs.load_uint(128) == 1000
    assert cs.load_address() == wallet

    assert service.build_mint(OWNER, 1000) == result


def test_build_mint_loads_code_once(config):
    calls = []

    def loader():
        calls.append(1)
        return CODE

    service = MintService(config, code_loader=loader)
    assert not service.ping()['walletCodeLoaded']
    service.build_mint(OWNER, 1)
    service.build_mint(OWNER, 2)
    assert len(calls) == 1
    assert service.ping() == {'status': 'ok', 'walletCodeLoaded': True, 'minterAddressConfigured': True}


@pytest.mark.parametrize('owner, amount', [
    (None, 1),
    (OWNER, None),
    (OWNER, ''),
    (OWNER, 0),
    ('not an address', 1),
    (OWNER, '-5'),
    (OWNER, -5),
    (OWNER, '1.5'),
    (OWNER, 1.5),
    (OWNER, True),
    (OWNER, 10 ** 18 + 1),
])
def test_bad_requests(service, owner, amount):
    with pytest.raises(MintRequestError) as e:
        service.build_mint(owner, amount)
    assert e.value.status == 400
    assert e.value.to_dict() == {'error': e.value.message}


def test_amount_cap(config):
    config.max_mint_amount = 10
    service = MintService(config, code_loader=lambda: CODE)
    assert service.build_mint(OWNER, 10)
    with pytest.raises(MintRequestError):
        service.build_mint(OWNER, 11)


def test_misconfigured(tmp_path):
    service = MintService(MinterConfig(), code_loader=lambda: CODE)
    with pytest.raises(MintRequestError) as e:
        service.build_mint(OWNER, 1)
    assert e.value.status == 500
    assert service.ping()['minterAddressConfigured'] is False

    service = MintService(MinterConfig(minter_address='bad'), code_loader=lambda: CODE)
    with pytest.raises(MintRequestError) as e:
        service.build_mint(OWNER, 1)
    assert e.value.status == 500

    service = MintService(MinterConfig(minter_address=MINTER, base_dir=str(tmp_path)))
    assert service.try_load_code() is False
    with pytest.raises(MintRequestError) as e:
        service.build_mint(OWNER, 1)
    assert e.value.status == 500

    (tmp_path / 'artifacts').mkdir()
    (tmp_path / 'artifacts' / 'jetton_wallet.cell.boc').write_bytes(CODE.to_boc())
    assert service.build_mint(OWNER, 1)['recipientWalletAddress']
    assert service.try_load_code() is True


def test_zero_amount(service):
    with pytest.raises(MintRequestError) as e:
        service.build_mint(OWNER, 0)
    assert e.value.message.startswith('Missing required fields')
    assert service.build_mint(OWNER, '0')['payloadBase64']
