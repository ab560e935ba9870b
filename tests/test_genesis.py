import json
import os
import stat
from datetime import datetime, timezone

import pytest

from errors import DecodeError, EncodeError, FileReadError
from genesis import GenesisAccount, load_genesis_template, merge_genesis, write_genesis
from helpers import new_coins

GENESIS_TIME = datetime(2019, 3, 13, 23, tzinfo=timezone.utc)


@pytest.fixture
def accounts(addresses):
    return [
        GenesisAccount(addresses[0], new_coins('10.00')),
        GenesisAccount(addresses[1], new_coins('3.00'), original_vesting=new_coins('3.00'), end_time=1584140400),
    ]


def test_account_amino_json(accounts, addresses):
    plain, vesting = [account.to_json_object() for account in accounts]

    assert plain == {
        'address': addresses[0],
        'coins': [{'denom': 'uatom', 'amount': '10000000'}],
        'sequence_number': '0',
        'account_number': '0',
        'original_vesting': None,
        'delegated_free': None,
        'delegated_vesting': None,
        'start_time': '0',
        'end_time': '0',
    }
    assert vesting['original_vesting'] == [{'denom': 'uatom', 'amount': '3000000'}]
    assert vesting['end_time'] == '1584140400'


def test_merge_replaces_only_time_and_accounts(genesis_template, accounts):
    original = json.dumps(genesis_template)

    genesis = merge_genesis(genesis_template, GENESIS_TIME, accounts)

    assert json.dumps(genesis_template) == original
    assert genesis['genesis_time'] == '2019-03-13T23:00:00Z'
    assert genesis['app_state']['accounts'] == [account.to_json_object() for account in accounts]
    assert list(genesis.keys()) == list(genesis_template.keys())
    assert list(genesis['app_state'].keys()) == list(genesis_template['app_state'].keys())
    for field in ('chain_id', 'consensus_params', 'validators', 'app_hash'):
        assert genesis[field] == genesis_template[field]
    for field in ('auth', 'staking', 'gentxs'):
        assert genesis['app_state'][field] == genesis_template['app_state'][field]


def test_load_template_keeps_order(write_json, genesis_template):
    template = load_genesis_template(write_json('params/genesis_template.json', genesis_template))

    assert template == genesis_template
    assert list(template.keys()) == list(genesis_template.keys())


@pytest.mark.parametrize('template', [[], {'chain_id': 'x'}, {'app_state': 'opaque'}, {'app_state': {'auth': {}}}])
def test_load_template_requires_accounts(write_json, template):
    with pytest.raises(DecodeError):
        load_genesis_template(write_json('genesis_template.json', template))


def test_load_missing_template(tmp_path):
    with pytest.raises(FileReadError):
        load_genesis_template(str(tmp_path / 'missing.json'))


def test_write_genesis(tmp_path, genesis_template, accounts):
    output_path = str(tmp_path / 'out' / 'genesis.json')
    genesis = merge_genesis(genesis_template, GENESIS_TIME, accounts)

    write_genesis(genesis, output_path)

    with open(output_path) as genesis_file:
        contents = genesis_file.read()
    assert contents == json.dumps(genesis, indent=2) + '\n'
    assert stat.S_IMODE(os.stat(output_path).st_mode) == 0o600
    assert os.listdir(tmp_path / 'out') == ['genesis.json']


def test_failed_write_keeps_previous_file(tmp_path, genesis_template):
    output_path = tmp_path / 'genesis.json'
    output_path.write_text('{"previous": true}\n')
    genesis_template['app_state']['accounts'] = {'not', 'serializable'}

    with pytest.raises(EncodeError):
        write_genesis(genesis_template, str(output_path))

    assert output_path.read_text() == '{"previous": true}\n'
    assert os.listdir(tmp_path) == ['genesis.json']


def test_write_genesis_is_utf8(tmp_path, genesis_template, accounts):
    output_path = tmp_path / 'genesis.json'
    genesis_template['chain_id'] = 'cosmoshub-ñ'

    write_genesis(merge_genesis(genesis_template, GENESIS_TIME, accounts), str(output_path))

    assert '"chain_id": "cosmoshub-ñ"' in output_path.read_bytes().decode('utf-8')
