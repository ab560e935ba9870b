import json
from collections import OrderedDict

import ecdsa
import pytest

from helpers import encode_address, encode_public_key, derive_multisig_address


@pytest.fixture
def addresses():
    """Eight distinct canonical addresses."""
    return [encode_address(bytes([i]) * 20) for i in range(1, 9)]


@pytest.fixture
def signer_keys():
    return [ecdsa.SigningKey.from_secret_exponent(i, curve=ecdsa.SECP256k1).get_verifying_key().to_string('compressed')
            for i in range(1, 4)]


@pytest.fixture
def multisig_object(signer_keys):
    def build(amount=1.00, threshold=2, address=None):
        return {
            'addr': address or derive_multisig_address(threshold, signer_keys),
            'threshold': threshold,
            'pubs': [encode_public_key(key) for key in signer_keys],
            'amount': amount,
        }
    return build


@pytest.fixture
def write_json(tmp_path):
    def write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return str(path)
    return write


@pytest.fixture
def genesis_template():
    return OrderedDict([
        ('genesis_time', '2019-01-01T00:00:00Z'),
        ('chain_id', 'cosmoshub-1'),
        ('consensus_params', {
            'block_size': {'max_bytes': '200000', 'max_gas': '2000000'},
            'evidence': {'max_age': '1000000'},
            'validator': {'pub_key_types': ['ed25519']},
        }),
        ('validators', None),
        ('app_hash', ''),
        ('app_state', OrderedDict([
            ('accounts', None),
            ('auth', {'collected_fees': None, 'params': {'max_memo_characters': '512'}}),
            ('staking', {'params': {'unbonding_time': '1814400000000000', 'max_validators': 100,
                                    'bond_denom': 'uatom'}}),
            ('gentxs', None),
        ])),
    ])
