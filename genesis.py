import copy
import json
import os
import tempfile
from collections import OrderedDict
from datetime import datetime

from helpers import coins_amount, format_time, mkdirp, load_json_file
from errors import DecodeError, EncodeError, WriteError

FIELD_GENESIS_TIME = 'genesis_time'
FIELD_APP_STATE = 'app_state'
FIELD_ACCOUNTS = 'accounts'

GENESIS_FILE_MODE = 0o600


class GenesisAccount:
    def __init__(self, address, coins, original_vesting=None, start_time=0, end_time=0):
        self.address = address
        self.coins = coins
        self.sequence_number = 0
        self.account_number = 0
        # Vesting accounts have their whole initial balance as original vesting
        self.original_vesting = original_vesting
        self.delegated_free = None
        self.delegated_vesting = None
        self.start_time = start_time
        self.end_time = end_time

    @property
    def amount(self) -> int:
        return coins_amount(self.coins)

    @property
    def original_vesting_amount(self) -> int:
        return coins_amount(self.original_vesting)

    def is_vesting(self) -> bool:
        return bool(self.original_vesting) and self.end_time != 0

    def to_json_object(self) -> OrderedDict:
        """Amino JSON representation, where 64-bit integers are strings and empty coin lists are null."""
        return OrderedDict([
            ('address', self.address),
            ('coins', amino_coins(self.coins)),
            ('sequence_number', str(self.sequence_number)),
            ('account_number', str(self.account_number)),
            ('original_vesting', amino_coins(self.original_vesting)),
            ('delegated_free', amino_coins(self.delegated_free)),
            ('delegated_vesting', amino_coins(self.delegated_vesting)),
            ('start_time', str(self.start_time)),
            ('end_time', str(self.end_time)),
        ])

    def __repr__(self):
        return f'GenesisAccount({self.address}, {self.amount}, start={self.start_time}, end={self.end_time})'


def amino_coins(coins):
    if not coins:
        return None

    return [OrderedDict([('denom', coin['denom']), ('amount', str(coin['amount']))]) for coin in coins]


def load_genesis_template(template_path: str) -> dict:
    print(f'Loading genesis template from "{template_path}"')
    template = load_json_file(template_path, object_pairs_hook=OrderedDict)

    if not isinstance(template, dict):
        raise DecodeError(f'Genesis template "{template_path}" is not a JSON object')
    app_state = template.get(FIELD_APP_STATE)
    if not isinstance(app_state, dict):
        raise DecodeError(f'Genesis template "{template_path}" has no "{FIELD_APP_STATE}" object')
    if FIELD_ACCOUNTS not in app_state:
        raise DecodeError(f'Genesis template "{template_path}" has no "{FIELD_APP_STATE}.{FIELD_ACCOUNTS}" field')

    return template


def merge_genesis(template: dict, genesis_time: datetime, accounts: list) -> dict:
    """
    Build the genesis document out of a template.

    Only the genesis time and the list of accounts inside the application state are replaced. Every other field of
    the template, including the rest of the application state, is carried over untouched. The template itself is not
    modified.
    """
    genesis = copy.deepcopy(template)
    genesis[FIELD_GENESIS_TIME] = format_time(genesis_time)
    genesis[FIELD_APP_STATE][FIELD_ACCOUNTS] = [account.to_json_object() for account in accounts]

    return genesis


def write_genesis(genesis: dict, output_path: str):
    try:
        serialized = json.dumps(genesis, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as error:
        raise EncodeError(f'Cannot serialize genesis file: {error}') from error

    output_dir = os.path.dirname(os.path.abspath(output_path))
    temp_path = None
    try:
        mkdirp(output_dir)
        # Write next to the destination and rename, so a crash never leaves a truncated genesis file behind
        fd, temp_path = tempfile.mkstemp(prefix='.genesis-', suffix='.json.tmp', dir=output_dir)
        with os.fdopen(fd, 'w', encoding='utf-8') as genesis_file:
            os.fchmod(genesis_file.fileno(), GENESIS_FILE_MODE)
            genesis_file.write(serialized)
            genesis_file.write('\n')
            genesis_file.flush()
            os.fsync(genesis_file.fileno())
        os.replace(temp_path, output_path)
    except OSError as error:
        if temp_path and os.path.exists(temp_path):
            os.remove(temp_path)
        raise WriteError(f'Cannot write genesis file "{output_path}": {error}') from error

    print(f'Genesis file written to {output_path}')
