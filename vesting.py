from datetime import datetime
from decimal import Decimal

from constants import ATOM_DENOMINATION, BECH32_PREFIX, VESTING_EMPLOYEES, VESTING_MULTISIG
from helpers import add_months, decode_public_key, derive_multisig_address, load_json_file, new_coins, \
    normalize_address, to_decimal, unix_time
from errors import DecodeError
from genesis import GenesisAccount

FIELD_ADDRESS = 'addr'
FIELD_AMOUNT = 'amount'
FIELD_LOCK = 'lock'
FIELD_THRESHOLD = 'threshold'
FIELD_PUBS = 'pubs'


class VestingEmployee:
    def __init__(self, address, amount, lock):
        self.address = address
        self.amount = to_decimal(amount, allow_negative=False)
        # Free-form description of the lock, e.g. "1 year"
        self.lock = lock

    @staticmethod
    def from_json_object(json_object: dict) -> 'VestingEmployee':
        return VestingEmployee(
            json_object[FIELD_ADDRESS],
            json_object[FIELD_AMOUNT],
            json_object.get(FIELD_LOCK, ''))


class VestingMultisig:
    def __init__(self, address, threshold, pubs, amount):
        self.address = address
        self.threshold = threshold
        self.pubs = pubs
        self.amount = to_decimal(amount, allow_negative=False)

    @staticmethod
    def from_json_object(json_object: dict) -> 'VestingMultisig':
        return VestingMultisig(
            json_object[FIELD_ADDRESS],
            json_object[FIELD_THRESHOLD],
            json_object[FIELD_PUBS],
            json_object[FIELD_AMOUNT])


def load_employees(employees_path: str, prefix: str = BECH32_PREFIX) -> list:
    print(f'Reading AiB employees from "{employees_path}"')
    employees_json = load_json_file(employees_path, parse_float=Decimal)
    if not isinstance(employees_json, list):
        raise DecodeError(f'Employees file "{employees_path}" is not a JSON array')

    employees = list()
    for employee_json in employees_json:
        try:
            employee = VestingEmployee.from_json_object(employee_json)
        except (KeyError, TypeError) as error:
            raise DecodeError(f'Malformed employee {employee_json!r} in "{employees_path}": {error!r}') from error
        employee.address = normalize_address(employee.address, prefix)
        print(f'\tEmployee {employee.address} gets {employee.amount} atoms (lock: {employee.lock})')
        employees.append(employee)

    return employees


def load_multisig(multisig_path: str, prefix: str = BECH32_PREFIX) -> VestingMultisig:
    print(f'Reading AiB multisig from "{multisig_path}"')
    multisig_json = load_json_file(multisig_path, parse_float=Decimal)
    try:
        multisig = VestingMultisig.from_json_object(multisig_json)
    except (KeyError, TypeError) as error:
        raise DecodeError(f'Malformed multisig in "{multisig_path}": {error!r}') from error
    multisig.address = normalize_address(multisig.address, prefix)

    if not isinstance(multisig.pubs, list):
        raise DecodeError(f'Multisig public keys in "{multisig_path}" are not a list')
    keys = [decode_public_key(public_key) for public_key in multisig.pubs]
    if isinstance(multisig.threshold, bool) or not isinstance(multisig.threshold, int) \
            or not 0 < multisig.threshold <= len(keys):
        raise DecodeError(f'Invalid multisig threshold {multisig.threshold!r} for {len(keys)} public keys')

    derived = derive_multisig_address(multisig.threshold, keys, prefix)
    if derived != multisig.address:
        print(f'Warning: multisig address {multisig.address} does not match its {multisig.threshold}-of-{len(keys)} '
              f'signers ({derived})')

    return multisig


def load_aib_vesting(employees_path: str, multisig_path: str, contribs: dict, prefix: str = BECH32_PREFIX):
    """
    Load the AiB employees and multisig allocations.

    These accounts vest, so they are kept apart from the contributors. Any address that also shows up in the
    contributors accumulator is reported, but nothing is merged.
    """
    employees = load_employees(employees_path, prefix)
    multisig = load_multisig(multisig_path, prefix)

    for employee in employees:
        if employee.address in contribs:
            print(f'AiB address duplicate {employee.address}')
    if multisig.address in contribs:
        print(f'AiB multisig address duplicate {multisig.address}')

    return employees, multisig


def employee_genesis_account(employee: VestingEmployee, genesis_time: datetime, denom: str = ATOM_DENOMINATION,
                             cliff_months: int = VESTING_EMPLOYEES["cliff"]) -> GenesisAccount:
    # Everything unlocks at once when the cliff is reached, there is no start time
    coins = new_coins(employee.amount, denom)
    return GenesisAccount(
        employee.address,
        coins,
        original_vesting=new_coins(employee.amount, denom),
        end_time=unix_time(add_months(genesis_time, cliff_months)))


def multisig_genesis_account(multisig: VestingMultisig, genesis_time: datetime, denom: str = ATOM_DENOMINATION,
                             start_months: int = VESTING_MULTISIG["start"],
                             end_months: int = VESTING_MULTISIG["end"]) -> GenesisAccount:
    if end_months <= start_months:
        raise ValueError(f'Vesting must end after it starts ({start_months} >= {end_months} months)')

    coins = new_coins(multisig.amount, denom)
    return GenesisAccount(
        multisig.address,
        coins,
        original_vesting=new_coins(multisig.amount, denom),
        start_time=unix_time(add_months(genesis_time, start_months)),
        end_time=unix_time(add_months(genesis_time, end_months)))


def unlocked_amount(account: GenesisAccount, timestamp: int) -> int:
    """How many uatoms of the original balance of an account can be spent at the given Unix time."""
    if not account.is_vesting():
        return account.amount

    original = account.original_vesting_amount
    locked = original
    if timestamp >= account.end_time:
        locked = 0
    elif account.start_time and timestamp > account.start_time:
        elapsed = timestamp - account.start_time
        locked = original - original * elapsed // (account.end_time - account.start_time)

    return account.amount - locked
