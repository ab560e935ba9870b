import bech32
import calendar
import ecdsa
import hashlib
import json
import pathlib
import re

from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from ecdsa.errors import MalformedPointError

from constants import CENTI_PRECISION, UATOMS_PER_CENTI, ATOM_DENOMINATION, BECH32_PREFIX, BECH32_PUBKEY_PREFIX, \
    ADDRESS_LENGTH, AMINO_PREFIX_SECP256K1, AMINO_PREFIX_MULTISIG
from errors import DecodeError, FileReadError

COMPRESSED_PUBLIC_KEY_LENGTH = 33
HEX_DIGITS = re.compile('[0-9a-fA-F]+')


def to_decimal(amount, allow_negative: bool = True) -> Decimal:
    # Floats go through their shortest representation so that 0.1 stays 0.1
    try:
        decimal_amount = Decimal(str(amount))
    except InvalidOperation:
        raise DecodeError(f'Invalid amount "{amount}"')
    if not decimal_amount.is_finite():
        raise DecodeError(f'Invalid amount "{amount}"')
    if not allow_negative and decimal_amount < 0:
        raise DecodeError(f'Negative amount "{amount}"')

    return decimal_amount


def atom_to_uatom(amount) -> int:
    """
    Convert an amount of atoms into uatoms.

    Amounts are specified with two decimals at most ("centi-atoms"). The amount is multiplied by 100 to get the number
    of centi-atoms, rounded half away from zero to an integer, and then scaled to uatoms. Anything below a centi-atom is
    lost on purpose.
    """
    try:
        centi_atoms = (to_decimal(amount) * CENTI_PRECISION).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise DecodeError(f'Amount "{amount}" is out of range')

    return int(centi_atoms) * UATOMS_PER_CENTI


def new_coins(amount, denom: str = ATOM_DENOMINATION) -> list:
    return [{
        'denom': denom,
        'amount': atom_to_uatom(amount),
    }]


def coins_amount(coins) -> int:
    return sum(coin['amount'] for coin in coins or [])


def encode_address(raw: bytes, prefix: str = BECH32_PREFIX) -> str:
    data = bech32.convertbits(raw, 8, 5)
    return bech32.bech32_encode(prefix, data)


def decode_address(address: str, prefix: str = BECH32_PREFIX) -> bytes:
    if not isinstance(address, str):
        raise DecodeError(f'Address {address!r} is not a string')

    hrp, data = bech32.bech32_decode(address)
    if hrp is None:
        raise DecodeError(f'Address "{address}" is not valid bech32')
    if hrp != prefix:
        raise DecodeError(f'Address "{address}" has prefix "{hrp}", expected "{prefix}"')

    raw = bech32.convertbits(data, 5, 8, False)
    if raw is None or len(raw) != ADDRESS_LENGTH:
        raise DecodeError(f'Incorrect address length for "{address}"')

    return bytes(raw)


def normalize_address(address: str, prefix: str = BECH32_PREFIX) -> str:
    return encode_address(decode_address(address, prefix), prefix)


def hex_to_address(hex_address: str, prefix: str = BECH32_PREFIX) -> str:
    if not isinstance(hex_address, str) or not hex_address:
        raise DecodeError(f'Hex address {hex_address!r} is empty or not a string')

    digits = hex_address[2:] if hex_address.lower().startswith('0x') else hex_address
    # bytes.fromhex would skip whitespace
    if not HEX_DIGITS.fullmatch(digits) or len(digits) % 2:
        raise DecodeError(f'Address "{hex_address}" is not valid hex')
    raw = bytes.fromhex(digits)

    if len(raw) != ADDRESS_LENGTH:
        raise DecodeError(f'Incorrect address length for "{hex_address}"')

    return encode_address(raw, prefix)


def encode_public_key(key: bytes, prefix: str = BECH32_PUBKEY_PREFIX) -> str:
    amino_key = AMINO_PREFIX_SECP256K1 + bytes([len(key)]) + key
    return bech32.bech32_encode(prefix, bech32.convertbits(amino_key, 8, 5))


def decode_public_key(public_key: str, prefix: str = BECH32_PUBKEY_PREFIX) -> bytes:
    hrp, data = bech32.bech32_decode(public_key) if isinstance(public_key, str) else (None, None)
    if hrp != prefix:
        raise DecodeError(f'Public key {public_key!r} is not a bech32 "{prefix}" key')

    amino_key = bytes(bech32.convertbits(data, 5, 8, False) or [])
    header = AMINO_PREFIX_SECP256K1 + bytes([COMPRESSED_PUBLIC_KEY_LENGTH])
    key = amino_key[len(header):]
    if not amino_key.startswith(header) or len(key) != COMPRESSED_PUBLIC_KEY_LENGTH:
        raise DecodeError(f'Public key "{public_key}" is not an amino encoded secp256k1 key')

    validate_secp256k1_public_key(key)

    return key


def validate_secp256k1_public_key(key: bytes):
    try:
        ecdsa.VerifyingKey.from_string(key, curve=ecdsa.SECP256k1)
    except (MalformedPointError, ValueError) as error:
        raise DecodeError(f'Public key {key.hex()} is not a point on secp256k1: {error}')


def encode_uvarint(value: int) -> bytes:
    encoded = bytearray()
    while value >= 0x80:
        encoded.append((value & 0x7f) | 0x80)
        value >>= 7
    encoded.append(value)

    return bytes(encoded)


def derive_multisig_address(threshold: int, public_keys: list, prefix: str = BECH32_PREFIX) -> str:
    # Amino binary encoding of a PubKeyMultisigThreshold: field 1 is the threshold, field 2 the repeated keys
    encoded = bytearray(AMINO_PREFIX_MULTISIG)
    encoded += b'\x08' + encode_uvarint(threshold)
    for key in public_keys:
        amino_key = AMINO_PREFIX_SECP256K1 + bytes([len(key)]) + key
        encoded += b'\x12' + encode_uvarint(len(amino_key)) + amino_key

    return encode_address(hashlib.sha256(encoded).digest()[:ADDRESS_LENGTH], prefix)


def load_json_file(file_path: str, **kwargs):
    try:
        with open(file_path) as json_file:
            return json.load(json_file, **kwargs)
    except OSError as error:
        raise FileReadError(f'Cannot read "{file_path}": {error}') from error
    except ValueError as error:
        raise DecodeError(f'Invalid JSON in "{file_path}": {error}') from error


def parse_time(value: str) -> datetime:
    moment = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    return moment.astimezone(timezone.utc)


def format_time(moment: datetime) -> str:
    moment = moment.astimezone(timezone.utc)
    formatted = moment.strftime('%Y-%m-%dT%H:%M:%S')
    if moment.microsecond:
        formatted += '.' + f'{moment.microsecond:06}'.rstrip('0')

    return formatted + 'Z'


def unix_time(moment: datetime) -> int:
    return int(moment.timestamp())


def add_months(moment: datetime, months: int) -> datetime:
    # Days that do not exist in the target month roll over into the next one (Jan 31 + 1 month = Mar 3)
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    overflow = max(moment.day - calendar.monthrange(year, month)[1], 0)

    return moment.replace(year=year, month=month, day=moment.day - overflow) + timedelta(days=overflow)


def mkdirp(path: str):
    pathlib.Path(path).mkdir(parents=True, exist_ok=True)
