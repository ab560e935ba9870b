from decimal import Decimal

from constants import BECH32_PREFIX
from helpers import hex_to_address, load_json_file, normalize_address, to_decimal
from errors import DecodeError

ENCODING_BECH32 = 'bech32'
ENCODING_HEX = 'hex'


def accumulate_contributors(file_path: str, encoding: str, contribs: dict, prefix: str = BECH32_PREFIX) -> dict:
    """
    Add the allocations in a contributors file to the `contribs` accumulator.

    The file is a JSON object mapping addresses to amounts of atoms. Hex addresses are converted into bech32 so that
    every key in the accumulator uses the same encoding. An address that is already in the accumulator gets the new
    amount added to it, and the duplicate is reported.
    """
    if encoding not in (ENCODING_BECH32, ENCODING_HEX):
        raise ValueError(f'Unknown address encoding "{encoding}"')

    print(f'Reading {encoding} contributors from "{file_path}"')
    allocations = load_json_file(file_path, parse_float=Decimal, parse_int=Decimal)
    if not isinstance(allocations, dict):
        raise DecodeError(f'Contributors file "{file_path}" is not a JSON object')

    for address, amount in allocations.items():
        if encoding == ENCODING_HEX:
            address = hex_to_address(address, prefix)
        else:
            address = normalize_address(address, prefix)

        if isinstance(amount, bool) or not isinstance(amount, (Decimal, str)):
            raise DecodeError(f'Invalid amount {amount!r} for {address} in "{file_path}"')
        amount = to_decimal(amount, allow_negative=False)

        if address in contribs:
            print(f'Duplicate address {address}: adding {amount} to {contribs[address]}')
        contribs[address] = contribs.get(address, Decimal(0)) + amount

    print(f'\tLoaded {len(allocations)} allocations from "{file_path}"')

    return contribs


def accumulate_bech32_contributors(file_path: str, contribs: dict, prefix: str = BECH32_PREFIX) -> dict:
    return accumulate_contributors(file_path, ENCODING_BECH32, contribs, prefix)


def accumulate_hex_contributors(file_path: str, contribs: dict, prefix: str = BECH32_PREFIX) -> dict:
    return accumulate_contributors(file_path, ENCODING_HEX, contribs, prefix)


def accumulate_all_contributors(sources: list, prefix: str = BECH32_PREFIX) -> dict:
    contribs = dict()
    for (file_path, encoding) in sources:
        accumulate_contributors(file_path, encoding, contribs, prefix)

    return contribs
