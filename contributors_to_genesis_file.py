#!/usr/bin/env python3
import argparse
import sys
from decimal import Decimal, InvalidOperation

from constants import BECH32_CONTRIBUTORS_FILES, HEX_CONTRIBUTORS_FILES, AIB_EMPLOYEES_FILE, AIB_MULTISIG_FILE, \
    GENESIS_TEMPLATE_FILE, GENESIS_OUTPUT_FILE, GENESIS_TIME, ATOM_GENESIS_TOTAL, ADDRESS_GENESIS_TOTAL, \
    ATOM_DENOMINATION, BECH32_PREFIX, VESTING_EMPLOYEES, VESTING_MULTISIG
from contributors import ENCODING_BECH32, ENCODING_HEX, accumulate_all_contributors
from errors import GenesisError
from genesis import GenesisAccount, load_genesis_template, merge_genesis, write_genesis
from helpers import atom_to_uatom, new_coins, parse_time
from validation import sort_accounts, validate_accounts
from vesting import employee_genesis_account, load_aib_vesting, multisig_genesis_account


def build_genesis_accounts(config, contribs: dict, employees: list, multisig) -> list:
    genesis_accounts = [GenesisAccount(address, new_coins(amount, config.denom)) for address, amount in contribs.items()]

    # AiB employees vest with a cliff
    for employee in employees:
        genesis_accounts.append(
            employee_genesis_account(employee, config.genesis_time, config.denom, config.employee_cliff_months))

    # AiB multisig vests continuously, starting some months after genesis
    genesis_accounts.append(
        multisig_genesis_account(multisig, config.genesis_time, config.denom, config.multisig_start_months,
                                 config.multisig_end_months))

    return genesis_accounts


def contributor_sources(config) -> list:
    bech32_files = config.bech32_contributors if config.bech32_contributors is not None else BECH32_CONTRIBUTORS_FILES
    hex_files = config.hex_contributors if config.hex_contributors is not None else HEX_CONTRIBUTORS_FILES

    return [(path, ENCODING_BECH32) for path in bech32_files] + [(path, ENCODING_HEX) for path in hex_files]


def main(config):
    # Accumulate every contributors file, ICF addresses are in bech32 and fundraiser addresses are in hex
    contribs = accumulate_all_contributors(contributor_sources(config), config.bech32_prefix)
    print(f'Loaded {len(contribs)} contributors')

    employees, multisig = load_aib_vesting(config.employees, config.multisig, contribs, config.bech32_prefix)

    genesis_accounts = build_genesis_accounts(config, contribs, employees, multisig)
    validate_accounts(genesis_accounts, atom_to_uatom(config.expected_total), config.expected_count)
    genesis_accounts = sort_accounts(genesis_accounts)

    template = load_genesis_template(config.genesis_template)
    genesis = merge_genesis(template, config.genesis_time, genesis_accounts)
    write_genesis(genesis, config.write_genesis_file)


def decimal_amount(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f'invalid amount: "{value}"')


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='merge the contributors and AiB allocations into the accounts of a genesis file, after checking '
                    'the total supply, the number of accounts and that no address is repeated')
    parser.add_argument('--bech32-contributors', metavar='PATH', action='append',
                        help=f'contributors JSON file with bech32 addresses, can be repeated '
                             f'(default: {BECH32_CONTRIBUTORS_FILES})')
    parser.add_argument('--hex-contributors', metavar='PATH', action='append',
                        help=f'contributors JSON file with hex addresses, can be repeated '
                             f'(default: {HEX_CONTRIBUTORS_FILES})')
    parser.add_argument('--employees', metavar='PATH', default=AIB_EMPLOYEES_FILE,
                        help='AiB employees JSON file (default: "%(default)s")')
    parser.add_argument('--multisig', metavar='PATH', default=AIB_MULTISIG_FILE,
                        help='AiB multisig JSON file (default: "%(default)s")')
    parser.add_argument('--genesis-template', metavar='PATH', default=GENESIS_TEMPLATE_FILE,
                        help='genesis file containing the chain params (default: "%(default)s")')
    parser.add_argument('--write-genesis-file', metavar='GENESIS_FILE_PATH', default=GENESIS_OUTPUT_FILE,
                        help='write the genesis file to this JSON file (default: "%(default)s")')
    parser.add_argument('--denom', default=ATOM_DENOMINATION,
                        help='denomination of the genesis coins (default: "%(default)s")')
    parser.add_argument('--expected-total', type=decimal_amount, default=Decimal(ATOM_GENESIS_TOTAL),
                        help='total atoms that must be allocated in genesis (default: %(default)s)')
    parser.add_argument('--expected-count', type=int, default=ADDRESS_GENESIS_TOTAL,
                        help='number of accounts that must be allocated in genesis (default: %(default)s)')
    parser.add_argument('--genesis-time', type=parse_time, default=parse_time(GENESIS_TIME),
                        help=f'genesis instant in RFC 3339 format (default: "{GENESIS_TIME}")')
    parser.add_argument('--bech32-prefix', default=BECH32_PREFIX,
                        help='human readable prefix of the addresses (default: "%(default)s")')
    parser.add_argument('--employee-cliff-months', type=int, default=VESTING_EMPLOYEES["cliff"],
                        help='months after genesis at which AiB employees unlock (default: %(default)s)')
    parser.add_argument('--multisig-start-months', type=int, default=VESTING_MULTISIG["start"],
                        help='months after genesis at which the AiB multisig starts unlocking (default: %(default)s)')
    parser.add_argument('--multisig-end-months', type=int, default=VESTING_MULTISIG["end"],
                        help='months after genesis at which the AiB multisig is fully unlocked (default: %(default)s)')

    args = parser.parse_args(argv)
    if args.multisig_end_months <= args.multisig_start_months:
        parser.error('--multisig-end-months must be greater than --multisig-start-months')

    return args


def run(argv=None) -> int:
    config = parse_args(argv)
    try:
        main(config)
    except GenesisError as error:
        print(f'Error: {error}', file=sys.stderr)
        return error.exit_code

    return 0


if __name__ == '__main__':
    sys.exit(run())
