from errors import ValidationError


def check_total(accounts: list, expected_uatoms: int):
    uatom_total = sum(account.amount for account in accounts)
    if uatom_total != expected_uatoms:
        raise ValidationError(f'Expected {expected_uatoms} uatoms, got {uatom_total} uatoms allocated in genesis')

    return uatom_total


def check_count(accounts: list, expected_count: int):
    if len(accounts) != expected_count:
        raise ValidationError(f'Expected {expected_count} addresses, got {len(accounts)} addresses allocated in genesis')


def check_uniqueness(accounts: list):
    addresses = set()
    for account in accounts:
        if account.address in addresses:
            raise ValidationError(f'Got duplicate address {account.address}')
        addresses.add(account.address)

    if len(addresses) != len(accounts):
        raise ValidationError(f'Length mismatch: {len(addresses)} distinct addresses for {len(accounts)} accounts')


def validate_accounts(accounts: list, expected_uatoms: int, expected_count: int):
    """Run every check over the final accounts. Nothing should be written if any of them fails."""
    uatom_total = check_total(accounts, expected_uatoms)
    check_count(accounts, expected_count)

    print('-----------')
    print(f'TOTAL addrs {len(accounts)}')
    print(f'TOTAL uAtoms {uatom_total}')

    check_uniqueness(accounts)


def sort_accounts(accounts: list) -> list:
    return sorted(accounts, key=lambda account: account.address)
