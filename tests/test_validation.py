import pytest

from errors import ValidationError
from genesis import GenesisAccount
from helpers import new_coins
from validation import check_total, check_count, check_uniqueness, validate_accounts, sort_accounts


@pytest.fixture
def accounts(addresses):
    return [GenesisAccount(address, new_coins(amount)) for address, amount in zip(addresses, ['10.00', '5.50', '4'])]


def test_total_matches(accounts):
    assert check_total(accounts, 19_500_000) == 19_500_000


@pytest.mark.parametrize('expected', [19_499_999, 19_500_001, 0])
def test_total_mismatch_by_any_amount(accounts, expected):
    with pytest.raises(ValidationError):
        check_total(accounts, expected)


def test_count(accounts):
    check_count(accounts, 3)

    with pytest.raises(ValidationError):
        check_count(accounts, 4)
    with pytest.raises(ValidationError):
        check_count(accounts, 2)


def test_uniqueness(accounts, addresses):
    check_uniqueness(accounts)

    with pytest.raises(ValidationError, match='duplicate'):
        check_uniqueness(accounts + [GenesisAccount(addresses[1], new_coins(1))])


def test_validate_accounts_prints_totals(accounts, capsys):
    validate_accounts(accounts, 19_500_000, 3)

    output = capsys.readouterr().out
    assert 'TOTAL addrs 3' in output
    assert 'TOTAL uAtoms 19500000' in output


def test_validate_accounts_checks_total_first(accounts, addresses):
    duplicated = accounts + [GenesisAccount(addresses[0], new_coins(1))]

    with pytest.raises(ValidationError, match='uatoms'):
        validate_accounts(duplicated, 19_500_000, 3)
    with pytest.raises(ValidationError, match='addresses'):
        validate_accounts(duplicated, 20_500_000, 3)
    with pytest.raises(ValidationError, match='duplicate'):
        validate_accounts(duplicated, 20_500_000, 4)


def test_sort_is_ordered_and_idempotent(accounts):
    sorted_accounts = sort_accounts(accounts)

    addresses = [account.address for account in sorted_accounts]
    assert addresses == sorted(addresses)
    assert sort_accounts(sorted_accounts) == sorted_accounts
    assert sorted(accounts, key=id) == sorted(sorted_accounts, key=id)


def test_sort_is_stable(addresses):
    first = GenesisAccount(addresses[0], new_coins(1))
    second = GenesisAccount(addresses[0], new_coins(2))

    assert sort_accounts([first, second]) == [first, second]
    assert sort_accounts([second, first]) == [second, first]
