import pytest

from account.application.usecase.account_usecase import AccountUseCase
from account.infrastructure.repository.account_repository_impl import ACCOUNTS_KEY, AccountRepositoryImpl


@pytest.fixture
def usecase(store):
    return AccountUseCase(AccountRepositoryImpl(store))


def test_register_and_list_accounts(usecase):
    usecase.register_account("acc1", display_name="Main", access_token="t1")
    usecase.register_account("acc2", channel_id="UC2")

    accounts = usecase.list_accounts()
    assert [a.account_id for a in accounts] == ["acc1", "acc2"]
    assert accounts[0].display_name == "Main"
    assert accounts[1].display_name == "acc2"


def test_registering_again_updates_in_place(usecase):
    usecase.register_account("acc1", access_token="old")
    usecase.register_account("acc1", access_token="new")

    accounts = usecase.list_accounts()
    assert len(accounts) == 1
    assert accounts[0].access_token == "new"


def test_update_and_remove(usecase):
    usecase.register_account("acc1")
    updated = usecase.update_account("acc1", display_name="Renamed")
    assert updated.display_name == "Renamed"
    assert usecase.get_account("acc1").display_name == "Renamed"

    usecase.remove_account("acc1")
    assert usecase.list_accounts() == []


def test_unknown_account_raises(usecase):
    with pytest.raises(ValueError):
        usecase.get_account("nope")
    with pytest.raises(ValueError):
        usecase.remove_account("nope")


def test_corrupt_account_list_reads_as_empty(usecase, store):
    store.data[ACCOUNTS_KEY] = "{{{"
    assert usecase.list_accounts() == []


def test_unreadable_store_never_drops_accounts(usecase, store):
    usecase.register_account("acc1")
    store.fail_get = True

    assert usecase.list_accounts() == []
    with pytest.raises(OSError):
        usecase.register_account("acc2")

    store.fail_get = False
    assert [a.account_id for a in usecase.list_accounts()] == ["acc1"]


def test_timestamps_are_timezone_aware(usecase):
    account = usecase.register_account("acc1")
    assert account.created_at.tzinfo is not None

    updated = usecase.update_account("acc1", display_name="Renamed")
    assert updated.updated_at.tzinfo is not None
    assert usecase.get_account("acc1").created_at == account.created_at
