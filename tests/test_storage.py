import json

import pytest

from budgetflow.accounts import Accounts, hash_password, verify_password
from budgetflow.db.client import get_engine
from budgetflow.errors import AccountExistsError, InvalidCredentialsError
from budgetflow.ingest.seed_samples import SAMPLE_DEBTS, SAMPLE_GOALS, SAMPLE_TRANSACTIONS, main
from budgetflow.models import Transaction
from budgetflow.storage import CURRENT_USER_KEY, KeyValueStore, open_stores, storage_key


def _tx(id_, description="Coffee", amount=4.5):
    return Transaction(id_, "2024-03-01", description, amount, "Food & Dining", "expense")


def test_storage_keys_are_partitioned_by_user():
    assert storage_key("transactions", "u1") == "budgetflow_transactions_u1"
    assert storage_key("debts", None) == "budgetflow_debts_guest"


def test_first_load_seeds_samples_once():
    stores = open_stores(user_id=None)

    assert stores.transactions.load() == list(SAMPLE_TRANSACTIONS)
    assert stores.goals.load() == list(SAMPLE_GOALS)
    assert stores.debts.load() == list(SAMPLE_DEBTS)

    stores.transactions.save([])
    assert stores.transactions.load() == []


def test_seeding_can_be_disabled(monkeypatch):
    assert open_stores(user_id="u1", seed_samples=False).transactions.load() == []

    monkeypatch.setenv("BUDGETFLOW_SEED_SAMPLES", "0")
    assert open_stores(user_id="u2").goals.load() == []


def test_transactions_are_prepended_and_round_trip():
    stores = open_stores(user_id="u1", seed_samples=False)

    stores.transactions.add(_tx("a"))
    stores.transactions.add(_tx("b"))
    stores.transactions.add_many([_tx("c"), _tx("d")])

    reopened = open_stores(user_id="u1", seed_samples=False)
    assert [t.id for t in reopened.transactions.load()] == ["d", "c", "b", "a"]
    assert reopened.transactions.get("c") == _tx("c")


def test_update_and_delete():
    stores = open_stores(user_id="u1", seed_samples=False)
    stores.transactions.save([_tx("a"), _tx("b")])

    stores.transactions.update("a", description="Espresso", id="ignored")
    stores.transactions.update("missing", description="Nope")
    assert [t.description for t in stores.transactions.load()] == ["Espresso", "Coffee"]

    stores.transactions.delete("a")
    assert [t.id for t in stores.transactions.load()] == ["b"]


def test_goals_append():
    stores = open_stores(user_id="u1")
    goal = SAMPLE_GOALS[0]

    goals = stores.goals.add(goal)

    assert goals[-1] == goal
    assert len(goals) == len(SAMPLE_GOALS) + 1


def test_users_do_not_see_each_other():
    open_stores(user_id="alice", seed_samples=False).transactions.add(_tx("a"))

    assert open_stores(user_id="bob", seed_samples=False).transactions.load() == []


def test_corrupt_document_reads_as_empty():
    kv = KeyValueStore()
    kv.set(storage_key("transactions", "u1"), "{not json")

    assert open_stores(user_id="u1").transactions.load() == []


def test_invalid_items_are_dropped():
    kv = KeyValueStore()
    good = {
        "id": "ok",
        "date": "2024-01-01",
        "description": "Ok",
        "amount": 1.0,
        "category": "Other",
        "type": "income",
    }
    bad = dict(good, id="bad", amount=-3)
    kv.set(storage_key("transactions", "u1"), json.dumps([good, bad, "junk"]))

    assert [t.id for t in open_stores(user_id="u1").transactions.load()] == ["ok"]


def test_stored_json_uses_camel_case():
    stores = open_stores(user_id="u1")
    stores.debts.load()

    stored = json.loads(KeyValueStore().get(storage_key("debts", "u1")))
    assert {"minimumPayment", "interestRate", "dueDate", "createdAt"} <= set(stored[0])


def test_password_hashing():
    stored = hash_password("s3cret")

    assert verify_password("s3cret", stored)
    assert not verify_password("wrong", stored)
    assert not verify_password("s3cret", "garbage")
    assert "s3cret" not in stored


def test_sign_up_sign_in_sign_out():
    kv = KeyValueStore()
    accounts = Accounts(kv)

    user = accounts.sign_up("Ada", "ada@example.com", "hunter22")
    assert accounts.current_user() == user
    assert kv.get(CURRENT_USER_KEY) == user.id

    accounts.sign_out()
    assert accounts.current_user() is None

    assert accounts.sign_in("ADA@example.com", "hunter22") == user
    assert accounts.current_user() == user


def test_duplicate_email_and_bad_credentials():
    accounts = Accounts(KeyValueStore())
    accounts.sign_up("Ada", "ada@example.com", "hunter22")

    with pytest.raises(AccountExistsError):
        accounts.sign_up("Other", "Ada@Example.com", "whatever")
    with pytest.raises(InvalidCredentialsError):
        accounts.sign_in("ada@example.com", "nope")
    with pytest.raises(InvalidCredentialsError):
        accounts.sign_in("nobody@example.com", "hunter22")


def test_reseed_overwrites_partition(database_url):
    stores = open_stores(user_id="u1", seed_samples=False)
    stores.transactions.save([_tx("a")])

    assert main(["--database-url", database_url, "--user-id", "u1"]) == 0

    assert stores.transactions.load() == list(SAMPLE_TRANSACTIONS)
    assert stores.debts.load() == list(SAMPLE_DEBTS)


def test_engine_refuses_a_second_url(tmp_path, database_url):
    assert get_engine(database_url=database_url) is get_engine()

    with pytest.raises(RuntimeError):
        get_engine(database_url=f"sqlite+pysqlite:///{tmp_path / 'other.db'}")
