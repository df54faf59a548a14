# ruff: noqa: S101
import pytest
from sqlalchemy import create_engine, inspect, text

from courier.database import EnvironmentStore, default_database_path, load_variables
from courier.errors import PersistenceError
from courier.models import EnvironmentBinding


def test_create_list_update_delete(store):
    created = store.create("  dev  ")
    assert created.name == "dev"
    assert created.variables == []
    assert created.default_base_url is None

    created.variables = [("b", "2"), ("a", "1"), ("b", "3")]
    created.default_base_url = "https://dev.test"
    store.update(created)

    (loaded,) = store.list_all()
    assert loaded == created

    store.delete(created.id)
    assert store.list_all() == []


def test_list_is_ordered_by_creation(store):
    for name in ("prod", "dev", "staging"):
        store.create(name)
    assert [env.name for env in store.list_all()] == ["prod", "dev", "staging"]


def test_duplicate_and_empty_names_are_rejected(store):
    store.create("dev")
    with pytest.raises(PersistenceError):
        store.create("dev")
    with pytest.raises(PersistenceError):
        store.create("   ")
    assert [env.name for env in store.list_all()] == ["dev"]


def test_rename_to_existing_name_is_rejected(store):
    store.create("dev")
    prod = store.create("prod")
    prod.name = "dev"
    with pytest.raises(PersistenceError):
        store.update(prod)
    assert [env.name for env in store.list_all()] == ["dev", "prod"]


def test_update_unknown_environment(store):
    with pytest.raises(PersistenceError):
        store.update(EnvironmentBinding(id=404, name="ghost"))


def test_delete_unknown_environment_is_a_noop(store):
    store.create("dev")
    store.delete(404)
    assert len(store.list_all()) == 1


def test_store_must_be_initialised(tmp_path):
    with pytest.raises(PersistenceError):
        EnvironmentStore(tmp_path / "courier.db").list_all()


def test_data_survives_reopen(tmp_path):
    path = tmp_path / "courier.db"
    first = EnvironmentStore(path).init()
    binding = first.create("dev")
    binding.variables = [("token", "abc")]
    first.update(binding)
    first.close()

    second = EnvironmentStore(path).init()
    try:
        assert second.list_all() == [binding]
    finally:
        second.close()


def test_missing_column_is_added_to_old_table(tmp_path):
    path = tmp_path / "courier.db"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as connection:
        connection.execute(
            text("CREATE TABLE environments (id INTEGER PRIMARY KEY, name TEXT NOT NULL UNIQUE, variables TEXT NOT NULL)")
        )
        connection.execute(text("INSERT INTO environments (name, variables) VALUES ('old', '[[\"k\", \"v\"]]')"))
    engine.dispose()

    for _ in range(2):
        env_store = EnvironmentStore(path).init()
        (old,) = env_store.list_all()
        env_store.close()

    assert old.variables == [("k", "v")]
    assert old.default_base_url is None
    engine = create_engine(f"sqlite:///{path}")
    columns = [column["name"] for column in inspect(engine).get_columns("environments")]
    engine.dispose()
    assert columns.count("default_endpoint") == 1


@pytest.mark.parametrize("stored", ["{oops", '[["only-key"]]', "[1]", "[null]", '[["a", "b", "c"]]'])
def test_corrupt_variables_raise(tmp_path, stored):
    path = tmp_path / "courier.db"
    env_store = EnvironmentStore(path).init()
    try:
        env_store.create("dev")
        engine = create_engine(f"sqlite:///{path}")
        with engine.begin() as connection:
            connection.execute(text("UPDATE environments SET variables = :stored"), {"stored": stored})
        engine.dispose()
        with pytest.raises(PersistenceError):
            env_store.list_all()
    finally:
        env_store.close()


def test_load_variables_rejects_badly_shaped_json():
    for raw in ('{"a": 1}', '[["only-key"]]', "[1]", "[null]", '[["k", 2]]'):
        with pytest.raises(PersistenceError):
            load_variables(raw)
    assert load_variables('[["k", "v"], ["k", "w"]]') == [("k", "v"), ("k", "w")]
    assert load_variables("") == []


def test_default_database_path(monkeypatch, tmp_path):
    monkeypatch.setenv("HTTP_COURIER_DATA_DIR", str(tmp_path))
    assert default_database_path() == tmp_path / "courier.db"
    monkeypatch.delenv("HTTP_COURIER_DATA_DIR")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    assert default_database_path() == tmp_path / "xdg" / "http_courier" / "courier.db"
