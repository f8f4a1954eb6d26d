import pytest

from permshell.permission.store import PermissionStore

DEFAULT = "-rw-r--r--"


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / ".permissions.txt"


@pytest.fixture
def store(store_path):
    s = PermissionStore(store_path)
    s.load()
    return s


def test_missing_file_gives_empty_store(store, store_path):
    assert not store_path.exists()
    assert len(store) == 0


def test_unknown_name_reads_default(store):
    assert store.get("never-seen.txt") == DEFAULT


def test_set_then_get(store):
    store.set("a.txt", "-r--------")
    assert store.get("a.txt") == "-r--------"


def test_saved_entries_survive_reload(store, store_path):
    store.set("a.txt", "-r--------")
    store.save()

    reloaded = PermissionStore(store_path)
    reloaded.load()
    assert reloaded.get("a.txt") == "-r--------"


def test_unsaved_entries_do_not_survive_reload(store, store_path):
    store.set("a.txt", "-r--------")

    reloaded = PermissionStore(store_path)
    reloaded.load()
    assert reloaded.get("a.txt") == DEFAULT


def test_remove_absent_name_is_fine(store):
    store.remove("ghost")
    assert "ghost" not in store


def test_rename_moves_mode(store):
    store.set("old", "-r--------")
    store.rename("old", "new")
    assert store.get("new") == "-r--------"
    assert store.get("old") == DEFAULT
    assert "old" not in store


def test_rename_without_entry_leaves_destination_default(store):
    store.set("dest", "----------")
    store.rename("missing", "dest")
    assert "dest" not in store
    assert store.get("dest") == DEFAULT


def test_file_format_and_sorting(store, store_path):
    store.set("zeta", "-rw-------")
    store.set("alpha", "drwxr-xr-x")
    store.save()
    assert store_path.read_text() == "alpha drwxr-xr-x\nzeta -rw-------\n"


def test_save_is_idempotent(store, store_path):
    store.set("b", "-r--r--r--")
    store.set("a", "drwxr-xr-x")
    store.save()
    first = store_path.read_bytes()
    store.save()
    assert store_path.read_bytes() == first


def test_save_leaves_no_temp_files(store, store_path):
    store.set("a", "-r--------")
    store.save()
    assert [p.name for p in store_path.parent.iterdir()] == [store_path.name]


def test_malformed_lines_are_skipped(store_path):
    store_path.write_text(
        "good -r--------\n"
        "\n"
        "only-one-field\n"
        "too many fields here\n"
        "badmode rwxrwxrwx\n"
        "dir drwxr-xr-x\n"
    )
    store = PermissionStore(store_path)
    store.load()
    assert store.items() == [("dir", "drwxr-xr-x"), ("good", "-r--------")]


def test_transaction_saves_on_success(store, store_path):
    with store.transaction():
        store.set("a", "-r--------")
    assert store_path.read_text() == "a -r--------\n"


def test_transaction_rolls_back_on_error(store, store_path):
    with store.transaction():
        store.set("keep", "-r--------")

    with pytest.raises(RuntimeError):
        with store.transaction():
            store.set("drop", "----------")
            store.remove("keep")
            raise RuntimeError("boom")

    assert store.get("keep") == "-r--------"
    assert "drop" not in store
    assert store_path.read_text() == "keep -r--------\n"


def test_set_rejects_invalid_mode(store):
    with pytest.raises(ValueError):
        store.set("a", "-rw-r--r--\n")
    with pytest.raises(ValueError):
        store.set("a", "rwx")


def test_custom_default_mode(store_path):
    store = PermissionStore(store_path, default_mode="-r--r--r--")
    assert store.get("x") == "-r--r--r--"
