import json

from recipe_remix.storage import JsonFileStore


def test_missing_file_reads_as_empty(tmp_path):
    store = JsonFileStore(tmp_path / "nested" / "store.json")

    assert store.get_item("savedRecipes") is None


def test_set_get_and_remove(tmp_path):
    path = tmp_path / "nested" / "store.json"
    store = JsonFileStore(path)

    store.set_item("a", "1")
    store.set_item("b", "2")
    store.remove_item("a")

    assert store.get_item("a") is None
    assert store.get_item("b") == "2"
    assert json.loads(path.read_text()) == {"b": "2"}


def test_unreadable_file_reads_as_empty_and_is_replaced_on_write(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json")
    store = JsonFileStore(path)

    assert store.get_item("a") is None
    store.set_item("a", "x")
    assert json.loads(path.read_text()) == {"a": "x"}


def test_non_object_file_reads_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2, 3]")

    assert JsonFileStore(path).get_item("a") is None
