from storefront.client.storage import JsonFileStorage, MemoryStorage


def test_memory_storage():
    storage = MemoryStorage()
    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"

    storage.remove_item("k")
    storage.remove_item("k")
    assert storage.get_item("k") is None


def test_file_storage_survives_new_instance(tmp_path):
    path = str(tmp_path / "nested" / "storage.json")
    JsonFileStorage(path).set_item("cart", "[]")

    assert JsonFileStorage(path).get_item("cart") == "[]"


def test_unreadable_file_reads_as_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("not json at all")

    storage = JsonFileStorage(str(path))
    assert storage.get_item("cart") is None

    storage.set_item("cart", "[]")
    assert storage.get_item("cart") == "[]"


def test_non_mapping_file_reads_as_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("[1, 2, 3]")

    assert JsonFileStorage(str(path)).get_item("cart") is None
