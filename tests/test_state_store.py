import json

import pytest

from shared.models import ImageState
from shared.state_store import (
    ImageStateStore,
    JsonFileStateStore,
    MemoryStateStore,
    StateFileError,
    build_state_store,
)


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStateStore()
    return JsonFileStateStore(tmp_path / "state.json")


def test_first_like_creates_liked_state(store):
    state = store.toggle_like("3")
    assert state.likes == 1
    assert state.is_featured is False
    assert store.find("3").likes == 1


def test_like_toggles_back_to_zero(store):
    store.toggle_like("3")
    assert store.toggle_like("3").likes == 0
    assert store.toggle_like("3").likes == 1


def test_first_feature_creates_featured_state(store):
    state = store.toggle_featured("1")
    assert state.is_featured is True
    assert state.likes == 0


def test_feature_toggle_keeps_likes(store):
    store.toggle_like("1")
    store.toggle_featured("1")
    state = store.toggle_featured("1")
    assert state.is_featured is False
    assert state.likes == 1
    assert len(store.load()) == 1


def test_seeded_like_count_toggles_to_zero():
    store = MemoryStateStore([ImageState(id="1", likes=5)])
    assert store.toggle_like("1").likes == 0


def test_memory_store_does_not_mutate_seed():
    seed = [ImageState(id="1", likes=0)]
    store = MemoryStateStore(seed)
    store.toggle_like("1")
    store.toggle_like("2")
    assert seed[0].likes == 0
    assert len(seed) == 1


def test_memory_load_returns_copies():
    store = MemoryStateStore([ImageState(id="1", likes=1)])
    store.load()[0].likes = 42
    assert store.find("1").likes == 1


def test_json_store_writes_camel_case_file(tmp_path):
    path = tmp_path / "nested" / "state.json"
    store = JsonFileStateStore(path)
    store.toggle_featured("2")

    assert json.loads(path.read_text()) == [{"id": "2", "likes": 0, "isFeatured": True}]


def test_json_store_reads_file_on_every_call(tmp_path):
    path = tmp_path / "state.json"
    store = JsonFileStateStore(path)
    assert store.load() == []

    path.write_text(json.dumps([{"id": "4", "likes": 1, "isFeatured": False}]))
    assert store.find("4").likes == 1


def test_json_store_uses_seed_until_file_exists(tmp_path):
    path = tmp_path / "state.json"
    store = JsonFileStateStore(path, [ImageState(id="1", likes=1, is_featured=True)])

    assert store.find("1").is_featured is True
    assert not path.exists()

    store.toggle_like("1")
    saved = json.loads(path.read_text())
    assert saved == [{"id": "1", "likes": 0, "isFeatured": True}]


def test_json_store_rejects_invalid_json(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json")
    store = JsonFileStateStore(path)

    with pytest.raises(StateFileError):
        store.load()
    with pytest.raises(StateFileError):
        store.toggle_like("1")
    assert path.read_text() == "{not json"


def test_json_store_rejects_non_utf8_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_bytes(b"[\xff\xfe]")
    with pytest.raises(StateFileError):
        JsonFileStateStore(path).load()


def test_json_store_rejects_non_list(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"id": "1"}))
    with pytest.raises(StateFileError):
        JsonFileStateStore(path).load()


def test_json_store_rejects_malformed_entries(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps([{"likes": 1}]))
    with pytest.raises(StateFileError):
        JsonFileStateStore(path).load()


def test_build_state_store_selects_backend(make_settings):
    assert isinstance(build_state_store(make_settings()), MemoryStateStore)

    json_store = build_state_store(make_settings(state_backend="json"))
    assert isinstance(json_store, JsonFileStateStore)
    assert json_store.path.name == "image-data.json"


def test_state_store_interface_is_abstract():
    with pytest.raises(TypeError):
        ImageStateStore()

    class LoadOnly(ImageStateStore):
        def load(self):
            return []

    with pytest.raises(TypeError):
        LoadOnly()


def test_non_list_state_file_is_logged(tmp_path):
    from loguru import logger

    path = tmp_path / "state.json"
    path.write_text(json.dumps({"id": "1"}))
    messages = []
    sink_id = logger.add(messages.append, level="ERROR")
    try:
        with pytest.raises(StateFileError):
            JsonFileStateStore(path).load()
    finally:
        logger.remove(sink_id)

    assert any("does not contain a JSON list" in str(m) for m in messages)
