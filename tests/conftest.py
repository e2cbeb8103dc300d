import pytest
from fastapi.testclient import TestClient

from gallery_api.app import create_app
from shared.config import Settings

IMAGE_NAMES = ["c-sunset.jpg", "a-beach.png", "b-forest.jpg"]


@pytest.fixture
def images_dir(tmp_path):
    folder = tmp_path / "public" / "images"
    folder.mkdir(parents=True)
    for name in IMAGE_NAMES:
        (folder / name).write_bytes(b"\x89fake-image-bytes")
    return folder


@pytest.fixture
def make_settings(tmp_path, images_dir):
    def _make(**overrides):
        values = {
            "images_dir": str(images_dir),
            "state_file": str(tmp_path / "data" / "image-data.json"),
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def graphql(client, query, variables=None, path="/graphql"):
    payload = {"query": query}
    if variables is not None:
        payload["variables"] = variables
    response = client.post(path, json=payload)
    assert response.status_code == 200
    return response.json()
