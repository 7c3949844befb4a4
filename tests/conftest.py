import pytest
from fastapi.testclient import TestClient

from buildconfig_demo.config import Settings
from buildconfig_demo.main import create_app


@pytest.fixture
def public_dir(tmp_path):
    path = tmp_path / "public"
    path.mkdir()
    return path


@pytest.fixture
def settings(public_dir):
    return Settings(public_dir=str(public_dir), environment="test")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)
