from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from asset_server.core.config import AssetSettings, DatabaseSettings, SecuritySettings, Settings, StorageSettings
from asset_server.core.security import create_access_token
from asset_server.main import create_app


def make_settings(tmp_path: Path, **assets_overrides) -> Settings:
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'assets-test.db'}"),
        security=SecuritySettings(secret_key="test-secret-key-123"),
        storage=StorageSettings(local_dir=tmp_path / "blobs", max_upload_bytes=1024),
        assets=AssetSettings(**assets_overrides),
    )


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture()
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(settings) -> Callable[[str], dict[str, str]]:
    def _headers(principal_id: str) -> dict[str, str]:
        token = create_access_token(principal_id, settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def create_asset(client, auth_headers):
    def _create(owner: str = "u1", **fields) -> dict:
        body = {"ownerId": owner, "name": "Laptop", "category": "other"}
        body.update(fields)
        r = client.post("/assets", json=body, headers=auth_headers(owner))
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _create


@pytest.fixture()
def settings_factory(tmp_path) -> Callable[..., Settings]:
    def _factory(**assets_overrides) -> Settings:
        return make_settings(tmp_path, **assets_overrides)

    return _factory
