from fastapi.testclient import TestClient

from asset_server.core.security import create_access_token
from asset_server.main import create_app


def test_other_principal_cannot_read_update_or_delete(client, auth_headers, create_asset):
    created = create_asset(owner="u1", description="mine")
    intruder = auth_headers("u2")

    r = client.get(f"/assets/{created['id']}", headers=intruder)
    assert r.status_code == 403
    assert r.json() == {"success": False, "error": "Forbidden"}

    r = client.patch(f"/assets/{created['id']}", json={"name": "Stolen"}, headers=intruder)
    assert r.status_code == 403

    r = client.delete(f"/assets/{created['id']}", headers=intruder)
    assert r.status_code == 403

    r = client.get(f"/assets/{created['id']}", headers=auth_headers("u1"))
    assert r.status_code == 200
    assert r.json()["data"] == created


def test_missing_asset_is_404_for_any_principal(client, auth_headers):
    r = client.delete("/assets/does-not-exist", headers=auth_headers("u2"))
    assert r.status_code == 404


def test_create_for_another_owner_is_forbidden(client, auth_headers):
    r = client.post(
        "/assets",
        json={"ownerId": "u2", "name": "Laptop", "category": "other"},
        headers=auth_headers("u1"),
    )
    assert r.status_code == 403
    r = client.get("/assets", headers=auth_headers("u2"))
    assert r.json()["data"]["pagination"]["total"] == 0


def test_list_only_returns_callers_assets(client, auth_headers, create_asset):
    create_asset(owner="u1", name="One")
    create_asset(owner="u2", name="Two")

    r = client.get("/assets", headers=auth_headers("u1"))
    names = [a["name"] for a in r.json()["data"]["assets"]]
    assert names == ["One"]

    r = client.get("/assets", params={"ownerId": "u2"}, headers=auth_headers("u1"))
    data = r.json()["data"]
    assert data["assets"] == []
    assert data["pagination"]["total"] == 0


def test_image_key_must_stay_in_owner_folder(client, auth_headers):
    headers = auth_headers("u1")
    base = {"ownerId": "u1", "name": "Photo", "category": "image"}

    r = client.post("/assets", json={**base, "imageKey": "assets/u2/x/photo.png"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["field"] == "imageKey"

    r = client.post("/assets", json={**base, "imageKey": "assets/u1/../u2/photo.png"}, headers=headers)
    assert r.status_code == 400

    r = client.post("/assets", json={**base, "imageKey": "assets/u1/x/photo.png"}, headers=headers)
    assert r.status_code == 201
    assert r.json()["data"]["imageKey"] == "assets/u1/x/photo.png"


def test_reads_can_be_opened_to_other_principals(settings_factory):
    settings = settings_factory(owner_only_reads=False)
    owner = {"Authorization": f"Bearer {create_access_token('u1', settings)}"}
    other = {"Authorization": f"Bearer {create_access_token('u2', settings)}"}

    with TestClient(create_app(settings)) as client:
        r = client.post("/assets", json={"ownerId": "u1", "name": "Shared", "category": "other"}, headers=owner)
        asset_id = r.json()["data"]["id"]

        assert client.get(f"/assets/{asset_id}", headers=other).status_code == 200
        assert client.patch(f"/assets/{asset_id}", json={"name": "x"}, headers=other).status_code == 403
        assert client.delete(f"/assets/{asset_id}", headers=other).status_code == 403
