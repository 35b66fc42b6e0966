from datetime import datetime


def test_create_rejects_unknown_category(client, auth_headers):
    r = client.post(
        "/assets",
        json={"ownerId": "u1", "name": "Laptop", "category": "Electronics", "description": "dev box"},
        headers=auth_headers("u1"),
    )
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["field"] == "category"
    assert "image, document, video, other" in body["error"]


def test_create_returns_full_asset(client, auth_headers):
    r = client.post(
        "/assets",
        json={"ownerId": "u1", "name": "Laptop", "category": "other"},
        headers=auth_headers("u1"),
    )
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    data = body["data"]
    assert data["id"]
    assert data["ownerId"] == "u1"
    assert data["name"] == "Laptop"
    assert data["category"] == "other"
    assert data["description"] is None
    assert data["imageKey"] is None
    assert data["createdAt"]
    assert data["updatedAt"]


def test_create_trims_and_lowercases(create_asset):
    data = create_asset(name="  Camera  ", category="IMAGE", description="  ")
    assert data["name"] == "Camera"
    assert data["category"] == "image"
    assert data["description"] is None


def test_create_generates_unique_ids(create_asset):
    ids = {create_asset(name=f"Item {i}")["id"] for i in range(10)}
    assert len(ids) == 10


def test_create_name_boundaries(client, auth_headers):
    headers = auth_headers("u1")
    for name, expected in (("a", 201), ("a" * 255, 201), ("", 400), ("a" * 256, 400)):
        r = client.post("/assets", json={"ownerId": "u1", "name": name, "category": "other"}, headers=headers)
        assert r.status_code == expected, name
        if expected == 400:
            assert r.json()["field"] == "name"


def test_create_requires_body(client, auth_headers):
    r = client.post("/assets", headers=auth_headers("u1"))
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Request body is required", "field": None}


def test_create_rejects_malformed_json(client, auth_headers):
    headers = {**auth_headers("u1"), "Content-Type": "application/json"}
    r = client.post("/assets", content=b"{not json", headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid JSON in request body"


def test_get_missing_asset_returns_404(client, auth_headers):
    r = client.get("/assets/00000000-0000-0000-0000-000000000000", headers=auth_headers("u1"))
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Asset not found"}


def test_get_returns_asset(client, auth_headers, create_asset):
    created = create_asset()
    r = client.get(f"/assets/{created['id']}", headers=auth_headers("u1"))
    assert r.status_code == 200
    assert r.json()["data"] == created


def test_list_paginates_newest_first(client, auth_headers, create_asset):
    names = [f"Asset {i}" for i in range(5)]
    for name in names:
        create_asset(name=name)

    r = client.get("/assets", params={"ownerId": "u1", "limit": 2, "offset": 0}, headers=auth_headers("u1"))
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["pagination"] == {
        "total": 5,
        "limit": 2,
        "offset": 0,
        "currentPage": 1,
        "totalPages": 3,
        "hasMore": True,
    }
    assert [a["name"] for a in data["assets"]] == ["Asset 4", "Asset 3"]


def test_list_filters_by_category(client, auth_headers, create_asset):
    create_asset(name="Photo", category="image")
    create_asset(name="Contract", category="document")

    r = client.get("/assets", params={"category": "Image"}, headers=auth_headers("u1"))
    data = r.json()["data"]
    assert [a["name"] for a in data["assets"]] == ["Photo"]
    assert data["pagination"]["total"] == 1


def test_list_is_lenient_about_paging_params(client, auth_headers, create_asset):
    create_asset()
    headers = auth_headers("u1")

    r = client.get("/assets", params={"limit": "1000", "offset": "-3"}, headers=headers)
    assert r.json()["data"]["pagination"]["limit"] == 100
    assert r.json()["data"]["pagination"]["offset"] == 0

    for bad in ("0", "-1", "ten"):
        r = client.get("/assets", params={"limit": bad}, headers=headers)
        assert r.status_code == 200
        assert r.json()["data"]["pagination"]["limit"] == 10


def test_update_applies_only_supplied_fields(client, auth_headers, create_asset):
    created = create_asset(description="dev box")
    r = client.patch(
        f"/assets/{created['id']}",
        json={"name": "Work Laptop", "category": "Document"},
        headers=auth_headers("u1"),
    )
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["name"] == "Work Laptop"
    assert data["category"] == "document"
    assert data["description"] == "dev box"
    assert data["ownerId"] == "u1"
    assert data["createdAt"] == created["createdAt"]


def test_update_can_clear_description(client, auth_headers, create_asset):
    created = create_asset(description="dev box")
    r = client.patch(f"/assets/{created['id']}", json={"description": ""}, headers=auth_headers("u1"))
    assert r.status_code == 200
    assert r.json()["data"]["description"] is None


def test_update_with_empty_body_only_touches_updated_at(client, auth_headers, create_asset):
    created = create_asset()
    r = client.patch(f"/assets/{created['id']}", json={}, headers=auth_headers("u1"))
    assert r.status_code == 200
    data = r.json()["data"]
    assert {k: v for k, v in data.items() if k != "updatedAt"} == {
        k: v for k, v in created.items() if k != "updatedAt"
    }
    assert datetime.fromisoformat(data["updatedAt"]) > datetime.fromisoformat(created["updatedAt"])


def test_update_rejects_invalid_category(client, auth_headers, create_asset):
    created = create_asset()
    r = client.patch(f"/assets/{created['id']}", json={"category": "furniture"}, headers=auth_headers("u1"))
    assert r.status_code == 400
    assert r.json()["field"] == "category"
    assert client.get(f"/assets/{created['id']}", headers=auth_headers("u1")).json()["data"]["category"] == "other"


def test_update_rejects_owner_change(client, auth_headers, create_asset):
    created = create_asset()
    r = client.patch(f"/assets/{created['id']}", json={"ownerId": "u2"}, headers=auth_headers("u1"))
    assert r.status_code == 400
    assert r.json()["field"] == "ownerId"
    assert r.json()["error"] == "Owner ID cannot be changed"


def test_update_missing_asset_returns_404(client, auth_headers):
    r = client.patch("/assets/missing", json={"name": "x"}, headers=auth_headers("u1"))
    assert r.status_code == 404


def test_delete_then_get_returns_404(client, auth_headers, create_asset):
    created = create_asset()
    headers = auth_headers("u1")

    r = client.delete(f"/assets/{created['id']}", headers=headers)
    assert r.status_code == 204
    assert r.content == b""
    assert r.headers["Access-Control-Allow-Origin"] == "*"

    assert client.get(f"/assets/{created['id']}", headers=headers).status_code == 404


def test_delete_twice_returns_404(client, auth_headers, create_asset):
    created = create_asset()
    headers = auth_headers("u1")
    assert client.delete(f"/assets/{created['id']}", headers=headers).status_code == 204
    r = client.delete(f"/assets/{created['id']}", headers=headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Asset not found"


def test_responses_carry_cors_headers(client, auth_headers):
    r = client.get("/assets", headers=auth_headers("u1"))
    assert r.headers["Access-Control-Allow-Origin"] == "*"
    assert r.headers["Access-Control-Allow-Credentials"] == "true"
    assert r.headers["Content-Type"] == "application/json"
    assert r.headers["X-Request-ID"]


def test_list_clamps_huge_offset(client, auth_headers, create_asset):
    create_asset()
    r = client.get("/assets", params={"offset": "9223372036854775808"}, headers=auth_headers("u1"))
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["assets"] == []
    assert data["pagination"]["offset"] == 2**31 - 1
    assert data["pagination"]["total"] == 1
    assert data["pagination"]["hasMore"] is False
