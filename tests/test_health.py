import asyncio

from asset_server.core.container import ApplicationContainer
from asset_server.interfaces.http.routers.health import health


def test_health_reports_database(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": {"status": "ok", "database": "ok"}}


def test_health_is_unavailable_before_open(settings):
    r = asyncio.run(health(ApplicationContainer(settings=settings)))
    assert r.status_code == 503


def test_unknown_route_uses_envelope(client):
    r = client.get("/nope")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Not Found"}
