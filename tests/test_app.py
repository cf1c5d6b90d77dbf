from pathlib import Path

from newsportal.config import get_settings

from .helpers import PNG_BYTES


async def test_health(async_client):
    response = await async_client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "healthy"


async def test_uploads_served_with_cross_origin_headers(async_client):
    settings = get_settings()
    Path(settings.upload_dir, "served.png").write_bytes(PNG_BYTES)

    response = await async_client.get("/uploads/served.png")

    assert response.status_code == 200
    assert response.content == PNG_BYTES
    assert response.headers["cross-origin-resource-policy"] == "cross-origin"
    assert response.headers["access-control-allow-origin"] == "*"
    assert "max-age=" in response.headers["cache-control"]


async def test_unknown_route_uses_envelope(async_client):
    response = await async_client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json()["success"] is False
