import json
import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from starlette.requests import Request
from app import config
from app.utils.error_handlers import database_exception_handler, unhandled_exception_handler


def _request(path="/api/complaints"):
    return Request({
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("test", 80),
        "path": path,
        "root_path": "",
        "query_string": b"",
        "headers": [],
    })


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client: AsyncClient):
    response = await client.get("/api/does-not-exist")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert body["error"]["message"] == "Resource not found"
    assert body["timestamp"]
    assert "message" in body
    assert body["message"] is None


@pytest.mark.asyncio
async def test_malformed_json_is_validation_error(client: AsyncClient):
    response = await client.post(
        "/api/users/register",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_non_integer_path_id_is_validation_error(client: AsyncClient, users, act_as, auth_headers):
    act_as("staff-1")
    response = await client.get("/api/complaints/abc", headers=auth_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unhandled_exception_hides_details(monkeypatch):
    monkeypatch.setattr(config, "APP_ENV", "production")
    response = await unhandled_exception_handler(_request(), RuntimeError("boom"))

    assert response.status_code == 500
    body = json.loads(response.body)
    assert body["success"] is False
    assert body["error"]["code"] == "INTERNAL_ERROR"
    assert body["error"]["details"] is None


@pytest.mark.asyncio
async def test_unhandled_exception_details_in_development(monkeypatch):
    monkeypatch.setattr(config, "APP_ENV", "development")
    response = await unhandled_exception_handler(_request(), RuntimeError("boom"))

    body = json.loads(response.body)
    assert "boom" in body["error"]["details"]


@pytest.mark.asyncio
async def test_database_error_envelope():
    exc = OperationalError("SELECT 1", {}, Exception("connection refused"))
    response = await database_exception_handler(_request(), exc)

    assert response.status_code == 500
    body = json.loads(response.body)
    assert body["error"]["code"] == "DATABASE_ERROR"
    assert body["error"]["message"] == "Database error occurred"
