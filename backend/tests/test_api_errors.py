"""Unexpected failures render the generic error envelope."""
import logging

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notekeeper.core.dependencies import get_db
from notekeeper.main import app


@pytest_asyncio.fixture
async def broken_db_client():
    async def failing_get_db():
        raise RuntimeError("database exploded: password=hunter2")
        yield

    app.dependency_overrides[get_db] = failing_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def test_unexpected_error_hides_internals(broken_db_client):
    resp = await broken_db_client.post("/users/register", json={"username": "alice", "password": "secret1"})

    assert resp.status_code == 500
    assert resp.json() == {"status": "Error", "error": "internal error"}
    assert "hunter2" not in resp.text


async def test_unexpected_error_keeps_request_id(broken_db_client, caplog):
    caplog.set_level(logging.ERROR, logger="notekeeper.api.errors")

    resp = await broken_db_client.post(
        "/users/login",
        json={"username": "alice", "password": "secret1"},
        headers={"X-Request-ID": "rid-777"},
    )

    assert resp.status_code == 500
    assert resp.headers["X-Request-ID"] == "rid-777"
    records = [r for r in caplog.records if r.getMessage().startswith("unexpected error")]
    assert len(records) == 1
    assert records[0].request_id == "rid-777"
    assert isinstance(records[0].exc_info[1], RuntimeError)
