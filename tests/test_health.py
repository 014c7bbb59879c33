# tests/test_health.py
import pytest
from httpx import ASGITransport, AsyncClient

from fitpulse.main import app


@pytest.mark.asyncio
async def test_health_responds() -> None:
    """The health endpoint answers without touching the database."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
