import pytest
from httpx import ASGITransport, AsyncClient

from bollette.main import app


@pytest.mark.asyncio
async def test_health() -> None:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "ocr_enabled": False, "llm_enabled": False}
