from __future__ import annotations

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from bill_samples import SCENARIO_A, SCENARIO_A_LLM_PAYLOAD, SCENARIO_C
from bollette.api.deps import get_ocr_client, get_optional_llm_client
from bollette.core.errors import UpstreamServiceError
from bollette.main import app
from bollette.schemas.ocr import OcrText


class FakeOcrClient:
    def __init__(self, text: str) -> None:
        self.text = text

    async def extract(self, *_args, **_kwargs) -> OcrText:
        return OcrText(text=self.text)


class FakeLLMClient:
    def __init__(self, payload: dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.payload = payload or {}
        self.error = error

    async def generate_structured(self, prompt: str, **_kwargs: Any) -> dict[str, Any]:
        if self.error is not None:
            raise self.error
        return dict(self.payload)


@pytest.fixture(autouse=True)
def _reset_overrides():
    yield
    app.dependency_overrides.clear()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.asyncio
async def test_extract_text_with_rules() -> None:
    async with _client() as client:
        response = await client.post("/api/bill/extract-text", json={"text": SCENARIO_A, "energy_type": "luce"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["strategy"] == "rules"
    assert body["energy_type"] == "electricity"
    assert body["data"]["consumption"] == 86
    assert body["data"]["total"] == 78.52
    assert body["data"]["fixed_fee"] == {"periodic": 39.1, "annual": 234.6}


@pytest.mark.asyncio
async def test_extract_text_reports_missing_fields() -> None:
    async with _client() as client:
        response = await client.post("/api/bill/extract-text", json={"text": SCENARIO_C})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Consumption/total not found in bill text."
    assert body["errors"] == ["mandatory_fields_missing:total"]
    assert len(body["raw_text_preview"]) == 500


@pytest.mark.asyncio
async def test_extract_text_rejects_short_text() -> None:
    async with _client() as client:
        response = await client.post("/api/bill/extract-text", json={"text": "Totale 10,00 €"})

    assert response.status_code == 400
    assert response.json()["detail"]["errors"] == ["input_too_short"]


@pytest.mark.asyncio
async def test_extract_text_rejects_unknown_strategy() -> None:
    async with _client() as client:
        response = await client.post("/api/bill/extract-text", json={"text": SCENARIO_A, "strategy": "regex"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_extract_text_llm_requires_client() -> None:
    app.dependency_overrides[get_optional_llm_client] = lambda: None

    async with _client() as client:
        response = await client.post("/api/bill/extract-text", json={"text": SCENARIO_A, "strategy": "llm"})

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_extract_text_with_llm() -> None:
    app.dependency_overrides[get_optional_llm_client] = lambda: FakeLLMClient(SCENARIO_A_LLM_PAYLOAD)

    async with _client() as client:
        response = await client.post("/api/bill/extract-text", json={"text": SCENARIO_A, "strategy": "llm"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["strategy"] == "llm"
    assert body["data"]["annual_spend"] == 471.12


@pytest.mark.asyncio
async def test_extract_text_llm_upstream_failure() -> None:
    app.dependency_overrides[get_optional_llm_client] = lambda: FakeLLMClient(
        error=UpstreamServiceError("LLM request failed: timeout")
    )

    async with _client() as client:
        response = await client.post("/api/bill/extract-text", json={"text": SCENARIO_A, "strategy": "llm"})

    assert response.status_code == 502
    assert response.json()["detail"]["errors"] == ["upstream_service_failure"]


@pytest.mark.asyncio
async def test_extract_upload_without_ocr_service() -> None:
    async with _client() as client:
        response = await client.post(
            "/api/bill/extract",
            files={"file": ("bolletta.pdf", b"%PDF-1.4", "application/pdf")},
        )

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_extract_upload_runs_ocr_then_rules() -> None:
    app.dependency_overrides[get_ocr_client] = lambda: FakeOcrClient(SCENARIO_A)

    async with _client() as client:
        response = await client.post(
            "/api/bill/extract",
            params={"energy_type": "luce"},
            files={"file": ("bolletta.pdf", b"%PDF-1.4", "application/pdf")},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["operator"] == "IREN Mercato"
    assert body["data"]["months"] == 2


@pytest.mark.asyncio
async def test_extract_upload_rejects_unsupported_type() -> None:
    app.dependency_overrides[get_ocr_client] = lambda: FakeOcrClient(SCENARIO_A)

    async with _client() as client:
        response = await client.post(
            "/api/bill/extract",
            files={"file": ("bolletta.txt", b"testo", "text/plain")},
        )

    assert response.status_code == 415


@pytest.mark.asyncio
async def test_extract_upload_rejects_empty_file() -> None:
    app.dependency_overrides[get_ocr_client] = lambda: FakeOcrClient(SCENARIO_A)

    async with _client() as client:
        response = await client.post(
            "/api/bill/extract",
            files={"file": ("bolletta.png", b"", "image/png")},
        )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_extract_upload_short_ocr_text() -> None:
    app.dependency_overrides[get_ocr_client] = lambda: FakeOcrClient("pagina vuota")

    async with _client() as client:
        response = await client.post(
            "/api/bill/extract",
            files={"file": ("bolletta.png", b"\x89PNG", "image/png")},
        )

    assert response.status_code == 422
    assert response.json()["detail"]["errors"] == ["input_too_short"]
