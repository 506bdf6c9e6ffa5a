from __future__ import annotations

import logging
from typing import Any

import httpx

from bollette.core.config import settings
from bollette.core.errors import MalformedUpstreamJSONError, UpstreamServiceError
from bollette.schemas.ocr import OcrText
from bollette.services.ocr.base import BaseOcrClient

logger = logging.getLogger(__name__)


class OcrSpaceClient(BaseOcrClient):
    """Calls the OCR.space parse/image endpoint and returns the joined page text."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        url: str | None = None,
        language: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key or settings.ocr_space_api_key
        if not self.api_key:
            raise ValueError("OCR_SPACE_API_KEY is not configured")
        self.url = url or settings.ocr_space_url
        self.language = language or settings.ocr_language
        self._client = http_client or httpx.AsyncClient(timeout=timeout or settings.ocr_timeout)

    async def extract(
        self,
        source: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> OcrText:
        files = {"file": (filename or "bolletta", source, content_type or "application/octet-stream")}
        data = {
            "language": self.language,
            "OCREngine": "2",
            "scale": "true",
            "isTable": "false",
        }
        response_json = await self._post(data, files)
        result = self._parse_payload(response_json)
        logger.info(
            "OCR.space finished: file=%s chars=%d errored=%s",
            filename or "bytes",
            len(result.text),
            result.is_errored,
        )
        return result

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, data: dict[str, str], files: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(
                self.url,
                data=data,
                files=files,
                headers={"apikey": self.api_key},
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamServiceError(f"OCR request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedUpstreamJSONError("OCR response is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise MalformedUpstreamJSONError("OCR response is not a JSON object")
        return payload

    def _parse_payload(self, payload: dict[str, Any]) -> OcrText:
        if payload.get("IsErroredOnProcessing"):
            return OcrText(is_errored=True, error_message=self._error_message(payload) or "OCR processing error")

        pages = payload.get("ParsedResults") or []
        text = "\n".join(str(page.get("ParsedText") or "") for page in pages if isinstance(page, dict))
        return OcrText(text=text.strip())

    def _error_message(self, payload: dict[str, Any]) -> str | None:
        message = payload.get("ErrorMessage")
        if isinstance(message, list):
            return "; ".join(str(item) for item in message if item) or None
        return str(message) if message else None
