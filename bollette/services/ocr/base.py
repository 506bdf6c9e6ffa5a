from typing import Protocol, runtime_checkable

from bollette.schemas.ocr import OcrText


@runtime_checkable
class BaseOcrClient(Protocol):
    async def extract(
        self,
        source: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> OcrText:
        """Run OCR on the provided image/PDF bytes and return the plain text."""
        ...
