"""Usage: bill extraction pipeline (OCR -> text strategy)."""

from __future__ import annotations

import logging
import time

from bollette.core.errors import UpstreamServiceError
from bollette.schemas.bill import BillExtractionResult, EnergyType
from bollette.services.ocr.base import BaseOcrClient
from bollette.services.pipelines.base import BaseBillPipeline
from bollette.services.pipelines.rules import RuleBillPipeline

logger = logging.getLogger(__name__)


class OcrBillPipeline:
    """Pipeline orchestrating OCR and a text extraction strategy."""

    def __init__(
        self,
        ocr_client: BaseOcrClient,
        *,
        text_pipeline: BaseBillPipeline | None = None,
    ) -> None:
        self.ocr_client = ocr_client
        self.text_pipeline = text_pipeline or RuleBillPipeline()

    async def run(
        self,
        source: bytes,
        energy_type: EnergyType | str | None = None,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> BillExtractionResult:
        """Execute OCR then the text strategy on the recognized text."""

        start_time = time.perf_counter()
        logger.info("[TIMER] Pipeline started for file: %s", filename)

        t0 = time.perf_counter()
        ocr_text = await self.ocr_client.extract(
            source,
            filename=filename,
            content_type=content_type,
        )
        ocr_duration = time.perf_counter() - t0
        logger.info("[TIMER] Step 1: OCR finished. Duration: %.4fs chars=%d", ocr_duration, len(ocr_text.text))

        if ocr_text.is_errored:
            logger.warning("OCR reported an error: %s", ocr_text.error_message)
            raise UpstreamServiceError(ocr_text.error_message or "OCR processing error")

        result = await self.text_pipeline.run(ocr_text.text, energy_type)
        if not result.complete:
            logger.warning(
                "Bill extraction incomplete: strategy=%s errors=%s",
                result.strategy,
                result.errors,
            )

        total_duration = time.perf_counter() - start_time
        logger.info(
            "[TIMER] Pipeline completed. Total: %.4fs (OCR: %.2fs)",
            total_duration,
            ocr_duration,
        )
        return result
