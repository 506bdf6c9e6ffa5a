import logging
from typing import Final

from fastapi import APIRouter, File, HTTPException, Query, UploadFile, status

from bollette.api.deps import OCRClientDep, OptionalLLMClientDep
from bollette.core.errors import InputTooShortError, UpstreamServiceError
from bollette.schemas.bill import EnergyType, ExtractionResponse, TextExtractionRequest
from bollette.services.pipelines.factory import build_pipeline
from bollette.services.pipelines.ocr import OcrBillPipeline

router = APIRouter(prefix="/bill", tags=["bill"])

logger = logging.getLogger(__name__)
ALLOWED_CONTENT_TYPES: Final[set[str]] = {
    "image/png",
    "image/jpeg",
    "image/jpg",
    "application/pdf",
}


@router.post(
    "/extract",
    summary="Extract bill fields from an uploaded scan",
    response_model=ExtractionResponse,
)
async def extract_bill(
    ocr_client: OCRClientDep,
    file: UploadFile = File(..., description="Bill image or PDF"),
    energy_type: str | None = Query(default=None, description="'luce'/'electricity' or 'gas'"),
) -> ExtractionResponse:
    """Run OCR then the rule-based extraction on an uploaded file."""

    content_type = (file.content_type or "").lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported file type: {file.content_type}",
        )

    try:
        payload = await file.read()
    except Exception as exc:  # pragma: no cover - upload IO errors are rare
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to read uploaded file.",
        ) from exc

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty.",
        )

    pipeline = OcrBillPipeline(ocr_client=ocr_client)
    try:
        result = await pipeline.run(
            payload,
            EnergyType.parse(energy_type),
            filename=file.filename,
            content_type=file.content_type,
        )
    except InputTooShortError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "OCR text too short.", "errors": [exc.code]},
        ) from exc
    except UpstreamServiceError as exc:
        logger.warning("Bill extraction failed upstream: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": str(exc), "errors": [exc.code]},
        ) from exc

    return ExtractionResponse.from_result(result)


@router.post(
    "/extract-text",
    summary="Extract bill fields from text",
    response_model=ExtractionResponse,
)
async def extract_bill_text(
    request: TextExtractionRequest,
    llm_client: OptionalLLMClientDep,
) -> ExtractionResponse:
    """Run the selected strategy (rules or llm) on already extracted text."""

    try:
        pipeline = build_pipeline(request.strategy, llm_client=llm_client)
    except LookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="LLM Service not initialized",
        ) from exc

    try:
        result = await pipeline.run(request.text, EnergyType.parse(request.energy_type))
    except InputTooShortError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "errors": [exc.code]},
        ) from exc
    except UpstreamServiceError as exc:
        logger.warning("Bill extraction failed upstream: strategy=%s error=%s", request.strategy, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": str(exc), "errors": [exc.code]},
        ) from exc

    return ExtractionResponse.from_result(result)
