from fastapi import APIRouter

from bollette.schemas.common import HealthResponse
from bollette.state import global_state

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health() -> HealthResponse:
    """Liveness plus which collaborators were initialized at startup."""
    return HealthResponse(
        status="ok",
        ocr_enabled=global_state.ocr_client is not None,
        llm_enabled=global_state.llm_client is not None,
    )
