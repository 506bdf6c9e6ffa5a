from typing import Annotated
from fastapi import Depends, HTTPException
from bollette.services.ocr.base import BaseOcrClient
from bollette.services.llm.base import BaseLLMClient
from bollette.state import global_state


async def get_ocr_client() -> BaseOcrClient:
    if not global_state.ocr_client:
        raise HTTPException(status_code=503, detail="OCR Service not initialized")
    return global_state.ocr_client


async def get_optional_llm_client() -> BaseLLMClient | None:
    """The rule strategy works without an LLM; routes decide when it is required."""
    return global_state.llm_client


OCRClientDep = Annotated[BaseOcrClient, Depends(get_ocr_client)]
OptionalLLMClientDep = Annotated[BaseLLMClient | None, Depends(get_optional_llm_client)]
