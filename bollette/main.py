import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from bollette.api.routes.health import router as health_router
from bollette.api.routes.bill import router as bill_router
from bollette.core.config import settings
from bollette.services.ocr.ocr_space import OcrSpaceClient
from bollette.services.llm.openai_client import OpenAIClient
from bollette.state import global_state

from bollette.core.logging import setup_logging

# configure logging before the app is created
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting bill extraction service (env=%s)...", settings.app_env)

    if settings.ocr_space_api_key:
        logger.info("Initializing OCR.space client...")
        global_state.ocr_client = OcrSpaceClient()
    else:
        logger.warning("OCR_SPACE_API_KEY not set: /api/bill/extract disabled")

    if settings.llm_nodes:
        logger.info("Initializing LLM client (%d nodes)...", len(settings.llm_nodes))
        global_state.llm_client = OpenAIClient()
    else:
        logger.warning("LLM_NODES not set: llm strategy disabled")

    logger.info("System ready!")
    yield
    logger.info("Shutting down service...")
    if isinstance(global_state.ocr_client, OcrSpaceClient):
        await global_state.ocr_client.aclose()
    global_state.ocr_client = None
    global_state.llm_client = None


app = FastAPI(title="Bollette Extraction Service", lifespan=lifespan)

app.include_router(health_router, prefix="/api")
app.include_router(bill_router, prefix="/api")
