from bollette.services.ocr.base import BaseOcrClient
from bollette.services.llm.base import BaseLLMClient


class AppState:
    ocr_client: BaseOcrClient | None = None
    llm_client: BaseLLMClient | None = None


global_state = AppState()
