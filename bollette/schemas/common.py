from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    ocr_enabled: bool = Field(default=False, description="OCR collaborator configured (upload endpoint usable)")
    llm_enabled: bool = Field(default=False, description="LLM collaborator configured (llm strategy usable)")
