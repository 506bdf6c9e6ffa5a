from pydantic import BaseModel, Field


class OcrText(BaseModel):
    """Plain text returned by an OCR collaborator for one document."""

    text: str = Field(default="", description="Extracted text, pages joined by newlines")
    is_errored: bool = Field(default=False, description="Collaborator reported a processing error")
    error_message: str | None = Field(default=None, description="Collaborator error message, if any")
