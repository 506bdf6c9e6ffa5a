from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LlmNode(BaseModel):
    name: str
    base_url: str
    api_key: str
    model: str

    @field_validator("name")
    @classmethod
    def _lowercase_name(cls, value: str) -> str:
        """Normalize node name for case-insensitive matching."""

        return value.strip().lower()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_env: str = "dev"
    log_level: str = "info"
    log_dir: str = "logs"

    # Text accepted by the extraction engine
    min_text_length: int = Field(default=50, ge=1)
    preview_chars: int = Field(default=500, ge=0)
    llm_max_text_chars: int = Field(default=15000, ge=1)

    llm_nodes: list[LlmNode] = Field(default_factory=list)

    ocr_space_api_key: str | None = None
    ocr_space_url: str = "https://api.ocr.space/parse/image"
    ocr_language: str = "ita"
    ocr_timeout: float = 60.0

    @field_validator("llm_nodes")
    @classmethod
    def _ensure_unique_nodes(cls, value: list[LlmNode]) -> list[LlmNode]:
        seen = set()
        deduped: list[LlmNode] = []
        for node in value:
            if node.name in seen:
                raise ValueError(f"Duplicate LLM node name: {node.name}")
            seen.add(node.name)
            deduped.append(node)
        return deduped


settings = Settings()
