from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from openai import OpenAIError

from bollette.core.config import LlmNode
from bollette.core.errors import MalformedUpstreamJSONError, UpstreamServiceError
from bollette.services.llm.openai_client import OpenAIClient, parse_json_content


class FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(completions: FakeCompletions) -> OpenAIClient:
    node = LlmNode(name="Main", base_url="http://llm.local/v1", api_key="test", model="gpt-test")
    fake = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIClient([node], clients={"main": fake})


@pytest.mark.asyncio
async def test_generate_structured_returns_parsed_json() -> None:
    completions = FakeCompletions('```json\n{"consumoPeriodo": 86, "spesaPeriodo": 78.52}\n```')

    result = await _client(completions).generate_structured("prompt")

    assert result == {"consumoPeriodo": 86, "spesaPeriodo": 78.52}
    call = completions.calls[0]
    assert call["model"] == "gpt-test"
    assert call["response_format"] == {"type": "json_object"}
    assert call["messages"] == [{"role": "user", "content": "prompt"}]


@pytest.mark.asyncio
async def test_generate_structured_wraps_sdk_errors() -> None:
    completions = FakeCompletions(error=OpenAIError("connection refused"))

    with pytest.raises(UpstreamServiceError, match="connection refused"):
        await _client(completions).generate_structured("prompt")


@pytest.mark.asyncio
async def test_generate_structured_rejects_non_json_answer() -> None:
    completions = FakeCompletions("Il totale è 78,52 euro")

    with pytest.raises(MalformedUpstreamJSONError) as exc_info:
        await _client(completions).generate_structured("prompt")

    assert exc_info.value.code == "malformed_upstream_json"


@pytest.mark.asyncio
async def test_generate_structured_rejects_unknown_node() -> None:
    with pytest.raises(ValueError, match="LLM node not found"):
        await _client(FakeCompletions("{}")).generate_structured("prompt", node_name="backup")


def test_client_requires_nodes(monkeypatch) -> None:
    monkeypatch.setattr("bollette.services.llm.openai_client.settings.llm_nodes", [])

    with pytest.raises(ValueError, match="No LLM nodes"):
        OpenAIClient()


@pytest.mark.parametrize("content", [None, "   ", "[1, 2]", "{not json"])
def test_parse_json_content_rejects_malformed_content(content) -> None:
    with pytest.raises(MalformedUpstreamJSONError):
        parse_json_content(content)


def test_parse_json_content_strips_bare_fences() -> None:
    assert parse_json_content('```\n{"mesi": 2}\n```') == {"mesi": 2}
