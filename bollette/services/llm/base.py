from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class BaseLLMClient(Protocol):
    async def generate_structured(self, prompt: str, **kwargs: Any) -> dict[str, Any]:
        """Return the model answer as a JSON object.

        Raises MalformedUpstreamJSONError for non-JSON answers and
        UpstreamServiceError when the service call itself fails.
        """
        ...
