"""Usage: error taxonomy shared by pipelines, collaborator clients and routes."""

from __future__ import annotations

INPUT_TOO_SHORT = "input_too_short"
NO_PLAUSIBLE_MATCH = "no_plausible_match"
AMBIGUOUS_NUMERIC_FORMAT = "ambiguous_numeric_format"
MANDATORY_FIELDS_MISSING = "mandatory_fields_missing"
UPSTREAM_SERVICE_FAILURE = "upstream_service_failure"
MALFORMED_UPSTREAM_JSON = "malformed_upstream_json"


class BillExtractionError(Exception):
    """Base class for errors surfaced to callers of the extraction pipelines."""

    code = "bill_extraction_error"


class InputTooShortError(BillExtractionError):
    code = INPUT_TOO_SHORT

    def __init__(self, length: int, minimum: int) -> None:
        super().__init__(f"Text too short: {length} chars (minimum {minimum})")
        self.length = length
        self.minimum = minimum


class UpstreamServiceError(BillExtractionError):
    """OCR or LLM collaborator failed; never retried here."""

    code = UPSTREAM_SERVICE_FAILURE


class MalformedUpstreamJSONError(UpstreamServiceError):
    code = MALFORMED_UPSTREAM_JSON


def field_code(code: str, field: str) -> str:
    return f"{code}:{field}"
