"""
Decoding of generateContent responses into summary text or expense fields.
"""

import json
import re

from pydantic import ValidationError

from account_insights.models.domain.expense_domain import ExpenseExtraction
from account_insights.models.domain.generative_domain import GenerateContentResponse

_FENCE_OPEN = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```\s*$")

_REQUIRED_KEYS = ("vendorName", "price", "expenseDate", "expenseDetail")


class ResponseFormatError(Exception):
    """Well-formed (or malformed) body that does not match the expected response shape."""

    def __init__(self, message: str, body: str | None = None):
        super().__init__(message)
        self.body = body


class ExtractionParseError(Exception):
    """Generated text could not be read as a JSON object."""

    def __init__(self, message: str, text: str | None = None):
        super().__init__(message)
        self.text = text


class MissingExtractedFieldError(ExtractionParseError):
    """A required expense field is absent from the generated JSON."""

    def __init__(self, field: str, text: str | None = None):
        super().__init__(f"Missing required field in extraction: {field}", text=text)
        self.field = field


def decode_response(body: str) -> GenerateContentResponse:
    """
    Validate a response body against the declared schema.

    Raises:
        ResponseFormatError: If the body is not JSON or lacks candidates/content/parts/text
    """
    try:
        return GenerateContentResponse.model_validate_json(body)
    except ValidationError as e:
        missing = ", ".join(".".join(str(loc) for loc in err["loc"]) or "body" for err in e.errors())
        raise ResponseFormatError(
            f"Invalid response format: expected candidates[0].content.parts[0].text ({missing})",
            body=body,
        ) from e


def parse_summary(body: str) -> str:
    """Return the generated text of the first candidate."""
    return decode_response(body).first_text()


def strip_code_fences(text: str) -> str:
    """Remove a leading ```json / ``` marker and a trailing ``` marker."""
    text = _FENCE_OPEN.sub("", text, count=1)
    return _FENCE_CLOSE.sub("", text, count=1).strip()


def parse_extraction_text(text: str) -> ExpenseExtraction:
    """
    Read generated text as the four expense fields.

    Raises:
        ExtractionParseError: If the text is not a JSON object
        MissingExtractedFieldError: If a required key is absent
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ExtractionParseError(f"Extraction is not valid JSON: {e}", text=cleaned) from e

    if not isinstance(data, dict):
        raise ExtractionParseError("Extraction is not a JSON object", text=cleaned)

    for key in _REQUIRED_KEYS:
        if key not in data:
            raise MissingExtractedFieldError(key, text=cleaned)

    return ExpenseExtraction(
        **{key: "" if data[key] is None else str(data[key]) for key in _REQUIRED_KEYS}
    )


def parse_extraction(body: str) -> ExpenseExtraction:
    """Decode the response body, then read its generated text as expense fields."""
    return parse_extraction_text(parse_summary(body))
