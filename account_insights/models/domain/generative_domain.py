"""
Generative AI Domain Models
Request envelope and declared response schema for the generateContent API.

Response decoding validates against these models instead of walking an
untyped dict, so a missing key or an empty list fails in one place.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field


class InlineData(BaseModel):
    mime_type: str
    data: str  # base64


class RequestPart(BaseModel):
    text: str | None = None
    inline_data: InlineData | None = None


class RequestContent(BaseModel):
    parts: list[RequestPart]


class GenerateContentRequest(BaseModel):
    """Outbound body: {"contents": [{"parts": [...]}]}"""

    contents: list[RequestContent]

    @classmethod
    def from_prompt(
        cls, prompt: str, mime_type: str | None = None, data: str | None = None
    ) -> "GenerateContentRequest":
        parts = [RequestPart(text=prompt)]
        if mime_type and data:
            parts.append(RequestPart(inline_data=InlineData(mime_type=mime_type, data=data)))
        return cls(contents=[RequestContent(parts=parts)])

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class ResponsePart(BaseModel):
    text: str


class ResponseContent(BaseModel):
    parts: list[ResponsePart] = Field(..., min_length=1)


class Candidate(BaseModel):
    content: ResponseContent


class GenerateContentResponse(BaseModel):
    """Expected success body: {"candidates": [{"content": {"parts": [{"text": ...}]}}]}"""

    candidates: list[Candidate] = Field(..., min_length=1)

    def first_text(self) -> str:
        # Only the first candidate and first part are used
        return self.candidates[0].content.parts[0].text


@dataclass(slots=True)
class RawModelResponse:
    """HTTP-level result of one generateContent call."""

    status_code: int
    reason_phrase: str
    body: str

    @property
    def is_ok(self) -> bool:
        return self.status_code == 200
