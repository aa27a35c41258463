"""
Generative AI integration: prompt builders, the generateContent client and
response decoding.
"""

from .generative_client import (
    GenerativeAIClient,
    GenerativeAITransportError,
    format_upstream_error,
)
from .prompts import NO_ACTIVITY_SUMMARY, build_activity_prompt, build_extraction_prompt
from .response_parser import (
    ExtractionParseError,
    MissingExtractedFieldError,
    ResponseFormatError,
    parse_extraction,
    parse_summary,
)

__all__ = [
    "GenerativeAIClient",
    "GenerativeAITransportError",
    "format_upstream_error",
    "NO_ACTIVITY_SUMMARY",
    "build_activity_prompt",
    "build_extraction_prompt",
    "ExtractionParseError",
    "MissingExtractedFieldError",
    "ResponseFormatError",
    "parse_extraction",
    "parse_summary",
]
