"""
Generative Language API client.
Sends one generateContent request per call and hands back the raw HTTP result.
"""

import httpx

from account_insights.config import GenerativeAIConfig
from account_insights.infrastructure.observability.logging import get_logger
from account_insights.models.domain.generative_domain import (
    GenerateContentRequest,
    RawModelResponse,
)

logger = get_logger(__name__)

AUTH_CONFIGURATION_HINT = "Please check the generative AI API key configuration."


def format_upstream_error(status_code: int, reason_phrase: str, body: str) -> str:
    """User-facing message for a non-200 response; 401 adds the key configuration hint."""
    message = f"Generative AI request failed with status {status_code} {reason_phrase}: {body}"
    if status_code == 401:
        message += f"\n{AUTH_CONFIGURATION_HINT}"
    return message


class GenerativeAITransportError(Exception):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, message: str, recoverable: bool = True):
        super().__init__(message)
        self.recoverable = recoverable


class GenerativeAIClient:
    """
    Client for the generateContent endpoint.

    Single attempt per call: there is no retry or backoff, and transport
    failures surface as GenerativeAITransportError.
    """

    def __init__(self, config: GenerativeAIConfig, client: httpx.AsyncClient | None = None):
        self.config = config
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(config.timeout_seconds))

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "GenerativeAIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def invoke(self, request: GenerateContentRequest) -> RawModelResponse:
        """
        POST the request envelope and return status, reason and body.

        Non-200 responses are returned, not raised; callers decide how to
        surface them.
        """
        url = self.config.endpoint_url()

        logger.info("Calling generative AI endpoint", model=self.config.model)

        try:
            response = await self._client.post(
                url,
                params={"key": self.config.api_key},
                headers={"Content-Type": "application/json"},
                json=request.to_payload(),
            )
        except httpx.RequestError as e:
            logger.error(
                "Generative AI request failed",
                model=self.config.model,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise GenerativeAITransportError(f"Generative AI request failed: {e}") from e

        logger.info(
            "Generative AI response received",
            model=self.config.model,
            status_code=response.status_code,
            response_size=len(response.text) if response.text else 0,
        )

        return RawModelResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            body=response.text,
        )
