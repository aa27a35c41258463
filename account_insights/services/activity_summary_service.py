"""
Activity Summary Service
Reads recent account activity, normalizes it and asks the generative model
for a briefing. Every outcome, including failures, comes back as an
ActivitySummaryResult.
"""

from account_insights.config import GenerativeAIConfig, MissingConfigurationError, settings
from account_insights.infrastructure.observability.logging import get_logger
from account_insights.models.domain.activity_domain import ActivitySummaryResult
from account_insights.models.domain.generative_domain import GenerateContentRequest
from account_insights.repositories.activity_repository import ActivityRepository
from account_insights.services.activity.normalizer import normalize_activity
from account_insights.services.ai.generative_client import GenerativeAIClient, format_upstream_error
from account_insights.services.ai.prompts import NO_ACTIVITY_SUMMARY, build_activity_prompt
from account_insights.services.ai.response_parser import ResponseFormatError, parse_summary

logger = get_logger(__name__)


class ActivityValidationError(Exception):
    """Raised when a summary request is missing required input."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ActivitySummaryService:
    """
    Orchestrates selector -> normalizer -> prompt -> model call -> parse.

    Configuration is resolved per call unless injected, so a missing API key
    is reported as a failed result rather than an import-time error.
    """

    def __init__(
        self,
        repository: type[ActivityRepository] = ActivityRepository,
        config: GenerativeAIConfig | None = None,
    ):
        self.repository = repository
        self._config = config

    def _client(self) -> GenerativeAIClient:
        config = self._config or settings.generative_ai_config()
        return GenerativeAIClient(config)

    async def generate_summary(
        self, account_id: str | None, limit: int | None = None
    ) -> ActivitySummaryResult:
        try:
            return await self._run(account_id, limit)
        except ActivityValidationError as e:
            logger.warning("Activity summary request rejected", error=str(e))
            return ActivitySummaryResult.failure(str(e))
        except MissingConfigurationError as e:
            logger.error("Activity summary not configured", setting=e.setting)
            return ActivitySummaryResult.failure(str(e))
        except ResponseFormatError as e:
            logger.error("Activity summary response malformed", account_id=account_id, error=str(e))
            return ActivitySummaryResult.failure(str(e), status_code=200)
        except Exception as e:
            logger.exception(
                "Unexpected error generating activity summary",
                account_id=account_id,
                error_type=type(e).__name__,
            )
            return ActivitySummaryResult.failure(f"Error generating summary: {e}")

    async def _run(self, account_id: str | None, limit: int | None) -> ActivitySummaryResult:
        if not account_id or not account_id.strip():
            raise ActivityValidationError("Account ID is required", field="account_id")

        log = logger.bind(account_id=account_id)
        log.debug("Activity summary started", pipeline_state="START")

        rows = await self.repository.fetch_account_activity(account_id, limit)
        records = normalize_activity(rows)

        prompt = build_activity_prompt(records)
        if prompt == NO_ACTIVITY_SUMMARY:
            log.info("No activity to summarize", pipeline_state="DONE")
            return ActivitySummaryResult.success(NO_ACTIVITY_SUMMARY, activity_count=0)

        log.debug("Prompt built", pipeline_state="PROMPT_BUILT", activity_count=len(records))

        async with self._client() as client:
            log.debug("Sending request", pipeline_state="REQUEST_SENT")
            response = await client.invoke(GenerateContentRequest.from_prompt(prompt))

        if not response.is_ok:
            log.warning(
                "Generative AI returned an error",
                pipeline_state="RESPONSE_ERROR",
                status_code=response.status_code,
            )
            return ActivitySummaryResult.failure(
                format_upstream_error(
                    response.status_code, response.reason_phrase, response.body
                ),
                status_code=response.status_code,
            )

        log.debug("Response received", pipeline_state="RESPONSE_OK")
        summary = parse_summary(response.body)
        log.info("Activity summary generated", pipeline_state="DONE", activity_count=len(records))

        return ActivitySummaryResult.success(summary, activity_count=len(records))


activity_summary_service = ActivitySummaryService()


async def generate_activity_summary(
    account_id: str | None, limit: int | None = None
) -> ActivitySummaryResult:
    """Convenience wrapper around the module-level service."""
    return await activity_summary_service.generate_summary(account_id, limit)
