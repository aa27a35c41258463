"""
Expense Extraction Service
Extracts vendor, price, date and description from an uploaded receipt with
the generative model, and turns an accepted extraction into an expense line
item.
"""

from datetime import date
from decimal import Decimal, InvalidOperation

from account_insights.config import GenerativeAIConfig, settings
from account_insights.infrastructure.observability.logging import get_logger
from account_insights.models.domain.expense_domain import (
    ExpenseAcceptanceResult,
    ExpenseExtraction,
    ExpenseLineItem,
)
from account_insights.models.domain.generative_domain import GenerateContentRequest
from account_insights.repositories.expense_repository import ExpenseRepository
from account_insights.services.ai.generative_client import GenerativeAIClient, format_upstream_error
from account_insights.services.ai.prompts import build_extraction_prompt
from account_insights.services.ai.response_parser import parse_extraction

logger = get_logger(__name__)


class ExpenseValidationError(Exception):
    """Raised when required identifiers or extracted fields are missing or invalid."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ExpenseExtractionError(Exception):
    """Raised when the generative model call for a receipt fails."""

    def __init__(self, message: str, status_code: int | None = None, recoverable: bool = True):
        super().__init__(message)
        self.status_code = status_code
        self.recoverable = recoverable


def _require(value: str | None, field: str, label: str) -> str:
    if not value or not str(value).strip():
        raise ExpenseValidationError(f"{label} is required", field=field)
    return str(value).strip()


def build_line_item(expense_report_id: str, extraction: ExpenseExtraction) -> ExpenseLineItem:
    """
    Validate an accepted extraction and convert it into a line item.

    Raises:
        ExpenseValidationError: If a field is blank, the price is not a
            finite non-negative number, or the date is not YYYY-MM-DD
    """
    vendor_name = _require(extraction.vendor_name, "vendorName", "Vendor name")
    raw_price = _require(extraction.price, "price", "Price")
    raw_date = _require(extraction.expense_date, "expenseDate", "Expense date")
    detail = _require(extraction.expense_detail, "expenseDetail", "Expense detail")

    try:
        price = Decimal(raw_price.replace(",", "").lstrip("$"))
    except InvalidOperation as e:
        raise ExpenseValidationError(f"Invalid price: {raw_price}", field="price") from e

    # NaN and Infinity parse without error
    if not price.is_finite() or price < 0:
        raise ExpenseValidationError(f"Invalid price: {raw_price}", field="price")

    try:
        expense_date = date.fromisoformat(raw_date)
    except ValueError as e:
        raise ExpenseValidationError(f"Invalid expense date: {raw_date}", field="expenseDate") from e

    return ExpenseLineItem(
        id=None,
        expense_report_id=expense_report_id,
        vendor_name=vendor_name,
        price=price,
        expense_date=expense_date,
        detail=detail,
    )


def renamed_title(item: ExpenseLineItem) -> str:
    return f"{item.vendor_name} - {item.expense_date.isoformat()}"


class ExpenseExtractionService:
    """Receipt extraction and line-item acceptance."""

    def __init__(
        self,
        repository: type[ExpenseRepository] = ExpenseRepository,
        config: GenerativeAIConfig | None = None,
    ):
        self.repository = repository
        self._config = config

    def _client(self) -> GenerativeAIClient:
        config = self._config or settings.generative_ai_config()
        return GenerativeAIClient(config)

    async def extract_expense_details(
        self, content_version_id: str | None, expense_report_id: str | None
    ) -> ExpenseExtraction:
        """
        Extract the four expense fields from an uploaded receipt.

        Raises:
            ExpenseValidationError: Missing ids, unknown file, unsupported file type
            ExpenseExtractionError: Non-200 response from the model
            ResponseFormatError / ExtractionParseError: Unusable model output
        """
        content_version_id = _require(content_version_id, "content_version_id", "Content version ID")
        expense_report_id = _require(expense_report_id, "expense_report_id", "Expense report ID")

        document = await self.repository.get_content_version(content_version_id)
        if document is None:
            raise ExpenseValidationError(
                f"File version {content_version_id} not found", field="content_version_id"
            )

        try:
            prompt = build_extraction_prompt(document)
        except ValueError as e:
            raise ExpenseValidationError(str(e), field="content_version_id") from e

        logger.info(
            "Extracting expense details",
            expense_report_id=expense_report_id,
            content_version_id=content_version_id,
            mime_type=prompt.mime_type,
            document_bytes=len(document.version_data),
        )

        request = GenerateContentRequest.from_prompt(
            prompt.text, mime_type=prompt.mime_type, data=prompt.data
        )
        async with self._client() as client:
            response = await client.invoke(request)

        if not response.is_ok:
            logger.error(
                "Expense extraction request failed",
                expense_report_id=expense_report_id,
                status_code=response.status_code,
            )
            raise ExpenseExtractionError(
                format_upstream_error(response.status_code, response.reason_phrase, response.body),
                status_code=response.status_code,
            )

        extraction = parse_extraction(response.body)
        logger.info(
            "Expense details extracted",
            expense_report_id=expense_report_id,
            vendor_name=extraction.vendor_name,
        )
        return extraction

    async def create_expense_line_item(
        self,
        expense_report_id: str | None,
        extraction: ExpenseExtraction | None,
        content_version_id: str | None = None,
    ) -> ExpenseAcceptanceResult:
        """
        Persist an accepted extraction, then best-effort copy the receipt under a new title.

        The line item insert and the file copy are independent writes: if the
        copy fails the line item stays and the failure is reported in `message`.
        """
        try:
            expense_report_id = _require(expense_report_id, "expense_report_id", "Expense report ID")
            if extraction is None:
                raise ExpenseValidationError("Extracted data is required", field="extracted_data")
            item = build_line_item(expense_report_id, extraction)
        except ExpenseValidationError as e:
            logger.warning("Expense line item rejected", field=e.field, error=str(e))
            return ExpenseAcceptanceResult(is_success=False, error_message=str(e))

        try:
            line_item_id = await self.repository.insert_line_item(item)
        except Exception as e:
            logger.exception("Failed to create expense line item", expense_report_id=expense_report_id)
            return ExpenseAcceptanceResult(
                is_success=False, error_message=f"Error creating expense line item: {e}"
            )

        result = ExpenseAcceptanceResult(
            is_success=True,
            message="Expense line item created successfully",
            line_item_id=line_item_id,
        )

        if content_version_id:
            result.renamed_content_version_id = await self._rename_receipt(
                content_version_id, item, result
            )

        return result

    async def _rename_receipt(
        self, content_version_id: str, item: ExpenseLineItem, result: ExpenseAcceptanceResult
    ) -> str | None:
        try:
            source = await self.repository.get_content_version(content_version_id)
            if source is None:
                result.message += "; receipt file not found, not renamed"
                return None
            version_id = await self.repository.insert_renamed_version(source, renamed_title(item))
        except Exception as e:
            logger.warning(
                "Receipt rename failed after line item was created",
                line_item_id=result.line_item_id,
                content_version_id=content_version_id,
                error=str(e),
            )
            result.message += "; receipt file could not be renamed"
            return None

        logger.info(
            "Receipt renamed",
            line_item_id=result.line_item_id,
            content_version_id=version_id,
        )
        return version_id


expense_extraction_service = ExpenseExtractionService()
