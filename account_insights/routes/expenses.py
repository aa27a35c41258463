"""
Expense Report Routes
HTTP endpoints for receipt extraction and line-item acceptance.
"""

from fastapi import APIRouter, HTTPException, status

from account_insights.config import MissingConfigurationError
from account_insights.infrastructure.observability.logging import get_logger
from account_insights.models.api.expense_request import CreateLineItemRequest, ExtractExpenseRequest
from account_insights.models.api.expense_response import (
    ExpenseAcceptanceResponse,
    ExpenseExtractionResponse,
)
from account_insights.services.ai.response_parser import (
    ExtractionParseError,
    MissingExtractedFieldError,
    ResponseFormatError,
)
from account_insights.services.expense_extraction_service import (
    ExpenseExtractionError,
    ExpenseValidationError,
    expense_extraction_service,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/expense-reports", tags=["expenses"])


@router.post("/{report_id}/extractions", response_model=ExpenseExtractionResponse)
async def extract_expense_details(report_id: str, request: ExtractExpenseRequest):
    """Extract vendor, price, date and description from an uploaded receipt."""
    try:
        extraction = await expense_extraction_service.extract_expense_details(
            request.content_version_id, report_id
        )

        return ExpenseExtractionResponse(
            vendor_name=extraction.vendor_name,
            price=extraction.price,
            expense_date=extraction.expense_date,
            expense_detail=extraction.expense_detail,
        )

    except ExpenseValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except MissingExtractedFieldError as e:
        logger.warning("Extraction missing a required field", report_id=report_id, field=e.field)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ExpenseExtractionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except (ResponseFormatError, ExtractionParseError) as e:
        logger.error("Unusable extraction output", report_id=report_id, error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except MissingConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except Exception as e:
        logger.exception("Error extracting expense details", report_id=report_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while extracting expense details: {e}",
        )


@router.post("/{report_id}/line-items", response_model=ExpenseAcceptanceResponse)
async def create_expense_line_item(report_id: str, request: CreateLineItemRequest):
    """Accept an extraction and create an expense line item on the report."""
    result = await expense_extraction_service.create_expense_line_item(
        report_id, request.extracted_data, request.content_version_id
    )

    return ExpenseAcceptanceResponse(
        is_success=result.is_success,
        message=result.message,
        error_message=result.error_message,
        line_item_id=result.line_item_id,
        renamed_content_version_id=result.renamed_content_version_id,
    )
