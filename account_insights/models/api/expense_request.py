"""
Expense API request models.
Used by routes for input validation.
"""

from pydantic import BaseModel, Field

from account_insights.models.domain.expense_domain import ExpenseExtraction


class ExtractExpenseRequest(BaseModel):
    """Request to extract expense details from an uploaded receipt."""

    content_version_id: str = Field(..., min_length=1, description="Uploaded file version ID")


class CreateLineItemRequest(BaseModel):
    """Request to accept an extraction as an expense line item."""

    extracted_data: ExpenseExtraction | None = Field(
        None, description="Fields returned by the extraction endpoint"
    )
    content_version_id: str | None = Field(
        None, description="Receipt file version to copy under the vendor/date title"
    )
