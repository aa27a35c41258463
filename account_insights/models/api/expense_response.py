"""
Expense API response models.
"""

from pydantic import BaseModel, ConfigDict, Field


class ExpenseExtractionResponse(BaseModel):
    """Extracted receipt fields, serialized with the keys the upload UI expects."""

    model_config = ConfigDict(populate_by_name=True)

    vendor_name: str = Field(..., alias="vendorName")
    price: str = Field(..., alias="price")
    expense_date: str = Field(..., alias="expenseDate")
    expense_detail: str = Field(..., alias="expenseDetail")


class ExpenseAcceptanceResponse(BaseModel):
    """Response for creating an expense line item."""

    is_success: bool = Field(..., description="Whether the line item was created")
    message: str | None = Field(None, description="User-friendly success message")
    error_message: str | None = Field(None, description="User-facing error message on failure")
    line_item_id: str | None = Field(None, description="ID of the created line item")
    renamed_content_version_id: str | None = Field(
        None, description="ID of the renamed receipt copy, if one was created"
    )
