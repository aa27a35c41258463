"""
Expense Domain Models
Uploaded receipt documents, structured fields extracted from them, and the
line items created once an extraction is accepted.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# Uploads accepted for extraction, by file extension
MIME_TYPES = {
    "pdf": "application/pdf",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
}


class ExpenseExtraction(BaseModel):
    """The four fields the model is asked to return for a receipt."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    vendor_name: str = Field(..., alias="vendorName")
    price: str = Field(..., alias="price")
    expense_date: str = Field(..., alias="expenseDate")
    expense_detail: str = Field(..., alias="expenseDetail")


@dataclass(slots=True)
class ContentVersion:
    """A stored version of an uploaded file."""

    id: str
    title: str
    file_extension: str | None
    version_data: bytes
    content_document_id: str | None = None

    def mime_type(self) -> str | None:
        if not self.file_extension:
            return None
        return MIME_TYPES.get(self.file_extension.lower().lstrip("."))


@dataclass(slots=True)
class ExpenseLineItem:
    id: str | None
    expense_report_id: str
    vendor_name: str
    price: Decimal
    expense_date: date
    detail: str
    created_at: datetime | None = None


@dataclass(slots=True)
class ExpenseAcceptanceResult:
    is_success: bool
    message: str | None = None
    error_message: str | None = None
    line_item_id: str | None = None
    renamed_content_version_id: str | None = None
