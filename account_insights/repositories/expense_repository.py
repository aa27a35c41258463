"""
Repository helpers for expense reports.

Reads uploaded file versions and writes expense line items plus renamed
copies of the uploaded file.
"""

from account_insights.db.helpers import fetch_one, fetch_val
from account_insights.infrastructure.observability.logging import get_logger
from account_insights.models.domain.expense_domain import ContentVersion, ExpenseLineItem

logger = get_logger(__name__)


class ExpenseRepository:
    """Raw SQL helpers for expense extraction and acceptance."""

    @classmethod
    async def get_content_version(cls, content_version_id: str) -> ContentVersion | None:
        query = """
            SELECT id, title, file_extension, version_data, content_document_id
            FROM content_versions
            WHERE id = %s
        """

        row = await fetch_one(query, (content_version_id,))
        if not row:
            return None

        return ContentVersion(
            id=str(row["id"]),
            title=row["title"],
            file_extension=row.get("file_extension"),
            version_data=bytes(row["version_data"]),
            content_document_id=(
                str(row["content_document_id"]) if row.get("content_document_id") else None
            ),
        )

    @classmethod
    async def insert_line_item(cls, item: ExpenseLineItem) -> str:
        query = """
            INSERT INTO expense_line_items (
                expense_report_id, vendor_name, price, expense_date, detail, created_at
            )
            VALUES (%s, %s, %s, %s, %s, NOW())
            RETURNING id
        """

        line_item_id = await fetch_val(
            query,
            (
                item.expense_report_id,
                item.vendor_name,
                item.price,
                item.expense_date,
                item.detail,
            ),
        )
        logger.info(
            "Expense line item created",
            expense_report_id=item.expense_report_id,
            line_item_id=str(line_item_id),
        )
        return str(line_item_id)

    @classmethod
    async def insert_renamed_version(cls, source: ContentVersion, title: str) -> str:
        """Insert a copy of `source` under a new title, as a new version of the same document."""
        query = """
            INSERT INTO content_versions (
                title, file_extension, version_data, content_document_id, created_at
            )
            VALUES (%s, %s, %s, %s, NOW())
            RETURNING id
        """

        version_id = await fetch_val(
            query,
            (title, source.file_extension, source.version_data, source.content_document_id),
        )
        return str(version_id)
