"""
Prompt builders for activity summaries and receipt extraction.
"""

import base64
from collections.abc import Sequence
from dataclasses import dataclass

from account_insights.models.domain.activity_domain import ActivityRecord
from account_insights.models.domain.expense_domain import ContentVersion

NO_ACTIVITY_SUMMARY = "No activities found for this account in the recent period."

RECORD_DELIMITER = "\n---\n"

DATE_FORMAT = "%Y-%m-%d %H:%M"

SUMMARY_PREAMBLE = """You are a sales assistant preparing a briefing for an account owner.
Summarize the recent activity on this account: tasks, meetings and emails."""

SUMMARY_CONTENT_GUIDELINES = """### Content Guidelines
- Use ONLY the activity records below. Do not invent facts, people or dates.
- Lead with the overall state of the relationship in one or two sentences.
- Call out open tasks, commitments made, and any follow-ups that are overdue.
- Mention the most recent touchpoint and when it happened."""

SUMMARY_FORMATTING_RULES = """### Formatting Rules
- Plain text, no markdown headings.
- At most 5 short bullet points after the opening sentences, each starting with "- ".
- Keep the whole summary under 200 words."""

SUMMARY_CLOSING = "Write the account activity summary now."

EXTRACTION_PROMPT = """You are reading an expense receipt. Extract the following fields and return them as a JSON object with exactly these keys:
{
  "vendorName": "name of the merchant or vendor",
  "price": "total amount paid, digits and decimal point only, e.g. 42.50",
  "expenseDate": "date of the expense in YYYY-MM-DD format",
  "expenseDetail": "short description of what was purchased"
}
All values must be strings. If a value cannot be found, use an empty string.
Return only the JSON object, no markdown formatting, no code fences and no explanation."""


@dataclass(frozen=True, slots=True)
class ExtractionPrompt:
    text: str
    mime_type: str
    data: str  # base64


def _format_record(record: ActivityRecord) -> str:
    lines = [
        f"Type: {record.kind.value}",
        f"Subject: {record.subject or '(no subject)'}",
        f"Date: {record.occurred_at.strftime(DATE_FORMAT)}",
        f"Status: {record.status or '(none)'}",
    ]
    if record.has_body():
        lines.append(f"Details: {record.body.strip()}")
    return "\n".join(lines)


def build_activity_prompt(records: Sequence[ActivityRecord]) -> str:
    """
    Build the summarization prompt for a list of activity records.

    Returns NO_ACTIVITY_SUMMARY for an empty list; callers treat that as the
    final summary and skip the model call.
    """
    if not records:
        return NO_ACTIVITY_SUMMARY

    blocks = RECORD_DELIMITER.join(_format_record(record) for record in records)

    return f"""{SUMMARY_PREAMBLE}

{SUMMARY_CONTENT_GUIDELINES}

{SUMMARY_FORMATTING_RULES}

### Activity Records
{blocks}

{SUMMARY_CLOSING}"""


def build_extraction_prompt(document: ContentVersion) -> ExtractionPrompt:
    """
    Bundle the extraction instruction with the document bytes.

    Raises:
        ValueError: If the document's file type is not supported
    """
    mime_type = document.mime_type()
    if mime_type is None:
        raise ValueError(f"Unsupported file type: {document.file_extension or 'unknown'}")

    return ExtractionPrompt(
        text=EXTRACTION_PROMPT,
        mime_type=mime_type,
        data=base64.b64encode(document.version_data).decode("ascii"),
    )
