# bulkads/services/facebook/campaign_validator.py

import re
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...constants.facebook_enums import (
    MAX_TARGETING_AGE,
    MIN_DAILY_BUDGET,
    MIN_ID_LENGTH,
    MIN_TARGETING_AGE,
)
from ...utils.id_fields import is_scientific_notation


REQUIRED_FIELDS = ("name", "page_id", "post_id", "daily_budget", "age_min", "age_max", "start_time")
ID_FIELDS = ("page_id", "post_id", "account_id")

ID_RE = re.compile(r"^\d+$")
ISO_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{4}$")
SIMPLE_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")

ERROR_MISSING_FIELD = "missing_field"
ERROR_SCIENTIFIC_NOTATION = "scientific_notation"
ERROR_INVALID_ID = "invalid_id"
ERROR_INVALID_BUDGET = "invalid_budget"
ERROR_INVALID_AGE = "invalid_age"
ERROR_INVALID_DATETIME = "invalid_datetime"


@dataclass
class CampaignFieldError:
    """One failed rule for one CSV row."""
    kind: str
    field: str
    row: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PostIdFormatError(ValueError):
    """post_id looks like "<page_id>_<post_id>" pasted into the post column."""

    def __init__(self, post_id: str, suggestion: str):
        self.post_id = post_id
        self.suggestion = suggestion
        super().__init__(
            f'Post ID format appears incorrect. Found: "{post_id}" but it should probably be: '
            f'"{suggestion}". Post ID should not include the page ID prefix.'
        )


def _text(value) -> str:
    return "" if value is None else str(value).strip()


def _as_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = _text(value)
    if re.match(r"^-?\d+$", text):
        return int(text)
    return None


def _is_valid_datetime(value: str) -> bool:
    if ISO_DATETIME_RE.match(value):
        fmt = "%Y-%m-%dT%H:%M:%S%z"
    elif SIMPLE_DATETIME_RE.match(value):
        fmt = "%Y-%m-%d %H:%M:%S"
    else:
        return False
    try:
        datetime.strptime(value, fmt)
    except ValueError:
        return False
    return True


def validate_campaign(record: Dict[str, Any], row_number: int) -> List[CampaignFieldError]:
    """
    Check a mapped campaign record and return every failed rule.

    Each cause yields a single error: a field that is missing is not also
    reported as malformed, and an ID typed in scientific notation is not
    also reported as an invalid ID.
    """
    errors: List[CampaignFieldError] = []
    prefix = f"Row {row_number}:"

    def add(kind, field, message):
        errors.append(CampaignFieldError(kind=kind, field=field, row=row_number, message=f"{prefix} {message}"))

    missing = set()
    for field in REQUIRED_FIELDS:
        if not _text(record.get(field)):
            missing.add(field)
            add(ERROR_MISSING_FIELD, field, f'Missing required field "{field}"')

    original_ids = record.get("original_ids") or {}
    for field in ID_FIELDS:
        value = _text(record.get(field))
        if field in missing or not value:
            continue

        original = _text(original_ids.get(field)) or value
        if is_scientific_notation(original):
            add(
                ERROR_SCIENTIFIC_NOTATION,
                field,
                f'{field} contains scientific notation "{original}". Please format the column as '
                f"TEXT in Excel/Google Sheets before entering data.",
            )
            continue

        if not ID_RE.match(value) or len(value) < MIN_ID_LENGTH:
            add(ERROR_INVALID_ID, field, f'{field} "{value}" is invalid (original: "{original}")')

    if "daily_budget" not in missing:
        budget = _as_int(record.get("daily_budget"))
        if budget is None or budget < MIN_DAILY_BUDGET:
            add(
                ERROR_INVALID_BUDGET,
                "daily_budget",
                "daily_budget must be at least 30,000 VND ($1.2 USD minimum for Facebook)",
            )

    age_min = _as_int(record.get("age_min"))
    age_max = _as_int(record.get("age_max"))
    if "age_min" not in missing and (age_min is None or age_min < MIN_TARGETING_AGE):
        add(ERROR_INVALID_AGE, "age_min", f"age_min must be a number >= {MIN_TARGETING_AGE}")
        age_min = None
    if "age_max" not in missing and (age_max is None or age_max > MAX_TARGETING_AGE):
        add(ERROR_INVALID_AGE, "age_max", f"age_max must be a number <= {MAX_TARGETING_AGE}")
        age_max = None
    if age_min is not None and age_max is not None and age_min > age_max:
        add(ERROR_INVALID_AGE, "age_min", "age_min cannot be greater than age_max")

    for field in ("start_time", "end_time"):
        value = _text(record.get(field))
        if field in missing or not value:
            continue
        if not _is_valid_datetime(value):
            add(
                ERROR_INVALID_DATETIME,
                field,
                f"{field} must be in format YYYY-MM-DDTHH:mm:ss-HHMM or YYYY-MM-DD HH:mm:ss",
            )

    return errors


def check_post_id_format(post_id, page_id) -> None:
    """
    Raise PostIdFormatError when `post_id` embeds `page_id`; the suggested
    value drops the "<page_id>_" prefix. Nothing is corrected in place.
    """
    post_id = _text(post_id)
    page_id = _text(page_id)
    if not post_id or not page_id:
        return

    if page_id in post_id:
        suggestion = post_id.replace(f"{page_id}_", "")
        if suggestion == post_id and post_id.startswith(page_id):
            suggestion = post_id[len(page_id):]
        raise PostIdFormatError(post_id, suggestion)
