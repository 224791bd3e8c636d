# bulkads/services/facebook/csv_import_service.py

from typing import Any, Dict, List, Optional

from ...constants.service_code import ERROR_MESSAGES
from ...utils.csv_decoder import CsvInputError, decode_csv_bytes, detect_delimiter, parse_csv_rows
from ...utils.logger import Log
from .campaign_validator import validate_campaign
from .row_normalizer import (
    CAMPAIGN_NAME_FIELD,
    DEFAULT_TIMEZONE,
    dedupe_rows_by_campaign_name,
    find_campaign_name_field,
    map_row_to_campaign,
    normalize_row,
)


PREVIEW_HEADER_LIMIT = 20
PREVIEW_SAMPLE_ROWS = 3
PREVIEW_PARSE_ERROR_LIMIT = 5


def build_campaigns_from_rows(
    headers: List[str],
    rows: List[Dict[str, str]],
    default_page_id: Optional[str] = None,
    timezone_name: str = DEFAULT_TIMEZONE,
) -> Dict[str, Any]:
    """
    Turn parsed CSV rows into validated campaign records.

    Returns {"campaigns": [(row_number, record)], "parse_errors": [str],
    "error_details": [dict], "duplicates": int}. Rows failing validation
    are reported and left out of `campaigns`.
    """
    log_tag = "[csv_import_service.py][build_campaigns_from_rows]"

    name_field = find_campaign_name_field(headers)
    if not name_field:
        raise CsvInputError(ERROR_MESSAGES["NO_CAMPAIGN_NAME_COLUMN"])

    normalized_rows = []
    for row in rows:
        normalized = normalize_row(row)
        if not normalized[CAMPAIGN_NAME_FIELD]:
            normalized[CAMPAIGN_NAME_FIELD] = str(row.get(name_field) or "").strip()
        normalized_rows.append(normalized)

    named_rows = sum(1 for row in normalized_rows if row[CAMPAIGN_NAME_FIELD])
    unique_rows = dedupe_rows_by_campaign_name(normalized_rows, CAMPAIGN_NAME_FIELD)

    campaigns = []
    parse_errors = []
    error_details = []

    for row_number, row in unique_rows:
        record = map_row_to_campaign(row, default_page_id=default_page_id, timezone_name=timezone_name)
        errors = validate_campaign(record, row_number)
        if errors:
            parse_errors.extend(error.message for error in errors)
            error_details.extend(error.to_dict() for error in errors)
            continue
        campaigns.append((row_number, record))

    Log.info(
        f"{log_tag} rows={len(rows)} named={named_rows} unique={len(unique_rows)} "
        f"valid={len(campaigns)} errors={len(parse_errors)}"
    )

    return {
        "campaigns": campaigns,
        "parse_errors": parse_errors,
        "error_details": error_details,
        "duplicates": named_rows - len(unique_rows),
    }


def _find_header(headers: List[str], *needles: str, any_of: bool = False) -> Optional[str]:
    for header in headers:
        lowered = header.lower()
        matches = [needle in lowered for needle in needles]
        if (any(matches) if any_of else all(matches)):
            return header
    return None


def build_csv_preview(raw: bytes) -> Dict[str, Any]:
    """Describe an upload without importing it: headers, key columns, samples and row stats."""
    decoded = decode_csv_bytes(raw)
    text = decoded["text"]
    delimiter = detect_delimiter(text)
    headers, rows, warnings, empty_rows = parse_csv_rows(text, delimiter)

    campaign_fields = [h for h in headers if "campaign" in h.lower() or "name" in h.lower()]

    essential_fields = {
        "campaignName": find_campaign_name_field(headers),
        "campaignStatus": _find_header(headers, "campaign", "status"),
        "campaignObjective": _find_header(headers, "campaign", "objective"),
        "budget": _find_header(headers, "budget"),
        "targeting": _find_header(headers, "address", "location", any_of=True),
        "content": _find_header(headers, "body", "message", any_of=True),
    }

    issues = decoded["issues"]

    return {
        "delimiter": delimiter,
        "totalHeaders": len(headers),
        "headers": headers[:PREVIEW_HEADER_LIMIT],
        "campaignFields": campaign_fields,
        "essentialFields": essential_fields,
        "sampleData": rows[:PREVIEW_SAMPLE_ROWS],
        "parseErrors": warnings[:PREVIEW_PARSE_ERROR_LIMIT],
        "warnings": warnings,
        "encoding": {
            "detectedEncoding": decoded["encoding"],
            "encodingIssues": issues,
            "originalLength": len(raw or b""),
            "cleanedLength": len(text),
            "hasIssues": bool(issues or warnings),
        },
        "stats": {
            "totalRows": len(rows) + empty_rows,
            "validRows": len(rows),
            "emptyRows": empty_rows,
        },
    }
