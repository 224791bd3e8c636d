# bulkads/services/facebook/row_normalizer.py

import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from ...constants.facebook_enums import (
    DEFAULT_AD_LINK,
    DEFAULT_AD_MESSAGE,
    DEFAULT_AGE_MAX,
    DEFAULT_AGE_MIN,
    DEFAULT_COUNTRY,
    DEFAULT_DAILY_BUDGET,
)
from ...utils.id_fields import normalize_id_field
from ...utils.logger import Log


DEFAULT_TIMEZONE = "Asia/Ho_Chi_Minh"
CAMPAIGN_SOURCE = "facebook_csv_import"

# canonical header -> accepted header variants, canonical name first
FIELD_VARIANTS = {
    "Campaign Name": ["Campaign Name", "Name"],
    "Campaign Status": ["Campaign Status", "Status"],
    "Campaign Objective": ["Campaign Objective", "Objective"],
    "Campaign Daily Budget": ["Campaign Daily Budget", "Daily Budget", "Budget"],
    "Campaign Bid Strategy": ["Campaign Bid Strategy", "Bid Strategy", "Ad Set Bid Strategy"],
    "Campaign Start Time": ["Campaign Start Time", "Start Time", "Ad Set Time Start"],
    "Campaign Stop Time": ["Campaign Stop Time", "Stop Time", "End Time", "Ad Set Time Stop"],
    "Ad Set Name": ["Ad Set Name", "Adset Name"],
    "Ad Set Run Status": ["Ad Set Run Status", "Ad Set Status"],
    "Ad Set Daily Budget": ["Ad Set Daily Budget", "Adset Daily Budget"],
    "Optimization Goal": ["Optimization Goal"],
    "Billing Event": ["Billing Event"],
    "Destination Type": ["Destination Type"],
    "Age Min": ["Age Min", "Minimum Age"],
    "Age Max": ["Age Max", "Maximum Age"],
    "Gender": ["Gender", "Genders"],
    "Addresses": ["Addresses", "Location"],
    "Location Types": ["Location Types"],
    "Countries": ["Countries", "Country"],
    "Cities": ["Cities"],
    "Regions": ["Regions"],
    "Zip": ["Zip", "Zip Codes"],
    "Geo Markets (DMA)": ["Geo Markets (DMA)", "DMA"],
    "Publisher Platforms": ["Publisher Platforms"],
    "Facebook Positions": ["Facebook Positions"],
    "Device Platforms": ["Device Platforms"],
    "Advantage Audience": ["Advantage Audience"],
    "Ad Name": ["Ad Name"],
    "Ad Status": ["Ad Status"],
    "Title": ["Title", "Headline"],
    "Body": ["Body", "Ad Text", "Message"],
    "Display Link": ["Display Link"],
    "Link": ["Link", "Website URL", "Link URL"],
    "Link Description": ["Link Description"],
    "Call to Action": ["Call to Action", "CTA"],
    "Image Hash": ["Image Hash"],
    "Video ID": ["Video ID"],
    "Story ID": ["Story ID", "Post ID"],
    "Link Object ID": ["Link Object ID", "Object ID"],
    "Permalink": ["Permalink"],
    "Page ID": ["Page ID"],
    "Account ID": ["Account ID", "Ad Account ID"],
}

CAMPAIGN_NAME_FIELD = "Campaign Name"

LINK_OBJECT_ID_RE = re.compile(r"^o:(\d+)$")
PERMALINK_PAGE_RE = re.compile(r"facebook\.com/([^/]+)/(?:posts|videos)/", re.IGNORECASE)
PERMALINK_POST_RE = re.compile(r"/(?:posts|videos)/([^/?#]+)", re.IGNORECASE)
STORY_ID_RE = re.compile(r"s:(\d+)")
AD_ACCOUNT_PREFIX_RE = re.compile(r"^act_", re.IGNORECASE)
ADDRESS_RE = re.compile(r"\(([\d.-]+),\s*([\d.-]+)\)\s*\+(\d+)\s*km", re.IGNORECASE)
SIMPLE_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")
INTEGER_RE = re.compile(r"^-?\d+$")


def fold_header(header) -> str:
    """Compare headers case-insensitively, treating underscores and runs of spaces alike."""
    return re.sub(r"[\s_]+", " ", str(header or "").strip().lower())


def _cell(value) -> str:
    return "" if value is None else str(value).strip()


def normalize_row(row: Dict[str, Any]) -> Dict[str, str]:
    """
    Map a raw CSV row onto the canonical headers in FIELD_VARIANTS.

    The first variant present in the row wins; canonical fields with no
    matching column become "". Columns that match nothing are kept under
    their original header.
    """
    folded = {}
    for header in row:
        folded.setdefault(fold_header(header), header)

    normalized = {}
    consumed = set()

    for canonical, variants in FIELD_VARIANTS.items():
        normalized[canonical] = ""
        for variant in variants:
            header = folded.get(fold_header(variant))
            if header is not None:
                normalized[canonical] = _cell(row[header])
                consumed.add(header)
                break

    for header, value in row.items():
        if header not in consumed and header not in normalized:
            normalized[header] = _cell(value)

    return normalized


def find_campaign_name_field(headers: Iterable[str]) -> Optional[str]:
    """Return the header holding campaign names, or None."""
    headers = list(headers)
    folded = {}
    for header in headers:
        folded.setdefault(fold_header(header), header)

    for variant in FIELD_VARIANTS[CAMPAIGN_NAME_FIELD]:
        header = folded.get(fold_header(variant))
        if header is not None:
            return header

    for header in headers:
        lowered = str(header).lower()
        if "campaign" in lowered and "name" in lowered:
            return header

    return None


def dedupe_rows_by_campaign_name(
    rows: List[Dict[str, Any]],
    name_field: Optional[str] = None,
) -> List[Tuple[int, Dict[str, Any]]]:
    """
    Drop rows with a blank campaign name and every later row repeating an
    earlier name. Returns (row_number, row) pairs; row numbers are 1-based
    positions in the uploaded file's data rows.
    """
    log_tag = "[row_normalizer.py][dedupe_rows_by_campaign_name]"
    if name_field is None and rows:
        name_field = find_campaign_name_field(rows[0].keys())

    seen = set()
    kept = []
    for index, row in enumerate(rows):
        name = _cell(row.get(name_field)) if name_field else ""
        if not name:
            continue
        if name in seen:
            Log.debug(f"{log_tag} dropping duplicate campaign '{name}' at row {index + 1}")
            continue
        seen.add(name)
        kept.append((index + 1, row))

    return kept


# -------------------- field parsers --------------------

def extract_page_and_post_ids(row: Dict[str, str], default_page_id: Optional[str] = None) -> Dict[str, str]:
    """
    Resolve page and post IDs from a normalized row.

    Page ID priority: Link Object ID (o:<digits>), then a numeric Permalink
    page segment, then the Page ID column, then `default_page_id`. The post
    ID comes from the Permalink, else from Story ID. The raw tokens are
    returned alongside so validation can inspect what the user typed.
    """
    page_id = raw_page_id = ""
    post_id = raw_post_id = ""

    link_object_id = _cell(row.get("Link Object ID"))
    permalink = _cell(row.get("Permalink"))

    match = LINK_OBJECT_ID_RE.match(link_object_id)
    if match:
        page_id = raw_page_id = match.group(1)

    if not page_id and permalink:
        match = PERMALINK_PAGE_RE.search(permalink)
        if match and match.group(1).isdigit():
            page_id = raw_page_id = match.group(1)

    if not page_id:
        raw_page_id = _cell(row.get("Page ID"))
        page_id = normalize_id_field(raw_page_id)

    if not page_id and default_page_id:
        raw_page_id = _cell(default_page_id)
        page_id = normalize_id_field(raw_page_id)

    if permalink:
        match = PERMALINK_POST_RE.search(permalink)
        if match:
            post_id = raw_post_id = match.group(1)

    if not post_id:
        raw_post_id = _cell(row.get("Story ID"))
        match = STORY_ID_RE.search(raw_post_id)
        post_id = match.group(1) if match else normalize_id_field(raw_post_id)

    return {
        "page_id": page_id,
        "post_id": post_id,
        "raw_page_id": raw_page_id,
        "raw_post_id": raw_post_id,
    }


def normalize_account_id(value) -> str:
    """Ad account IDs are often written act_<digits>; keep only the digits part."""
    text = _cell(value)
    if not text:
        return ""
    return normalize_id_field(AD_ACCOUNT_PREFIX_RE.sub("", normalize_id_field(text)))


def build_geo_locations(row: Dict[str, str]) -> Dict[str, Any]:
    match = ADDRESS_RE.search(_cell(row.get("Addresses")))
    if match:
        try:
            return {
                "custom_locations": [{
                    "latitude": float(match.group(1)),
                    "longitude": float(match.group(2)),
                    "radius": int(match.group(3)),
                    "distance_unit": "kilometer",
                }]
            }
        except ValueError:
            Log.debug(f"[row_normalizer.py][build_geo_locations] unreadable address: {match.group(0)}")

    countries = [c.strip().upper() for c in _cell(row.get("Countries")).split(",") if c.strip()]
    if countries:
        return {"countries": countries}

    return {"countries": [DEFAULT_COUNTRY]}


def parse_genders(value) -> List[int]:
    gender = _cell(value).lower()
    if gender == "male":
        return [1]
    if gender == "female":
        return [2]
    return [1, 2]


def parse_advantage_audience(value) -> int:
    return 1 if _cell(value).lower() in ("1", "true", "yes") else 0


def parse_daily_budget(row: Dict[str, str]) -> int:
    for field in ("Ad Set Daily Budget", "Campaign Daily Budget"):
        digits = re.sub(r"\D", "", _cell(row.get(field)))
        if digits and int(digits) > 0:
            return int(digits)
    return DEFAULT_DAILY_BUDGET


def parse_age(value, default: int):
    """Blank -> default, integer text -> int, anything else kept for validation to reject."""
    text = _cell(value)
    if not text:
        return default
    if INTEGER_RE.match(text):
        return int(text)
    return text


def derive_status(row: Dict[str, str]) -> str:
    if row.get("Campaign Status") == "ACTIVE" or row.get("Ad Set Run Status") == "ACTIVE":
        return "ACTIVE"
    return "PAUSED"


def normalize_datetime(value, timezone_name: str = DEFAULT_TIMEZONE) -> str:
    """
    "YYYY-MM-DD HH:MM:SS" gains a "T" separator and the UTC offset of
    `timezone_name`; other values are returned trimmed.
    """
    text = _cell(value)
    if not SIMPLE_DATETIME_RE.match(text):
        return text
    try:
        local = datetime.strptime(text, "%Y-%m-%d %H:%M:%S").replace(tzinfo=ZoneInfo(timezone_name))
    except ValueError:
        return text
    return local.strftime("%Y-%m-%dT%H:%M:%S%z")


def current_start_time(timezone_name: str = DEFAULT_TIMEZONE) -> str:
    return datetime.now(ZoneInfo(timezone_name)).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%S%z")


# -------------------- row -> campaign record --------------------

def map_row_to_campaign(
    row: Dict[str, str],
    default_page_id: Optional[str] = None,
    timezone_name: str = DEFAULT_TIMEZONE,
) -> Dict[str, Any]:
    """Build a campaign record from a normalized CSV row."""
    ids = extract_page_and_post_ids(row, default_page_id)
    raw_account_id = _cell(row.get("Account ID"))

    age_min = parse_age(row.get("Age Min"), DEFAULT_AGE_MIN)
    age_max = parse_age(row.get("Age Max"), DEFAULT_AGE_MAX)

    start_time = normalize_datetime(row.get("Campaign Start Time"), timezone_name)
    if not start_time:
        start_time = current_start_time(timezone_name)
    end_time = normalize_datetime(row.get("Campaign Stop Time"), timezone_name)

    name = _cell(row.get(CAMPAIGN_NAME_FIELD))
    destination_type = _cell(row.get("Destination Type"))

    record = {
        "name": name,
        "page_id": ids["page_id"],
        "post_id": ids["post_id"],
        "account_id": normalize_account_id(raw_account_id),
        "daily_budget": parse_daily_budget(row),
        "age_min": age_min,
        "age_max": age_max,
        "start_time": start_time,
        "end_time": end_time or None,
        "status": derive_status(row),
        "campaign_objective": _cell(row.get("Campaign Objective")),
        "optimization_goal": _cell(row.get("Optimization Goal")),
        "bid_strategy": _cell(row.get("Campaign Bid Strategy")),
        "billing_event": _cell(row.get("Billing Event")),
        "destination_type": destination_type,
        "adset_name": _cell(row.get("Ad Set Name")) or f"{name} - AdSet",
        "ad_name": _cell(row.get("Ad Name")) or f"{name} - Ad",
        "targeting": {
            "geo_locations": build_geo_locations(row),
            "genders": parse_genders(row.get("Gender")),
            "age_min": age_min if isinstance(age_min, int) else DEFAULT_AGE_MIN,
            "age_max": age_max if isinstance(age_max, int) else DEFAULT_AGE_MAX,
            "targeting_automation": {
                "advantage_audience": parse_advantage_audience(row.get("Advantage Audience")),
            },
        },
        "ad_creative": {
            "object_story_spec": {
                "page_id": ids["page_id"],
                "link_data": {
                    "message": _cell(row.get("Body")) or DEFAULT_AD_MESSAGE,
                    "call_to_action": {
                        "type": _cell(row.get("Call to Action")),
                        "value": {
                            "link": _cell(row.get("Link")) or _cell(row.get("Display Link")) or DEFAULT_AD_LINK,
                        },
                    },
                },
            },
        },
        "original_ids": {
            "page_id": ids["raw_page_id"],
            "post_id": ids["raw_post_id"],
            "account_id": raw_account_id,
        },
        "source": CAMPAIGN_SOURCE,
        "original_data": dict(row),
    }

    return record
