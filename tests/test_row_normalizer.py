import re

from bulkads.services.facebook.row_normalizer import (
    dedupe_rows_by_campaign_name,
    derive_status,
    extract_page_and_post_ids,
    find_campaign_name_field,
    map_row_to_campaign,
    normalize_account_id,
    normalize_datetime,
    normalize_row,
    parse_age,
    parse_daily_budget,
)


def _map(raw_row, **kwargs):
    return map_row_to_campaign(normalize_row(raw_row), **kwargs)


# --- Header normalization ---

def test_header_variants_map_to_canonical_names():
    row = normalize_row({"campaign name": "Spring", "Minimum Age": "20", "Daily_Budget": "60000"})

    assert row["Campaign Name"] == "Spring"
    assert row["Age Min"] == "20"
    assert row["Campaign Daily Budget"] == "60000"
    assert row["Countries"] == ""


def test_unknown_columns_are_kept():
    row = normalize_row({"Campaign Name": "Spring", "Internal Note": " keep me "})

    assert row["Internal Note"] == "keep me"
    assert "campaign name" not in row


def test_first_variant_wins():
    row = normalize_row({"Name": "second", "Campaign Name": "first"})

    assert row["Campaign Name"] == "first"


def test_find_campaign_name_field():
    assert find_campaign_name_field(["Name", "Campaign Name"]) == "Campaign Name"
    assert find_campaign_name_field(["campaign_name"]) == "campaign_name"
    assert find_campaign_name_field(["Campaign Name (VN)"]) == "Campaign Name (VN)"
    assert find_campaign_name_field(["Budget", "Countries"]) is None


# --- Deduplication ---

def test_dedupe_keeps_first_occurrence_and_drops_blank_names():
    rows = [
        {"Campaign Name": "A", "Budget": "1"},
        {"Campaign Name": "B", "Budget": "2"},
        {"Campaign Name": "A", "Budget": "3"},
        {"Campaign Name": "  ", "Budget": "4"},
    ]

    kept = dedupe_rows_by_campaign_name(rows)

    assert [number for number, _ in kept] == [1, 2]
    assert kept[0][1]["Budget"] == "1"


# --- Page / post IDs ---

def test_basic_row_maps_targeting():
    record = _map({
        "Campaign Name": "Test",
        "Countries": "VN,US",
        "Gender": "Female",
        "Age Min": "20",
        "Age Max": "40",
        "Campaign Daily Budget": "100000",
    })

    assert record["name"] == "Test"
    assert record["daily_budget"] == 100000
    assert record["targeting"]["genders"] == [2]
    assert record["targeting"]["age_min"] == 20
    assert record["targeting"]["age_max"] == 40
    assert record["targeting"]["geo_locations"] == {"countries": ["VN", "US"]}
    assert record["status"] == "PAUSED"
    assert record["source"] == "facebook_csv_import"


def test_permalink_supplies_page_and_post():
    record = _map({
        "Campaign Name": "Perma",
        "Permalink": "https://www.facebook.com/104882489141131/posts/724361597203916",
    })

    assert record["page_id"] == "104882489141131"
    assert record["post_id"] == "724361597203916"
    assert record["ad_creative"]["object_story_spec"]["page_id"] == "104882489141131"


def test_link_object_id_takes_priority_over_permalink_page():
    ids = extract_page_and_post_ids(normalize_row({
        "Link Object ID": "o:222333444555666",
        "Permalink": "https://www.facebook.com/104882489141131/posts/998877665544332",
    }))

    assert ids["page_id"] == "222333444555666"
    assert ids["post_id"] == "998877665544332"


def test_vanity_permalink_falls_back_to_page_id_column():
    ids = extract_page_and_post_ids(normalize_row({
        "Permalink": "https://www.facebook.com/mypage/posts/998877665544332",
        "Page ID": "104882489141131",
    }))

    assert ids["page_id"] == "104882489141131"
    assert ids["post_id"] == "998877665544332"


def test_default_page_id_is_last_resort():
    ids = extract_page_and_post_ids(normalize_row({"Story ID": "s:724361597203916"}), default_page_id="104882489141131")

    assert ids["page_id"] == "104882489141131"
    assert ids["post_id"] == "724361597203916"


def test_scientific_ids_keep_the_raw_token():
    record = _map({"Campaign Name": "Sci", "Page ID": "1.04882E+14", "Post ID": '="724361597203916"'})

    assert record["page_id"] == "104882000000000"
    assert record["original_ids"]["page_id"] == "1.04882E+14"
    assert record["post_id"] == "724361597203916"


# --- Targeting and budget ---

def test_address_becomes_custom_location():
    record = _map({"Campaign Name": "Geo", "Addresses": "(10.7769, 106.7009) +5km", "Countries": "US"})

    location = record["targeting"]["geo_locations"]["custom_locations"][0]
    assert location == {"latitude": 10.7769, "longitude": 106.7009, "radius": 5, "distance_unit": "kilometer"}


def test_blank_countries_default_to_vietnam():
    record = _map({"Campaign Name": "Geo"})

    assert record["targeting"]["geo_locations"] == {"countries": ["VN"]}
    assert record["targeting"]["genders"] == [1, 2]


def test_daily_budget_sources():
    assert parse_daily_budget({"Ad Set Daily Budget": "", "Campaign Daily Budget": "100,000 VND"}) == 100000
    assert parse_daily_budget({"Ad Set Daily Budget": "0", "Campaign Daily Budget": "60000"}) == 60000
    assert parse_daily_budget({"Ad Set Daily Budget": "70000", "Campaign Daily Budget": "60000"}) == 70000
    assert parse_daily_budget({}) == 50000


def test_parse_age_keeps_garbage_for_validation():
    assert parse_age("", 18) == 18
    assert parse_age("25", 18) == 25
    assert parse_age("twenty", 18) == "twenty"


def test_status_is_active_only_on_exact_token():
    assert derive_status({"Campaign Status": "ACTIVE"}) == "ACTIVE"
    assert derive_status({"Ad Set Run Status": "ACTIVE"}) == "ACTIVE"
    assert derive_status({"Campaign Status": "active"}) == "PAUSED"


# --- Date handling ---

def test_simple_datetime_gets_zone_offset():
    assert normalize_datetime("2025-07-01 08:00:00", "Asia/Ho_Chi_Minh") == "2025-07-01T08:00:00+0700"
    assert normalize_datetime("2025-07-01T08:00:00+0700") == "2025-07-01T08:00:00+0700"


def test_blank_start_time_means_now_and_blank_end_time_is_none():
    record = _map({"Campaign Name": "Now"})

    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\+0700$", record["start_time"])
    assert record["end_time"] is None


def test_creative_defaults():
    record = _map({"Campaign Name": "Creative", "Body": "Buy now", "Display Link": "https://example.com"})
    link_data = record["ad_creative"]["object_story_spec"]["link_data"]

    assert link_data["message"] == "Buy now"
    assert link_data["call_to_action"]["value"]["link"] == "https://example.com"
    assert record["adset_name"] == "Creative - AdSet"
    assert record["ad_name"] == "Creative - Ad"


# --- Account IDs ---

def test_account_prefix_is_stripped_but_raw_value_kept():
    record = _map({"Campaign Name": "Acct", "Ad Account ID": "act_568800062218281"})

    assert record["account_id"] == "568800062218281"
    assert record["original_ids"]["account_id"] == "act_568800062218281"


def test_normalize_account_id():
    assert normalize_account_id("568800062218281") == "568800062218281"
    assert normalize_account_id('="act_568800062218281"') == "568800062218281"
    assert normalize_account_id("ACT_568800062218281") == "568800062218281"
    assert normalize_account_id("") == ""


def test_adset_and_ad_names_come_from_their_columns():
    record = _map({"Campaign Name": "Named", "Ad Set Name": "Set 1", "Ad Name": "Ad 1"})

    assert record["adset_name"] == "Set 1"
    assert record["ad_name"] == "Ad 1"
