import pytest

from bulkads.services.facebook.csv_import_service import build_campaigns_from_rows, build_csv_preview
from bulkads.services.facebook.csv_template import generate_csv_template
from bulkads.utils.csv_decoder import CsvInputError, read_csv_upload


def _row(name, **overrides):
    row = {
        "Campaign Name": name,
        "Page ID": "104882489141131",
        "Story ID": "s:724361597203916",
        "Campaign Daily Budget": "50000",
        "Campaign Start Time": "2025-07-01 08:00:00",
    }
    row.update(overrides)
    return row


def test_valid_invalid_and_duplicate_rows():
    rows = [
        _row("A"),
        _row("B", **{"Campaign Daily Budget": "15000"}),
        _row("A"),
        _row("C", **{"Page ID": "1.04882E+14"}),
    ]

    built = build_campaigns_from_rows(list(rows[0].keys()), rows)

    assert [number for number, _ in built["campaigns"]] == [1]
    assert built["campaigns"][0][1]["start_time"] == "2025-07-01T08:00:00+0700"
    assert built["duplicates"] == 1
    assert len(built["parse_errors"]) == 2
    assert built["parse_errors"][0].startswith("Row 2: daily_budget")
    assert built["parse_errors"][1].startswith("Row 4: page_id contains scientific notation")
    assert built["error_details"][1]["kind"] == "scientific_notation"


def test_fallback_name_column_is_used():
    rows = [{"Campaign Name VN": "A", "Page ID": "104882489141131", "Post ID": "724361597203916"}]

    built = build_campaigns_from_rows(["Campaign Name VN", "Page ID", "Post ID"], rows)

    assert built["campaigns"][0][1]["name"] == "A"


def test_default_page_id_from_form():
    rows = [{"Campaign Name": "A", "Story ID": "724361597203916"}]

    built = build_campaigns_from_rows(["Campaign Name", "Story ID"], rows, default_page_id="104882489141131")

    assert built["campaigns"][0][1]["page_id"] == "104882489141131"


def test_missing_name_column_is_an_input_error():
    with pytest.raises(CsvInputError, match="campaign name column"):
        build_campaigns_from_rows(["Budget"], [{"Budget": "50000"}])


def test_preview_summarises_upload():
    raw = (
        "Campaign Name,Campaign Status,Campaign Objective,Campaign Daily Budget,Addresses,Body\n"
        "A,ACTIVE,Engagement,50000,,Hello\n"
        ",,,,,\n"
        "B,PAUSED,Engagement,60000,,Hi\n"
    ).encode("utf-8")

    preview = build_csv_preview(raw)

    assert preview["delimiter"] == ","
    assert preview["totalHeaders"] == 6
    assert preview["essentialFields"] == {
        "campaignName": "Campaign Name",
        "campaignStatus": "Campaign Status",
        "campaignObjective": "Campaign Objective",
        "budget": "Campaign Daily Budget",
        "targeting": "Addresses",
        "content": "Body",
    }
    assert len(preview["sampleData"]) == 2
    assert preview["stats"] == {"totalRows": 3, "validRows": 2, "emptyRows": 1}
    assert preview["encoding"]["detectedEncoding"] == "utf-8"
    assert preview["encoding"]["hasIssues"] is False


# --- Template ---

def test_csv_template_round_trips_through_the_importer():
    parsed = read_csv_upload(generate_csv_template("csv").encode("utf-8"))

    built = build_campaigns_from_rows(parsed.headers, parsed.rows)

    assert built["parse_errors"] == []
    record = built["campaigns"][0][1]
    assert record["name"] == "Campaign Test"
    assert record["page_id"] == "104882489141131"
    assert record["post_id"] == "724361597203916"
    assert record["account_id"] == "568800062218281"


def test_txt_template_is_tab_separated():
    body = generate_csv_template("txt")

    header, sample = body.strip("\n").split("\n")
    assert header.split("\t")[0] == "name"
    assert len(sample.split("\t")) == len(header.split("\t"))
    assert "104882489141131" in sample


def test_huge_exponent_is_one_rejected_row():
    rows = [_row("A"), _row("B", **{"Page ID": "1E+99999999999"})]

    built = build_campaigns_from_rows(list(rows[0].keys()), rows)

    assert [number for number, _ in built["campaigns"]] == [1]
    assert built["parse_errors"] == [
        'Row 2: page_id contains scientific notation "1E+99999999999". Please format the column as '
        "TEXT in Excel/Google Sheets before entering data."
    ]


def test_prefixed_account_id_row_is_accepted():
    rows = [{
        "Campaign Name": "A",
        "Permalink": "https://www.facebook.com/104882489141131/posts/724361597203916",
        "Age Min": "20",
        "Age Max": "40",
        "Campaign Daily Budget": "100000",
        "Account ID": "act_568800062218281",
    }]

    built = build_campaigns_from_rows(list(rows[0].keys()), rows)

    assert built["parse_errors"] == []
    assert built["campaigns"][0][1]["account_id"] == "568800062218281"
