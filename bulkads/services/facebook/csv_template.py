# bulkads/services/facebook/csv_template.py

import pandas as pd


TEMPLATE_HEADERS = [
    "name",
    "page_id",
    "post_id",
    "daily_budget",
    "age_min",
    "age_max",
    "start_time",
    "end_time",
    "account_id",
    "campaign_objective",
    "optimization_goal",
    "bid_strategy",
    "billing_event",
    "destination_type",
]

# IDs are wrapped as ="..." so spreadsheets keep them as text
TEMPLATE_SAMPLE_ROW = [
    "Campaign Test",
    '="104882489141131"',
    '="724361597203916"',
    "50000",
    "18",
    "45",
    "2025-07-01T00:00:00+0700",
    "2025-07-10T00:00:00+0700",
    '="568800062218281"',
    "Outcome Engagement",
    "Post Engagement",
    "Automatic",
    "Impressions",
    "On Post",
]

TEMPLATE_FORMATS = {
    "csv": {"sep": ",", "mimetype": "text/csv", "filename": "campaign_template.csv"},
    "txt": {"sep": "\t", "mimetype": "text/plain", "filename": "campaign_template.txt"},
}


def generate_csv_template(fmt: str = "csv") -> str:
    """Template file body: header line plus one sample campaign."""
    options = TEMPLATE_FORMATS.get(fmt, TEMPLATE_FORMATS["csv"])
    df = pd.DataFrame([TEMPLATE_SAMPLE_ROW], columns=TEMPLATE_HEADERS)
    return df.to_csv(index=False, sep=options["sep"], lineterminator="\n")
