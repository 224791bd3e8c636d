import os
import tempfile

# The logger opens its daily file at import time
os.environ.setdefault("APP_LOG_DIR", tempfile.mkdtemp(prefix="bulkads-logs-"))
os.environ.setdefault("APP_LOG_LEVEL", "WARNING")

import jwt
import pytest

from bulkads import create_app


TEST_SECRET = "test-secret-key"


class FakeFacebookAdsService:
    """In-memory stand-in for FacebookAdsService that records every call."""

    def __init__(self, fail_on=None, fail_adset_for=(), post_lookup="found", token_valid=True, raise_on=None):
        self.fail_on = fail_on or {}
        self.fail_adset_for = set(fail_adset_for)
        self.post_lookup = post_lookup
        self.token_valid = token_valid
        self.raise_on = raise_on
        self.calls = []
        self._counter = 0

    def _next_id(self, prefix):
        self._counter += 1
        return f"{prefix}{self._counter}"

    def _respond(self, step, prefix):
        if self.raise_on == step:
            raise RuntimeError(f"{step} exploded")
        if step in self.fail_on:
            return {"success": False, "error": {"message": self.fail_on[step]}, "error_message": self.fail_on[step]}
        return {"success": True, "data": {"id": self._next_id(prefix)}}

    def validate_token(self):
        self.calls.append(("validate_token", {}))
        if self.token_valid:
            return {"success": True, "data": {"id": "me"}}
        return {"success": False, "error_message": "Error validating access token"}

    def create_campaign(self, **kwargs):
        self.calls.append(("campaign", kwargs))
        return self._respond("campaign", "cmp_")

    def create_adset(self, **kwargs):
        self.calls.append(("adset", kwargs))
        if kwargs.get("name") in self.fail_adset_for:
            return {"success": False, "error_message": "Invalid parameter"}
        return self._respond("adset", "set_")

    def get_post(self, post_id):
        self.calls.append(("get_post", {"post_id": post_id}))
        if self.post_lookup == "found":
            return {"success": True, "data": {"id": post_id}}
        return {"success": False, "error_message": "Unsupported get request"}

    def get_page_posts(self, page_id, limit=100):
        self.calls.append(("get_page_posts", {"page_id": page_id, "limit": limit}))
        if self.post_lookup == "missing":
            return {"success": True, "data": {"data": [{"id": f"{page_id}_1111111111"}]}}
        return {"success": False, "error_message": "(#10) Permission denied"}

    def create_creative_from_post(self, **kwargs):
        self.calls.append(("creative", kwargs))
        return self._respond("creative", "crv_")

    def create_ad(self, **kwargs):
        self.calls.append(("ad", kwargs))
        return self._respond("ad", "ad_")

    def steps(self):
        return [name for name, _ in self.calls]


class FakeLogStore:
    """Implements the create_log / update_log contract of CampaignLog."""

    def __init__(self, fail_create=False, fail_update=False):
        self.fail_create = fail_create
        self.fail_update = fail_update
        self.logs = {}

    def create_log(self, data):
        if self.fail_create:
            raise ConnectionError("mongo is down")
        log_id = f"log{len(self.logs) + 1}"
        self.logs[log_id] = {"_id": log_id, **data}
        return self.logs[log_id]

    def update_log(self, log_id, updates):
        if self.fail_update:
            raise ConnectionError("mongo is down")
        self.logs[log_id].update(updates)
        return True


@pytest.fixture
def fake_service():
    return FakeFacebookAdsService()


@pytest.fixture
def log_store():
    return FakeLogStore()


@pytest.fixture
def make_service():
    return FakeFacebookAdsService


@pytest.fixture
def make_log_store():
    return FakeLogStore


@pytest.fixture
def valid_record():
    return {
        "name": "Summer Sale",
        "page_id": "104882489141131",
        "post_id": "724361597203916",
        "account_id": "568800062218281",
        "daily_budget": 50000,
        "age_min": 18,
        "age_max": 45,
        "start_time": "2025-07-01T00:00:00+0700",
        "end_time": "2025-07-10T00:00:00+0700",
        "campaign_objective": "engagement",
        "optimization_goal": "Post Engagement",
        "bid_strategy": "Automatic",
        "billing_event": "Impressions",
        "destination_type": "",
        "targeting": {
            "geo_locations": {"countries": ["VN"]},
            "genders": [1, 2],
            "age_min": 18,
            "age_max": 45,
            "targeting_automation": {"advantage_audience": 0},
        },
        "ad_creative": {
            "object_story_spec": {
                "page_id": "104882489141131",
                "link_data": {
                    "message": "Hello",
                    "call_to_action": {"type": "", "value": {"link": "https://facebook.com"}},
                },
            },
        },
        "original_ids": {
            "page_id": "104882489141131",
            "post_id": "724361597203916",
            "account_id": "568800062218281",
        },
    }


@pytest.fixture(scope="session")
def app():
    app = create_app("testing")
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    token = jwt.encode({"user_id": "user-1"}, TEST_SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}
