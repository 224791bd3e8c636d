# bulkads/services/facebook/facebook_ads_service.py

import json
import requests
from typing import Dict, Any, List, Optional

from ...utils.logger import Log


class FacebookAdsService:
    """
    Thin client over the Facebook Marketing API for bulk campaign import.

    Every call returns {"success": True, "data": ...} or
    {"success": False, "error": ..., "error_message": ...}; nothing raises
    on a remote failure.
    """

    API_VERSION = "v23.0"
    GRAPH_URL = "https://graph.facebook.com"
    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        access_token: str,
        ad_account_id: str = None,
        api_version: str = None,
        timeout: int = None,
    ):
        """
        Args:
            access_token: User access token with ads_management permission
            ad_account_id: Ad account ID, with or without the "act_" prefix
            api_version: Graph API version, defaults to API_VERSION
            timeout: Per-request timeout in seconds
        """
        self.access_token = access_token
        self.api_version = api_version or self.API_VERSION
        self.base_url = f"{self.GRAPH_URL}/{self.api_version}"
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self.ad_account_id = None

        if ad_account_id:
            if not str(ad_account_id).startswith("act_"):
                self.ad_account_id = f"act_{ad_account_id}"
            else:
                self.ad_account_id = str(ad_account_id)

    def _require_ad_account(self):
        if not self.ad_account_id:
            raise ValueError("ad_account_id is required for this operation. Initialize the service with an ad_account_id.")

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        data: Optional[Dict] = None,
    ) -> Dict[str, Any]:
        """Make a request to the Graph API and fold the outcome into a result dict."""

        url = f"{self.base_url}/{endpoint}"

        params = dict(params or {})
        params["access_token"] = self.access_token

        log_tag = f"[FacebookAdsService][_request][{method}][{endpoint}]"

        try:
            if method == "GET":
                response = requests.get(url, params=params, timeout=self.timeout)
            elif method == "POST":
                response = requests.post(url, params=params, data=data, timeout=self.timeout)
            else:
                return {"success": False, "error": f"Unsupported method: {method}", "error_message": f"Unsupported method: {method}"}

            result = response.json()

            if isinstance(result, dict) and "error" in result:
                error = result["error"] if isinstance(result["error"], dict) else {"message": str(result["error"])}
                Log.error(f"{log_tag} API error: {error}")
                return {
                    "success": False,
                    "error": error,
                    "error_message": error.get("error_user_msg") or error.get("message", "Unknown error"),
                    "error_code": error.get("code"),
                    "error_subcode": error.get("error_subcode"),
                }

            return {"success": True, "data": result}

        except requests.Timeout:
            Log.error(f"{log_tag} Request timeout")
            return {"success": False, "error": "Request timeout", "error_message": "Request timeout"}

        except ValueError as e:
            Log.error(f"{log_tag} Invalid JSON response: {e}")
            return {"success": False, "error": str(e), "error_message": "Invalid response from Facebook"}

        except requests.RequestException as e:
            Log.error(f"{log_tag} Request failed: {e}")
            return {"success": False, "error": str(e), "error_message": str(e)}

    # =========================================
    # TOKEN / POSTS
    # =========================================

    def validate_token(self) -> Dict[str, Any]:
        """Probe /me so a bad token fails the whole batch up front."""
        return self._request("GET", "me", params={"fields": "id,name"})

    def get_post(self, post_id: str) -> Dict[str, Any]:
        return self._request("GET", post_id, params={"fields": "id,message,created_time"})

    def get_page_posts(self, page_id: str, limit: int = 100) -> Dict[str, Any]:
        return self._request(
            "GET",
            f"{page_id}/posts",
            params={"fields": "id,message,created_time", "limit": limit},
        )

    # =========================================
    # CAMPAIGN MANAGEMENT
    # =========================================

    def create_campaign(
        self,
        name: str,
        objective: str = "OUTCOME_ENGAGEMENT",
        status: str = "PAUSED",
        special_ad_categories: List[str] = None,
        buying_type: str = "AUCTION",
    ) -> Dict[str, Any]:
        """
        Create an ad campaign.

        Objectives (ODAX): OUTCOME_AWARENESS, OUTCOME_TRAFFIC,
        OUTCOME_ENGAGEMENT, OUTCOME_LEADS, OUTCOME_SALES, OUTCOME_APP_PROMOTION.
        """
        self._require_ad_account()

        data = {
            "name": name,
            "objective": objective,
            "status": status,
            "buying_type": buying_type,
            "special_ad_categories": json.dumps(special_ad_categories or ["NONE"]),
        }

        return self._request("POST", f"{self.ad_account_id}/campaigns", data=data)

    # =========================================
    # AD SET MANAGEMENT
    # =========================================

    def create_adset(
        self,
        campaign_id: str,
        name: str,
        targeting: Dict[str, Any],
        daily_budget: int,
        start_time: str,
        end_time: Optional[str] = None,
        optimization_goal: str = "POST_ENGAGEMENT",
        billing_event: str = "IMPRESSIONS",
        bid_strategy: str = "LOWEST_COST_WITHOUT_CAP",
        destination_type: Optional[str] = None,
        status: str = "PAUSED",
    ) -> Dict[str, Any]:
        """
        Create a daily-budget ad set. Times are ISO-8601 strings with offset.
        """
        self._require_ad_account()

        targeting = dict(targeting)
        if "targeting_automation" not in targeting:
            targeting["targeting_automation"] = {"advantage_audience": 0}

        data = {
            "campaign_id": campaign_id,
            "name": name,
            "targeting": json.dumps(targeting),
            "daily_budget": str(daily_budget),
            "optimization_goal": optimization_goal,
            "billing_event": billing_event,
            "bid_strategy": bid_strategy,
            "start_time": start_time,
            "status": status,
        }

        if destination_type:
            data["destination_type"] = destination_type
        if end_time:
            data["end_time"] = end_time

        return self._request("POST", f"{self.ad_account_id}/adsets", data=data)

    # =========================================
    # AD CREATIVE / AD
    # =========================================

    def create_creative_from_post(
        self,
        name: str,
        page_id: str,
        post_id: str,
    ) -> Dict[str, Any]:
        """Create a creative that promotes an existing page post."""
        self._require_ad_account()

        data = {
            "name": name,
            "object_story_id": f"{page_id}_{post_id}",
        }

        return self._request("POST", f"{self.ad_account_id}/adcreatives", data=data)

    def create_ad(
        self,
        name: str,
        adset_id: str,
        creative_id: str,
        status: str = "PAUSED",
    ) -> Dict[str, Any]:
        """Create an ad linking an ad set and a creative."""
        self._require_ad_account()

        data = {
            "name": name,
            "adset_id": adset_id,
            "creative": json.dumps({"creative_id": creative_id}),
            "status": status,
        }

        return self._request("POST", f"{self.ad_account_id}/ads", data=data)
