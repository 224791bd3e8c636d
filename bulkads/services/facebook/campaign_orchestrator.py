# bulkads/services/facebook/campaign_orchestrator.py

from typing import Any, Dict, Optional

from ...constants.facebook_enums import DEFAULT_AGE_MAX, DEFAULT_AGE_MIN, DEFAULT_COUNTRY, MIN_DAILY_BUDGET
from ...utils.logger import Log
from .campaign_validator import PostIdFormatError, check_post_id_format
from .enum_mapper import auto_map_facebook_enums, check_enum_compatibility


STEP_POST_FORMAT = "post_format"
STEP_CAMPAIGN = "campaign"
STEP_ADSET = "adset"
STEP_POST_VALIDATION = "post_validation"
STEP_CREATIVE = "creative"
STEP_AD = "ad"

CREATIVE_FAILURE_CHECKLIST = (
    "Possible causes:\n"
    "1. The post was deleted or is no longer available\n"
    "2. The page ID does not own this post\n"
    "3. The post is private or restricted and cannot be promoted\n"
    "4. The access token lacks pages_read_engagement / ads_management permission\n"
    "5. The post ID is malformed (it must not include the page ID prefix)"
)


def new_creation_result() -> Dict[str, Any]:
    return {
        "campaign_id": "",
        "adset_id": "",
        "creative_id": "",
        "ad_id": "",
        "error": "",
        "failed_step": None,
        "warnings": [],
    }


def _error_message(response: Dict[str, Any]) -> str:
    return str(response.get("error_message") or response.get("error") or "Unknown error")


class CampaignOrchestrator:
    """
    Runs Campaign -> AdSet -> (post check) -> Creative -> Ad for one campaign
    record against a FacebookAdsService.

    Every object is created PAUSED. A failed step stops the chain and the
    IDs created so far stay in the result; nothing is rolled back.
    """

    def __init__(self, service, strict_post_validation: bool = False):
        self.service = service
        self.strict_post_validation = strict_post_validation

    def create_full_campaign(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Never raises; failures are reported through `error` and `failed_step`."""
        result = new_creation_result()
        name = (record or {}).get("name") or "Untitled"
        log_tag = f"[CampaignOrchestrator][create_full_campaign][{name}]"

        try:
            return self._run(record, result, log_tag)
        except Exception as e:
            Log.error(f"{log_tag} Unexpected error: {e}")
            result["error"] = str(e) or e.__class__.__name__
            result["failed_step"] = result["failed_step"] or self._next_step(result)
            return result

    @staticmethod
    def _next_step(result: Dict[str, Any]) -> str:
        if not result["campaign_id"]:
            return STEP_CAMPAIGN
        if not result["adset_id"]:
            return STEP_ADSET
        if not result["creative_id"]:
            return STEP_CREATIVE
        return STEP_AD

    def _fail(self, result, step, message, log_tag):
        Log.error(f"{log_tag} {step} failed: {message}")
        result["error"] = message
        result["failed_step"] = step
        return result

    def _run(self, record, result, log_tag):
        data = auto_map_facebook_enums(record)
        name = data.get("name")
        page_id = str(data.get("page_id") or "")
        post_id = str(data.get("post_id") or "")

        result["warnings"].extend(check_enum_compatibility(data))

        # 0. Post ID sanity check before anything is created remotely
        try:
            check_post_id_format(post_id, page_id)
        except PostIdFormatError as e:
            return self._fail(result, STEP_POST_FORMAT, str(e), log_tag)

        # 1. Campaign
        Log.info(f"{log_tag} Creating campaign...")
        campaign_result = self.service.create_campaign(
            name=name,
            objective=data["campaign_objective"],
            status="PAUSED",
            special_ad_categories=["NONE"],
            buying_type="AUCTION",
        )
        if not campaign_result.get("success"):
            return self._fail(result, STEP_CAMPAIGN, _error_message(campaign_result), log_tag)

        result["campaign_id"] = str(campaign_result["data"]["id"])
        Log.info(f"{log_tag} Campaign created: {result['campaign_id']}")

        # 2. Ad set
        adset_result = self.service.create_adset(
            campaign_id=result["campaign_id"],
            name=data.get("adset_name") or f"{name} - AdSet",
            targeting=self._targeting_for(data),
            daily_budget=max(MIN_DAILY_BUDGET, int(data.get("daily_budget") or 0)),
            start_time=data.get("start_time"),
            end_time=data.get("end_time") or None,
            optimization_goal=data["optimization_goal"],
            billing_event=data["billing_event"],
            bid_strategy=data["bid_strategy"],
            destination_type=data["destination_type"],
            status="PAUSED",
        )
        if not adset_result.get("success"):
            return self._fail(result, STEP_ADSET, _error_message(adset_result), log_tag)

        result["adset_id"] = str(adset_result["data"]["id"])
        Log.info(f"{log_tag} Ad Set created: {result['adset_id']}")

        # 3. Post existence (advisory unless strict)
        post_found = self._validate_post(page_id, post_id, log_tag)
        if post_found is False:
            warning = f"Post {post_id} was not found among the recent posts of page {page_id}"
            if self.strict_post_validation:
                return self._fail(result, STEP_POST_VALIDATION, warning, log_tag)
            result["warnings"].append(warning)
            Log.warning(f"{log_tag} {warning}; continuing with creative creation")

        # 4. Creative
        creative_result = self.service.create_creative_from_post(
            name=f"{name} - Creative",
            page_id=page_id,
            post_id=post_id,
        )
        if not creative_result.get("success"):
            message = (
                f"Failed to create ad creative for post {page_id}_{post_id}: "
                f"{_error_message(creative_result)}\n{CREATIVE_FAILURE_CHECKLIST}"
            )
            return self._fail(result, STEP_CREATIVE, message, log_tag)

        result["creative_id"] = str(creative_result["data"]["id"])
        Log.info(f"{log_tag} Creative created: {result['creative_id']}")

        # 5. Ad
        ad_result = self.service.create_ad(
            name=data.get("ad_name") or f"{name} - Ad",
            adset_id=result["adset_id"],
            creative_id=result["creative_id"],
            status="PAUSED",
        )
        if not ad_result.get("success"):
            return self._fail(result, STEP_AD, _error_message(ad_result), log_tag)

        result["ad_id"] = str(ad_result["data"]["id"])
        Log.info(f"{log_tag} Ad created: {result['ad_id']}")

        return result

    @staticmethod
    def _targeting_for(data: Dict[str, Any]) -> Dict[str, Any]:
        targeting = data.get("targeting")
        if targeting:
            return targeting
        return {
            "geo_locations": {"countries": [DEFAULT_COUNTRY]},
            "age_min": data.get("age_min") or DEFAULT_AGE_MIN,
            "age_max": data.get("age_max") or DEFAULT_AGE_MAX,
            "targeting_automation": {"advantage_audience": 0},
        }

    def _validate_post(self, page_id: str, post_id: str, log_tag: str) -> Optional[bool]:
        """
        True when the post is confirmed, False when the page's post listing
        was read and the post is absent, None when neither check could tell.
        """
        direct = self.service.get_post(f"{page_id}_{post_id}")
        if direct.get("success") and (direct.get("data") or {}).get("id"):
            return True

        listing = self.service.get_page_posts(page_id, limit=100)
        if not listing.get("success"):
            Log.info(f"{log_tag} Could not verify post {post_id}: {_error_message(listing)}")
            return None

        for post in (listing.get("data") or {}).get("data", []):
            found_id = str(post.get("id", ""))
            if found_id in (post_id, f"{page_id}_{post_id}") or found_id.endswith(f"_{post_id}"):
                return True

        return False
