# bulkads/services/facebook/batch_runner.py

from typing import Any, Dict, Iterable, Optional

from ...utils.logger import Log


STATUS_PENDING = "pending"
STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

ADS_MANAGER_URL = "https://business.facebook.com/adsmanager/manage"


def build_facebook_urls(ids: Dict[str, str]) -> Dict[str, str]:
    urls = {}
    if ids.get("campaign_id"):
        urls["campaign"] = f"{ADS_MANAGER_URL}/campaigns/detail?campaign_id={ids['campaign_id']}"
    if ids.get("adset_id"):
        urls["adset"] = f"{ADS_MANAGER_URL}/adsets/detail?adset_id={ids['adset_id']}"
    if ids.get("ad_id"):
        urls["ad"] = f"{ADS_MANAGER_URL}/ads/detail?ad_id={ids['ad_id']}"
    return urls


def _facebook_ids(result: Dict[str, Any]) -> Dict[str, str]:
    return {key: result.get(key, "") for key in ("campaign_id", "adset_id", "creative_id", "ad_id")}


def _create_pending_log(log_store, campaign, account_id, user_id, row_number, log_tag) -> Optional[str]:
    try:
        log = log_store.create_log({
            "name": campaign.get("name"),
            "status": STATUS_PENDING,
            "account_id": account_id,
            "user_id": user_id,
            "row_number": row_number,
            "csv_row": campaign.get("original_data"),
            "daily_budget": campaign.get("daily_budget"),
        })
        return str(log["_id"]) if log and log.get("_id") else None
    except Exception as e:
        Log.error(f"{log_tag} Failed to create pending log: {e}")
        return None


def _update_log(log_store, log_id, updates, log_tag):
    if not log_id:
        return
    try:
        log_store.update_log(log_id, updates)
    except Exception as e:
        Log.error(f"{log_tag} Failed to update log {log_id}: {e}")


def run_campaign_batch(
    campaigns: Iterable[Any],
    orchestrator,
    log_store,
    account_id: str,
    user_id: str,
) -> Dict[str, Any]:
    """
    Create each campaign in turn and record its outcome.

    `campaigns` holds either records or (row_number, record) pairs. Log-store
    failures are logged and never stop the batch. Returns the itemised
    results with totalProcessed, successCount and errorCount.
    """
    results = []
    success_count = 0
    error_count = 0

    for position, item in enumerate(campaigns, start=1):
        row_number, campaign = item if isinstance(item, tuple) else (position, item)
        name = campaign.get("name")
        log_tag = f"[batch_runner.py][run_campaign_batch][account:{account_id}][user:{user_id}][{name}]"

        log_id = _create_pending_log(log_store, campaign, account_id, user_id, row_number, log_tag)

        outcome = orchestrator.create_full_campaign(campaign)
        facebook_ids = _facebook_ids(outcome)

        entry = {
            "name": name,
            "row": row_number,
            "facebook_ids": facebook_ids,
            "facebook_urls": build_facebook_urls(facebook_ids),
        }
        if log_id:
            entry["log_id"] = log_id
        if outcome.get("warnings"):
            entry["warnings"] = list(outcome["warnings"])

        if outcome.get("error"):
            error_count += 1
            entry["status"] = STATUS_ERROR
            entry["error"] = outcome["error"]
            entry["failed_step"] = outcome.get("failed_step")
            _update_log(log_store, log_id, {
                "status": STATUS_ERROR,
                "error_message": outcome["error"],
                "facebook_ids": facebook_ids,
            }, log_tag)
            Log.info(f"{log_tag} Campaign failed at {outcome.get('failed_step')}")
        else:
            success_count += 1
            entry["status"] = STATUS_SUCCESS
            _update_log(log_store, log_id, {
                "status": STATUS_SUCCESS,
                "facebook_ids": facebook_ids,
            }, log_tag)
            Log.info(f"{log_tag} Campaign created: {facebook_ids}")

        results.append(entry)

    return {
        "results": results,
        "totalProcessed": len(results),
        "successCount": success_count,
        "errorCount": error_count,
    }
