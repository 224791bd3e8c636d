# bulkads/services/facebook/enum_mapper.py

import re
from copy import deepcopy
from typing import Any, Dict, List, Optional

from ...constants.facebook_enums import (
    BID_STRATEGIES,
    BID_STRATEGY_MAPPING,
    BILLING_EVENTS,
    BILLING_EVENT_MAPPING,
    CALL_TO_ACTION_MAPPING,
    CALL_TO_ACTION_TYPES,
    CAMPAIGN_OBJECTIVES,
    CAMPAIGN_OBJECTIVE_MAPPING,
    COMPATIBLE_OPTIMIZATION_GOALS,
    DEFAULT_BID_STRATEGY,
    DEFAULT_BILLING_EVENT,
    DEFAULT_CALL_TO_ACTION,
    DEFAULT_CAMPAIGN_OBJECTIVE,
    DEFAULT_DESTINATION_TYPE,
    DEFAULT_OPTIMIZATION_GOAL,
    DESTINATION_TYPES,
    DESTINATION_TYPE_MAPPING,
    OPTIMIZATION_GOALS,
    OPTIMIZATION_GOAL_MAPPING,
)
from ...utils.logger import Log


def _as_token(value: str) -> str:
    return re.sub(r"[\s\-]+", "_", value.strip().upper())


def _as_synonym(value: str) -> str:
    return re.sub(r"[\s_\-]+", " ", value.strip().lower())


def _lookup(value, tokens, synonyms) -> Optional[str]:
    """
    Resolve `value` to a Graph API token: canonical tokens first (so mapping
    is idempotent), then the lower-cased synonym table. None when unknown.
    """
    text = "" if value is None else str(value).strip()
    if not text:
        return None

    token = _as_token(text)
    if token in tokens:
        return token

    return synonyms.get(_as_synonym(text))


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def map_campaign_objective(value) -> str:
    if _blank(value):
        return DEFAULT_CAMPAIGN_OBJECTIVE
    return _lookup(value, CAMPAIGN_OBJECTIVES, CAMPAIGN_OBJECTIVE_MAPPING) or str(value).strip()


def map_optimization_goal(value) -> str:
    if _blank(value):
        return DEFAULT_OPTIMIZATION_GOAL
    return _lookup(value, OPTIMIZATION_GOALS, OPTIMIZATION_GOAL_MAPPING) or str(value).strip()


def map_bid_strategy(value) -> str:
    if _blank(value):
        return DEFAULT_BID_STRATEGY
    return _lookup(value, BID_STRATEGIES, BID_STRATEGY_MAPPING) or str(value).strip()


def map_billing_event(value) -> str:
    if _blank(value):
        return DEFAULT_BILLING_EVENT
    return _lookup(value, BILLING_EVENTS, BILLING_EVENT_MAPPING) or str(value).strip()


def map_destination_type(value) -> str:
    """Destination types never pass through: anything off the whitelist becomes WEBSITE."""
    return _lookup(value, DESTINATION_TYPES, DESTINATION_TYPE_MAPPING) or DEFAULT_DESTINATION_TYPE


def map_call_to_action(value) -> str:
    return _lookup(value, CALL_TO_ACTION_TYPES, CALL_TO_ACTION_MAPPING) or DEFAULT_CALL_TO_ACTION


ENUM_FIELD_MAPPERS = (
    ("campaign_objective", map_campaign_objective),
    ("optimization_goal", map_optimization_goal),
    ("bid_strategy", map_bid_strategy),
    ("billing_event", map_billing_event),
    ("destination_type", map_destination_type),
)


def auto_map_facebook_enums(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of `record` with every enum field rewritten to its Graph
    API token. The input record is left untouched.
    """
    log_tag = "[enum_mapper.py][auto_map_facebook_enums]"
    mapped = deepcopy(record)

    for field, mapper in ENUM_FIELD_MAPPERS:
        original = mapped.get(field)
        mapped[field] = mapper(original)
        if original != mapped[field]:
            Log.debug(f"{log_tag} {field}: {original!r} -> {mapped[field]!r}")

    story_spec = (mapped.get("ad_creative") or {}).get("object_story_spec") or {}
    call_to_action = (story_spec.get("link_data") or {}).get("call_to_action")
    if isinstance(call_to_action, dict):
        call_to_action["type"] = map_call_to_action(call_to_action.get("type"))
        if mapped["destination_type"] == "MESSENGER" and call_to_action["type"] == "LEARN_MORE":
            call_to_action["type"] = "MESSAGE_PAGE"
            Log.debug(f"{log_tag} call_to_action: LEARN_MORE -> MESSAGE_PAGE for MESSENGER destination")

    return mapped


def check_enum_compatibility(record: Dict[str, Any]) -> List[str]:
    """Non-fatal warnings for implausible or unrecognised enum values."""
    warnings = []

    objective = record.get("campaign_objective")
    goal = record.get("optimization_goal")

    for field, tokens in (
        ("campaign_objective", CAMPAIGN_OBJECTIVES),
        ("optimization_goal", OPTIMIZATION_GOALS),
        ("bid_strategy", BID_STRATEGIES),
        ("billing_event", BILLING_EVENTS),
    ):
        value = record.get(field)
        if value and value not in tokens:
            warnings.append(f'{field} "{value}" is not a recognised Facebook value and will be sent as-is')

    compatible = COMPATIBLE_OPTIMIZATION_GOALS.get(objective)
    if compatible is not None and goal and goal not in compatible:
        warnings.append(
            f"optimization_goal {goal} may not be compatible with objective {objective}. "
            f"Expected one of: {', '.join(sorted(compatible))}"
        )

    return warnings
