import pytest

from bulkads.constants.facebook_enums import (
    BID_STRATEGIES,
    BILLING_EVENTS,
    CAMPAIGN_OBJECTIVES,
    DESTINATION_TYPES,
    OPTIMIZATION_GOALS,
)
from bulkads.services.facebook.enum_mapper import (
    auto_map_facebook_enums,
    check_enum_compatibility,
    map_bid_strategy,
    map_billing_event,
    map_call_to_action,
    map_campaign_objective,
    map_destination_type,
    map_optimization_goal,
)


@pytest.mark.parametrize("value", [None, "", "   "])
def test_blank_values_get_defaults(value):
    assert map_campaign_objective(value) == "OUTCOME_ENGAGEMENT"
    assert map_optimization_goal(value) == "CONVERSATIONS"
    assert map_billing_event(value) == "LINK_CLICKS"
    assert map_bid_strategy(value) == "LOWEST_COST_WITHOUT_CAP"
    assert map_destination_type(value) == "WEBSITE"


@pytest.mark.parametrize("mapper, value, expected", [
    (map_campaign_objective, "Outcome Engagement", "OUTCOME_ENGAGEMENT"),
    (map_campaign_objective, "brand awareness", "OUTCOME_AWARENESS"),
    (map_campaign_objective, "Website Traffic", "OUTCOME_TRAFFIC"),
    (map_campaign_objective, "CONVERSIONS", "OUTCOME_SALES"),
    (map_optimization_goal, "Post Engagement", "POST_ENGAGEMENT"),
    (map_optimization_goal, "MESSAGES", "CONVERSATIONS"),
    (map_optimization_goal, "clicks", "LINK_CLICKS"),
    (map_optimization_goal, "leads", "LEAD_GENERATION"),
    (map_bid_strategy, "Highest volume or value", "LOWEST_COST_WITHOUT_CAP"),
    (map_bid_strategy, "Automatic", "LOWEST_COST_WITHOUT_CAP"),
    (map_bid_strategy, "manual bidding", "LOWEST_COST_WITH_BID_CAP"),
    (map_bid_strategy, "Cost Cap", "COST_CAP"),
    (map_billing_event, "IMPRESSIONS", "IMPRESSIONS"),
    (map_billing_event, "impression", "IMPRESSIONS"),
    (map_billing_event, "Link Clicks", "LINK_CLICKS"),
    (map_destination_type, "messenger", "MESSENGER"),
    (map_destination_type, "phone call", "PHONE_CALL"),
])
def test_synonyms_map_to_graph_api_tokens(mapper, value, expected):
    assert mapper(value) == expected


def test_unknown_values_pass_through_except_destination_type():
    assert map_optimization_goal("SOME_NEW_GOAL") == "SOME_NEW_GOAL"
    assert map_campaign_objective("  Mystery ") == "Mystery"
    assert map_destination_type("On Post") == "WEBSITE"
    assert map_destination_type("ON_PAGE") == "WEBSITE"


@pytest.mark.parametrize("mapper, tokens", [
    (map_campaign_objective, CAMPAIGN_OBJECTIVES),
    (map_optimization_goal, OPTIMIZATION_GOALS),
    (map_bid_strategy, BID_STRATEGIES),
    (map_billing_event, BILLING_EVENTS),
    (map_destination_type, DESTINATION_TYPES),
])
def test_mapping_is_idempotent_on_canonical_tokens(mapper, tokens):
    for token in tokens:
        assert mapper(token) == token
        assert mapper(mapper(token)) == mapper(token)


def test_call_to_action_mapping():
    assert map_call_to_action("See More") == "LEARN_MORE"
    assert map_call_to_action("shop now") == "SHOP_NOW"
    assert map_call_to_action("") == "LEARN_MORE"
    assert map_call_to_action("whatever") == "LEARN_MORE"


def test_auto_map_returns_new_record(valid_record):
    mapped = auto_map_facebook_enums(valid_record)

    assert mapped is not valid_record
    assert valid_record["campaign_objective"] == "engagement"
    assert mapped["campaign_objective"] == "OUTCOME_ENGAGEMENT"
    assert mapped["optimization_goal"] == "POST_ENGAGEMENT"
    assert mapped["bid_strategy"] == "LOWEST_COST_WITHOUT_CAP"
    assert mapped["billing_event"] == "IMPRESSIONS"
    assert mapped["destination_type"] == "WEBSITE"


def test_auto_map_never_leaves_enum_fields_empty():
    mapped = auto_map_facebook_enums({"name": "x"})

    for field in ("campaign_objective", "optimization_goal", "bid_strategy", "billing_event", "destination_type"):
        assert mapped[field]


def test_messenger_destination_switches_learn_more_to_message_page(valid_record):
    valid_record["destination_type"] = "Messenger"
    valid_record["ad_creative"]["object_story_spec"]["link_data"]["call_to_action"]["type"] = "LEARN_MORE"

    mapped = auto_map_facebook_enums(valid_record)

    assert mapped["ad_creative"]["object_story_spec"]["link_data"]["call_to_action"]["type"] == "MESSAGE_PAGE"
    assert valid_record["ad_creative"]["object_story_spec"]["link_data"]["call_to_action"]["type"] == "LEARN_MORE"


def test_compatibility_accepts_plausible_pairs():
    assert check_enum_compatibility({"campaign_objective": "OUTCOME_SALES", "optimization_goal": "OFFSITE_CONVERSIONS"}) == []
    assert check_enum_compatibility({"campaign_objective": "OUTCOME_LEADS", "optimization_goal": "LEAD_GENERATION"}) == []


def test_compatibility_warns_on_mismatch_without_failing():
    warnings = check_enum_compatibility({"campaign_objective": "OUTCOME_AWARENESS", "optimization_goal": "LEAD_GENERATION"})

    assert len(warnings) == 1
    assert "may not be compatible" in warnings[0]


def test_compatibility_flags_passthrough_values():
    warnings = check_enum_compatibility({"campaign_objective": "OUTCOME_SALES", "optimization_goal": "SOME_NEW_GOAL"})

    assert any("SOME_NEW_GOAL" in w and "not a recognised" in w for w in warnings)
