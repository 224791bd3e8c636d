# bulkads/constants/facebook_enums.py

from types import MappingProxyType


# -------------------- platform defaults --------------------

MIN_DAILY_BUDGET = 30000       # VND, ~$1.2 USD
DEFAULT_DAILY_BUDGET = 50000
DEFAULT_COUNTRY = "VN"
DEFAULT_AGE_MIN = 18
DEFAULT_AGE_MAX = 65
MIN_TARGETING_AGE = 13
MAX_TARGETING_AGE = 65
MIN_ID_LENGTH = 10

DEFAULT_CAMPAIGN_OBJECTIVE = "OUTCOME_ENGAGEMENT"
DEFAULT_OPTIMIZATION_GOAL = "CONVERSATIONS"
DEFAULT_BILLING_EVENT = "LINK_CLICKS"
DEFAULT_BID_STRATEGY = "LOWEST_COST_WITHOUT_CAP"
DEFAULT_DESTINATION_TYPE = "WEBSITE"
DEFAULT_CALL_TO_ACTION = "LEARN_MORE"

DEFAULT_AD_MESSAGE = "Discover our amazing products and services!"
DEFAULT_AD_LINK = "https://facebook.com"


# -------------------- valid Graph API tokens --------------------

CAMPAIGN_OBJECTIVES = frozenset({
    "OUTCOME_AWARENESS",
    "OUTCOME_ENGAGEMENT",
    "OUTCOME_LEADS",
    "OUTCOME_SALES",
    "OUTCOME_TRAFFIC",
    "OUTCOME_APP_PROMOTION",
})

OPTIMIZATION_GOALS = frozenset({
    "NONE", "APP_INSTALLS", "AD_RECALL_LIFT", "ENGAGED_USERS", "EVENT_RESPONSES",
    "IMPRESSIONS", "LEAD_GENERATION", "QUALITY_LEAD", "LINK_CLICKS",
    "OFFSITE_CONVERSIONS", "PAGE_LIKES", "POST_ENGAGEMENT", "QUALITY_CALL", "REACH",
    "LANDING_PAGE_VIEWS", "VISIT_INSTAGRAM_PROFILE", "VALUE", "THRUPLAY",
    "DERIVED_EVENTS", "APP_INSTALLS_AND_OFFSITE_CONVERSIONS", "CONVERSATIONS",
    "IN_APP_VALUE", "MESSAGING_PURCHASE_CONVERSION", "SUBSCRIBERS", "REMINDERS_SET",
    "MEANINGFUL_CALL_ATTEMPT", "PROFILE_VISIT", "PROFILE_AND_PAGE_ENGAGEMENT",
    "ADVERTISER_SILOED_VALUE", "AUTOMATIC_OBJECTIVE", "MESSAGING_APPOINTMENT_CONVERSION",
})

BID_STRATEGIES = frozenset({
    "LOWEST_COST_WITHOUT_CAP",
    "LOWEST_COST_WITH_BID_CAP",
    "COST_CAP",
    "LOWEST_COST_WITH_MIN_ROAS",
})

BILLING_EVENTS = frozenset({
    "APP_INSTALLS", "CLICKS", "IMPRESSIONS", "LINK_CLICKS", "NONE", "OFFER_CLAIMS",
    "PAGE_LIKES", "POST_ENGAGEMENT", "THRUPLAY", "PURCHASE", "LISTING_INTERACTION",
})

DESTINATION_TYPES = frozenset({
    "WEBSITE",
    "MESSENGER",
    "APP",
    "PHONE_CALL",
    "CANVAS",
})

CALL_TO_ACTION_TYPES = frozenset({
    "MESSAGE_PAGE", "LEARN_MORE", "CONTACT_US", "CALL_NOW", "SHOP_NOW", "SIGN_UP",
    "DOWNLOAD", "BOOK_TRAVEL", "GET_QUOTE", "APPLY_NOW", "BOOK_NOW",
})


# -------------------- synonym tables (lower-case keys) --------------------

CAMPAIGN_OBJECTIVE_MAPPING = MappingProxyType({
    "engagement": "OUTCOME_ENGAGEMENT",
    "outcome engagement": "OUTCOME_ENGAGEMENT",
    "post engagement": "OUTCOME_ENGAGEMENT",
    "page likes": "OUTCOME_ENGAGEMENT",
    "event responses": "OUTCOME_ENGAGEMENT",
    "messages": "OUTCOME_ENGAGEMENT",
    "video views": "OUTCOME_ENGAGEMENT",
    "leads": "OUTCOME_LEADS",
    "outcome leads": "OUTCOME_LEADS",
    "lead generation": "OUTCOME_LEADS",
    "sales": "OUTCOME_SALES",
    "outcome sales": "OUTCOME_SALES",
    "conversions": "OUTCOME_SALES",
    "product catalog sales": "OUTCOME_SALES",
    "store visits": "OUTCOME_SALES",
    "traffic": "OUTCOME_TRAFFIC",
    "outcome traffic": "OUTCOME_TRAFFIC",
    "website traffic": "OUTCOME_TRAFFIC",
    "link clicks": "OUTCOME_TRAFFIC",
    "app promotion": "OUTCOME_APP_PROMOTION",
    "outcome app promotion": "OUTCOME_APP_PROMOTION",
    "app install": "OUTCOME_APP_PROMOTION",
    "app installs": "OUTCOME_APP_PROMOTION",
    "awareness": "OUTCOME_AWARENESS",
    "outcome awareness": "OUTCOME_AWARENESS",
    "brand awareness": "OUTCOME_AWARENESS",
    "reach": "OUTCOME_AWARENESS",
})

OPTIMIZATION_GOAL_MAPPING = MappingProxyType({
    "post engagement": "POST_ENGAGEMENT",
    "engagement": "POST_ENGAGEMENT",
    "actions": "POST_ENGAGEMENT",
    "action": "POST_ENGAGEMENT",
    "link clicks": "LINK_CLICKS",
    "clicks": "LINK_CLICKS",
    "landing page views": "LANDING_PAGE_VIEWS",
    "page views": "LANDING_PAGE_VIEWS",
    "conversions": "OFFSITE_CONVERSIONS",
    "offsite conversions": "OFFSITE_CONVERSIONS",
    "leads": "LEAD_GENERATION",
    "lead generation": "LEAD_GENERATION",
    "likes": "PAGE_LIKES",
    "page likes": "PAGE_LIKES",
    "installs": "APP_INSTALLS",
    "app installs": "APP_INSTALLS",
    "messages": "CONVERSATIONS",
    "conversations": "CONVERSATIONS",
    "impressions": "IMPRESSIONS",
    "reach": "REACH",
    "none": "NONE",
    "default": "NONE",
})

BID_STRATEGY_MAPPING = MappingProxyType({
    "automatic": "LOWEST_COST_WITHOUT_CAP",
    "auto bid": "LOWEST_COST_WITHOUT_CAP",
    "lowest cost": "LOWEST_COST_WITHOUT_CAP",
    "highest volume or value": "LOWEST_COST_WITHOUT_CAP",
    "highest volume": "LOWEST_COST_WITHOUT_CAP",
    "bid cap": "LOWEST_COST_WITH_BID_CAP",
    "manual bid": "LOWEST_COST_WITH_BID_CAP",
    "manual bidding": "LOWEST_COST_WITH_BID_CAP",
    "cost cap": "COST_CAP",
    "cost per result goal": "COST_CAP",
    "target cost": "LOWEST_COST_WITH_MIN_ROAS",
    "roas": "LOWEST_COST_WITH_MIN_ROAS",
    "roas goal": "LOWEST_COST_WITH_MIN_ROAS",
})

BILLING_EVENT_MAPPING = MappingProxyType({
    "impression": "IMPRESSIONS",
    "impressions": "IMPRESSIONS",
    "click": "CLICKS",
    "clicks": "CLICKS",
    "link clicks": "LINK_CLICKS",
    "link click": "LINK_CLICKS",
    "actions": "POST_ENGAGEMENT",
    "engagement": "POST_ENGAGEMENT",
    "post engagement": "POST_ENGAGEMENT",
    "conversions": "PURCHASE",
    "purchase": "PURCHASE",
    "purchases": "PURCHASE",
    "installs": "APP_INSTALLS",
    "app installs": "APP_INSTALLS",
    "likes": "PAGE_LIKES",
    "page likes": "PAGE_LIKES",
})

DESTINATION_TYPE_MAPPING = MappingProxyType({
    "website": "WEBSITE",
    "web": "WEBSITE",
    "messenger": "MESSENGER",
    "messages": "MESSENGER",
    "message": "MESSENGER",
    "app": "APP",
    "mobile app": "APP",
    "phone call": "PHONE_CALL",
    "phone": "PHONE_CALL",
    "call": "PHONE_CALL",
    "canvas": "CANVAS",
    "instant experience": "CANVAS",
})

CALL_TO_ACTION_MAPPING = MappingProxyType({
    "see more": "LEARN_MORE",
    "watch more": "LEARN_MORE",
    "send message": "MESSAGE_PAGE",
    "message": "MESSAGE_PAGE",
    "contact": "CONTACT_US",
    "call": "CALL_NOW",
    "shop": "SHOP_NOW",
    "sign up": "SIGN_UP",
    "book": "BOOK_NOW",
    "apply": "APPLY_NOW",
})


# -------------------- objective / goal compatibility --------------------

COMPATIBLE_OPTIMIZATION_GOALS = MappingProxyType({
    "OUTCOME_ENGAGEMENT": frozenset({
        "POST_ENGAGEMENT", "REACH", "IMPRESSIONS", "PAGE_LIKES", "CONVERSATIONS",
        "THRUPLAY", "EVENT_RESPONSES",
    }),
    "OUTCOME_TRAFFIC": frozenset({
        "LINK_CLICKS", "LANDING_PAGE_VIEWS", "REACH", "IMPRESSIONS", "CONVERSATIONS",
    }),
    "OUTCOME_LEADS": frozenset({
        "LEAD_GENERATION", "QUALITY_LEAD", "OFFSITE_CONVERSIONS", "CONVERSATIONS",
        "QUALITY_CALL",
    }),
    "OUTCOME_SALES": frozenset({
        "OFFSITE_CONVERSIONS", "VALUE", "LINK_CLICKS", "LANDING_PAGE_VIEWS",
        "CONVERSATIONS",
    }),
    "OUTCOME_APP_PROMOTION": frozenset({
        "APP_INSTALLS", "APP_INSTALLS_AND_OFFSITE_CONVERSIONS", "IN_APP_VALUE",
    }),
    "OUTCOME_AWARENESS": frozenset({
        "REACH", "IMPRESSIONS", "AD_RECALL_LIFT", "THRUPLAY",
    }),
})
