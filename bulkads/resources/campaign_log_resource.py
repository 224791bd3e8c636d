# bulkads/resources/campaign_log_resource.py

from flask_smorest import Blueprint
from flask import request, g
from flask.views import MethodView
from pymongo.errors import PyMongoError

from ..utils.auth import token_required
from ..utils.helpers import make_log_tag
from ..utils.json_response import prepared_response
from ..utils.logger import Log

from ..models.campaign_log import CampaignLog
from ..schemas.campaign_import_schema import CampaignLogQuerySchema, CampaignLogStatsQuerySchema


blp_campaign_logs = Blueprint("campaign_logs", __name__, description="Campaign import history")


@blp_campaign_logs.route("/campaign-logs", methods=["GET"])
class CampaignLogListResource(MethodView):
    @token_required
    @blp_campaign_logs.arguments(CampaignLogQuerySchema, location="query")
    def get(self, query):
        user_id = (g.get("current_user", {}) or {}).get("user_id")
        log_tag = make_log_tag(
            "campaign_log_resource.py", "CampaignLogListResource", "get",
            request.remote_addr, user_id, query.get("account_id"),
        )

        try:
            result = CampaignLog.list_by_user(
                user_id,
                account_id=query.get("account_id"),
                status=query.get("status"),
                limit=query["limit"],
                skip=query["skip"],
            )
        except PyMongoError as e:
            Log.error(f"{log_tag} Failed to read campaign logs: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to fetch campaign logs")

        return prepared_response(True, "OK", "Campaign logs retrieved", data=result)


@blp_campaign_logs.route("/campaign-logs/stats", methods=["GET"])
class CampaignLogStatsResource(MethodView):
    @token_required
    @blp_campaign_logs.arguments(CampaignLogStatsQuerySchema, location="query")
    def get(self, query):
        user_id = (g.get("current_user", {}) or {}).get("user_id")
        log_tag = make_log_tag(
            "campaign_log_resource.py", "CampaignLogStatsResource", "get",
            request.remote_addr, user_id, query.get("account_id"),
        )

        try:
            stats = CampaignLog.get_stats(user_id=user_id, account_id=query.get("account_id"))
        except PyMongoError as e:
            Log.error(f"{log_tag} Failed to compute stats: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", "Failed to fetch campaign stats")

        return prepared_response(True, "OK", "Campaign stats retrieved", data=stats)


@blp_campaign_logs.route("/campaign-logs/<string:log_id>", methods=["GET"])
class CampaignLogDetailResource(MethodView):
    @token_required
    def get(self, log_id):
        user_id = (g.get("current_user", {}) or {}).get("user_id")

        log = CampaignLog.get_by_id(log_id)
        if not log or log.get("user_id") != user_id:
            return prepared_response(False, "NOT_FOUND", "Campaign log not found")

        return prepared_response(True, "OK", "Campaign log retrieved", data=log)
