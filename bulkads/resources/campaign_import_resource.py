# bulkads/resources/campaign_import_resource.py

from flask_smorest import Blueprint
from flask import current_app, request, jsonify, g, Response
from flask.views import MethodView

from ..constants.service_code import HTTP_STATUS_CODES, ERROR_MESSAGES
from ..utils.auth import token_required
from ..utils.csv_decoder import read_csv_upload
from ..utils.helpers import make_log_tag
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.rate_limits import crud_write_limiter

from ..models.campaign_log import CampaignLog
from ..services.facebook.batch_runner import run_campaign_batch
from ..services.facebook.campaign_orchestrator import CampaignOrchestrator
from ..services.facebook.csv_import_service import build_campaigns_from_rows, build_csv_preview
from ..services.facebook.csv_template import TEMPLATE_FORMATS, generate_csv_template
from ..services.facebook.facebook_ads_service import FacebookAdsService

#schemas
from ..schemas.campaign_import_schema import ImportCsvSchema, CsvTemplateQuerySchema


blp_campaign_import = Blueprint("campaign_import", __name__, description="Bulk Facebook campaign import")


def _uploaded_file():
    upload = request.files.get("file")
    if not upload or upload.filename == "":
        return None
    return upload


# =========================================
# IMPORT CAMPAIGNS FROM CSV
# =========================================
@blp_campaign_import.route("/facebook/import-csv", methods=["POST"])
class ImportCsvResource(MethodView):
    @token_required
    @crud_write_limiter("campaign_import", "10 per minute; 100 per hour")
    @blp_campaign_import.arguments(ImportCsvSchema, location="form", error_status_code=400)
    def post(self, form_data):
        user = g.get("current_user", {}) or {}
        user_id = user.get("user_id")
        account_id = form_data["account_id"]
        access_token = form_data["access_token"]

        log_tag = make_log_tag(
            "campaign_import_resource.py",
            "ImportCsvResource",
            "post",
            request.remote_addr,
            user_id,
            account_id,
        )

        upload = _uploaded_file()
        if upload is None:
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["NO_FILE"])

        if len(access_token) < current_app.config.get("MIN_ACCESS_TOKEN_LENGTH", 50):
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["INVALID_TOKEN_FORMAT"])

        # CsvInputError is turned into a 400 by the app error handler
        parsed = read_csv_upload(upload.read())
        Log.info(
            f"{log_tag} Parsed {len(parsed.rows)} rows from {upload.filename} "
            f"(encoding={parsed.encoding}, delimiter={parsed.delimiter!r})"
        )

        built = build_campaigns_from_rows(
            parsed.headers,
            parsed.rows,
            default_page_id=form_data.get("page_id"),
            timezone_name=current_app.config.get("CAMPAIGN_TIMEZONE", "Asia/Ho_Chi_Minh"),
        )
        warnings = parsed.issues + parsed.warnings

        if not built["campaigns"]:
            Log.info(f"{log_tag} No valid campaigns: {built['parse_errors'][:5]}")
            return prepared_response(
                False,
                "BAD_REQUEST",
                ERROR_MESSAGES["NO_VALID_CAMPAIGNS"],
                errors=built["error_details"],
                parseErrors=built["parse_errors"],
                warnings=warnings,
            )

        service = FacebookAdsService(
            access_token,
            ad_account_id=account_id,
            api_version=current_app.config.get("FACEBOOK_API_VERSION"),
            timeout=current_app.config.get("FACEBOOK_REQUEST_TIMEOUT"),
        )

        token_check = service.validate_token()
        if not token_check.get("success"):
            message = token_check.get("error_message") or token_check.get("error")
            Log.info(f"{log_tag} Access token rejected: {message}")
            return prepared_response(False, "UNAUTHORIZED", f"Invalid access token: {message}")

        orchestrator = CampaignOrchestrator(
            service,
            strict_post_validation=current_app.config.get("STRICT_POST_VALIDATION", False),
        )

        try:
            batch = run_campaign_batch(
                built["campaigns"],
                orchestrator,
                CampaignLog,
                account_id=account_id,
                user_id=user_id,
            )
        except Exception as e:
            Log.error(f"{log_tag} Exception: {e}")
            return prepared_response(False, "INTERNAL_SERVER_ERROR", ERROR_MESSAGES["SERVER_ERROR"])

        Log.info(
            f"{log_tag} Import finished: total={batch['totalProcessed']} "
            f"success={batch['successCount']} error={batch['errorCount']}"
        )

        return jsonify({
            "success": True,
            "message": f"Processed {batch['totalProcessed']} campaigns",
            **batch,
            "parseErrors": built["parse_errors"],
            "duplicatesSkipped": built["duplicates"],
            "warnings": warnings,
        }), HTTP_STATUS_CODES["OK"]


# =========================================
# PREVIEW CSV
# =========================================
@blp_campaign_import.route("/facebook/preview-csv", methods=["POST"])
class PreviewCsvResource(MethodView):
    @token_required
    def post(self):
        log_tag = "[campaign_import_resource.py][PreviewCsvResource][post]"

        upload = _uploaded_file()
        if upload is None:
            return prepared_response(False, "BAD_REQUEST", ERROR_MESSAGES["NO_FILE"])

        preview = build_csv_preview(upload.read())
        Log.info(f"{log_tag} Previewed {upload.filename}: {preview['stats']}")

        return jsonify({"success": True, "preview": preview}), HTTP_STATUS_CODES["OK"]


# =========================================
# DOWNLOAD TEMPLATE
# =========================================
@blp_campaign_import.route("/facebook/csv-template", methods=["GET"])
class CsvTemplateResource(MethodView):
    @token_required
    @blp_campaign_import.arguments(CsvTemplateQuerySchema, location="query")
    def get(self, query):
        options = TEMPLATE_FORMATS[query["format"]]
        return Response(
            generate_csv_template(query["format"]),
            mimetype=options["mimetype"],
            headers={"Content-Disposition": f"attachment; filename={options['filename']}"},
        )
