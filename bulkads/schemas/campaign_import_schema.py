from marshmallow import Schema, fields, validate, pre_load, EXCLUDE

from ..models.campaign_log import CampaignLog


class ImportCsvSchema(Schema):
    """Form fields sent alongside the uploaded CSV file."""

    class Meta:
        unknown = EXCLUDE

    account_id = fields.Str(required=True, data_key="accountId", validate=validate.Length(min=1))
    access_token = fields.Str(required=True, data_key="accessToken", validate=validate.Length(min=1))
    page_id = fields.Str(required=False, allow_none=True, data_key="pageId")

    @pre_load
    def strip_values(self, data, **kwargs):
        # form data arrives as an ImmutableMultiDict
        return {key: (value.strip() if isinstance(value, str) else value) for key, value in dict(data).items()}


class CsvTemplateQuerySchema(Schema):
    format = fields.Str(required=False, load_default="csv", validate=validate.OneOf(["csv", "txt"]))


class CampaignLogQuerySchema(Schema):
    limit = fields.Int(required=False, load_default=50, validate=validate.Range(min=1, max=500))
    skip = fields.Int(required=False, load_default=0, validate=validate.Range(min=0))
    status = fields.Str(required=False, allow_none=True, validate=validate.OneOf(CampaignLog.STATUSES))
    account_id = fields.Str(required=False, allow_none=True)


class CampaignLogStatsQuerySchema(Schema):
    account_id = fields.Str(required=False, allow_none=True)
