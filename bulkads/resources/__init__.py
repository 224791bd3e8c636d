from .campaign_import_resource import blp_campaign_import
from .campaign_log_resource import blp_campaign_logs
