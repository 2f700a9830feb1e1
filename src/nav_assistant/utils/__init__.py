from .request_log import RequestLog
from .log_cleanup import cleanup_daily_logs

__all__ = ["RequestLog", "cleanup_daily_logs"]
