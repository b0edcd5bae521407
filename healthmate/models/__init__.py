from .error_log import ErrorLog
from .insight import Insight
from .report_file import ReportFile
from .user import User

__all__ = [
    "ErrorLog",
    "Insight",
    "ReportFile",
    "User",
]
