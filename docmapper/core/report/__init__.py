from .aggregator import build_error_report, error_code
from .models import ErrorDocument, ErrorMeta, ErrorObject, ErrorSource

__all__ = [
    "ErrorDocument",
    "ErrorMeta",
    "ErrorObject",
    "ErrorSource",
    "build_error_report",
    "error_code",
]
