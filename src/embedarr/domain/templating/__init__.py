from .builtin import BUILTIN_SERVERS, get_builtin, is_builtin_id
from .grammar import PlaceholderScan, scan_placeholders, substitute
from .resolver import resolve
from .validator import validate, validate_server

__all__ = [
    "BUILTIN_SERVERS",
    "PlaceholderScan",
    "get_builtin",
    "is_builtin_id",
    "resolve",
    "scan_placeholders",
    "substitute",
    "validate",
    "validate_server",
]
