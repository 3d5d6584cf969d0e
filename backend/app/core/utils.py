"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def serialize_date(obj: Any) -> str:
    """Serialize date objects to ISO format strings. Naive datetimes are treated as UTC."""
    if isinstance(obj, datetime):
        if obj.tzinfo is None:
            obj = obj.replace(tzinfo=timezone.utc)
        return obj.isoformat()
    if isinstance(obj, date):
        return obj.isoformat()
    raise TypeError(f"Type {type(obj)} not serializable")


def format_error(message: str, code: Optional[str] = None, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"message": message}
    if code:
        response["error"] = code
    if details:
        response["errors"] = details
    return response
