"""
Utility functions for the application.
"""
from typing import Any, Dict, Iterable, List
from bson import ObjectId
from bson.errors import InvalidId
from jukeboxd.core.errors import InputValidationError


def to_object_id(value: Any, label: str = "id") -> ObjectId:
    """Convert a boundary id string into an ObjectId, failing cleanly."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InputValidationError(f"You must provide a valid {label}")
    try:
        return ObjectId(value.strip())
    except InvalidId:
        raise InputValidationError(f"Invalid {label}: {value}")


def id_list(values: Iterable[Any]) -> List[str]:
    """Render a list of ObjectIds as strings."""
    return [str(v) for v in values or []]


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
