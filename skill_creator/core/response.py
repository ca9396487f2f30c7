import json
from datetime import UTC, datetime
from typing import Any, TypedDict
from uuid import uuid4


class CLIResponse(TypedDict, total=False):
    message: str
    success: bool
    timestamp: str
    data: dict[str, Any] | None
    request_id: str | None
    code: str | None


def build_validation_response(skill_path: str, is_valid: bool, message: str) -> CLIResponse:
    """Wrap a validator result into a machine readable response."""
    return {
        "message": message,
        "success": is_valid,
        "code": "SKILL_VALID" if is_valid else "SKILL_INVALID",
        "data": {"skill_path": skill_path},
    }


def send_response(response: CLIResponse, request_id: str | None = None, include_timestamp: bool = True) -> str:
    """
    Format and serialize a CLI response with additional metadata.

    Args:
        response: The response object to send
        request_id: Optional request identifier for correlation
        include_timestamp: Whether to include a timestamp in the response

    Returns:
        Serialized response as a single JSON line, without the trailing newline
    """
    if include_timestamp:
        response["timestamp"] = datetime.now(UTC).isoformat().replace("+00:00", "Z")

    if "request_id" not in response:
        response["request_id"] = request_id or str(uuid4())

    return json.dumps(response, ensure_ascii=False)
