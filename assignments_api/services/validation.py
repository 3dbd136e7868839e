"""
Payload validation for the assignment and submission endpoints.

Checks run in a fixed order and the first failure decides the response:
required keys, residual (unknown) keys, then the field types in the order
``AssignmentPayload`` declares them.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from assignments_api.core.errors import SYNTAX_ERROR, ValidationFailed
from assignments_api.schemas.assignment import AssignmentPayload
from assignments_api.schemas.submission import SubmissionPayload

logger = logging.getLogger(__name__)

REQUIRED_ASSIGNMENT_KEYS = [
    name for name, field in AssignmentPayload.model_fields.items() if field.is_required()
]
OPTIONAL_ASSIGNMENT_KEYS = [
    name for name, field in AssignmentPayload.model_fields.items() if not field.is_required()
]

ASSIGNMENT_FIELD_MESSAGES = {
    "name": "Name must be a string.",
    "points": "Points must be an integer.",
    "num_of_attempts": "Number of attempts must be an integer.",
    "deadline": "Deadline must be a valid date.",
}

SUBMISSION_KEYS = list(SubmissionPayload.model_fields)


def parse_json_object(raw: bytes) -> dict[str, Any]:
    """Decode a request body into a JSON object. An empty body is an empty object."""
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        logger.warning("Request body is not valid JSON")
        raise ValidationFailed(SYNTAX_ERROR)

    if not isinstance(data, dict):
        logger.warning("Request body is not a JSON object")
        raise ValidationFailed(SYNTAX_ERROR)
    return data


def ensure_empty_body(raw: bytes) -> None:
    if raw.strip():
        logger.warning("Unexpected request body")
        raise ValidationFailed()


def _first_error_field(exc: ValidationError) -> str:
    loc = exc.errors()[0]["loc"]
    return str(loc[0]) if loc else ""


def validate_assignment_payload(raw: bytes) -> AssignmentPayload:
    data = parse_json_object(raw)

    missing = [key for key in REQUIRED_ASSIGNMENT_KEYS if key not in data]
    if missing:
        logger.warning("Missing required keys in the payload: %s", ", ".join(missing))
        raise ValidationFailed("Missing required keys: " + ", ".join(missing))

    allowed = set(REQUIRED_ASSIGNMENT_KEYS) | set(OPTIONAL_ASSIGNMENT_KEYS)
    extra = [key for key in data if key not in allowed]
    if extra:
        logger.warning("Invalid keys in the payload: %s", ", ".join(extra))
        raise ValidationFailed("Invalid keys in the payload: " + ", ".join(extra))

    try:
        return AssignmentPayload.model_validate(data)
    except ValidationError as exc:
        field = _first_error_field(exc)
        message = ASSIGNMENT_FIELD_MESSAGES.get(field, "Invalid payload.")
        logger.warning("Invalid assignment field %s", field)
        raise ValidationFailed({"message": message})


def validate_submission_payload(raw: bytes) -> SubmissionPayload:
    data = parse_json_object(raw)

    # exactly the submission keys, no subset and no superset
    extra = [key for key in data if key not in SUBMISSION_KEYS]
    if extra:
        logger.warning("Submission API invalid keys: %s", ", ".join(extra))
        raise ValidationFailed("Invalid keys in the payload: " + ", ".join(extra))

    missing = [key for key in SUBMISSION_KEYS if key not in data]
    if missing:
        logger.warning("Submission API missing keys: %s", ", ".join(missing))
        raise ValidationFailed("Missing required keys: " + ", ".join(missing))

    try:
        return SubmissionPayload.model_validate(data)
    except ValidationError:
        logger.warning("Submission URL is not a string")
        raise ValidationFailed({"message": "Submission URL must be a string."})
