import logging

from assignments_api.core.errors import Forbidden
from assignments_api.models.assignment import Assignment

logger = logging.getLogger(__name__)


def require_owner(assignment: Assignment, user_id: str) -> None:
    if assignment.user_id != user_id:
        logger.warning(
            "Permission denied: user %s does not own assignment %s",
            user_id,
            assignment.id,
        )
        raise Forbidden()
