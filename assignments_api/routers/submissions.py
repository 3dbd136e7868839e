import logging
from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from assignments_api.core.current_user import get_current_user_id
from assignments_api.core.deps import get_db, get_request_body
from assignments_api.core.errors import InternalError
from assignments_api.core.health import require_healthy
from assignments_api.schemas.submission import SubmissionRead
from assignments_api.services.assignments import get_assignment_or_404
from assignments_api.services.notifications import SubmissionNotifier, get_notifier
from assignments_api.services.submissions import (
    count_submission_attempts,
    ensure_attempts_remaining,
    ensure_before_deadline,
    record_submission,
)
from assignments_api.services.users import find_user_by_id
from assignments_api.services.validation import validate_submission_payload

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_healthy)])


@router.post(
    "/assignments/{assignment_id}/submissions",
    response_model=SubmissionRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid payload or deadline passed"},
        403: {"description": "No attempts left"},
        404: {"description": "Assignment not found"},
    },
)
def submit(
    assignment_id: str,
    background_tasks: BackgroundTasks,
    user_id: str = Depends(get_current_user_id),
    body: bytes = Depends(get_request_body),
    db: Session = Depends(get_db),
    notifier: SubmissionNotifier = Depends(get_notifier),
):
    payload = validate_submission_payload(body)
    assignment = get_assignment_or_404(db, assignment_id)

    now = datetime.now(timezone.utc)
    ensure_before_deadline(assignment, now)

    try:
        attempts_used = count_submission_attempts(db, user_id, assignment_id)
        ensure_attempts_remaining(assignment, attempts_used)

        submission = record_submission(db, assignment, user_id, payload.submission_url, now)
        user = find_user_by_id(db, user_id)
    except SQLAlchemyError:
        logger.exception("Error processing submission for assignment %s", assignment_id)
        raise InternalError("Internal Server Error")

    # published after the response is sent; failures are only logged
    background_tasks.add_task(
        notifier.publish,
        user.email,
        submission.submission_url,
        assignment_id,
        submission.attempts,
    )
    return submission
