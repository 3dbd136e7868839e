import logging
from datetime import datetime, timezone

from sqlalchemy import and_
from sqlalchemy.orm import Session

from assignments_api.core.errors import DeadlinePassed, Forbidden
from assignments_api.models.assignment import Assignment
from assignments_api.models.submission import Submission

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_before_deadline(assignment: Assignment, now: datetime) -> None:
    if as_utc(now) > as_utc(assignment.deadline):
        logger.warning("Submission for assignment %s after deadline", assignment.id)
        raise DeadlinePassed()


def ensure_attempts_remaining(assignment: Assignment, attempts_used: int) -> None:
    if attempts_used >= assignment.num_of_attempts:
        logger.warning(
            "Submission attempts exceeded for assignment %s (%s of %s)",
            assignment.id,
            attempts_used,
            assignment.num_of_attempts,
        )
        raise Forbidden()


def _find_submission(db: Session, user_id: str, assignment_id: str, lock: bool = False):
    query = db.query(Submission).filter(
        and_(
            Submission.assignment_id == assignment_id,
            Submission.user_id == user_id,
        )
    )
    if lock:
        query = query.with_for_update()
    return query.first()


def count_submission_attempts(db: Session, user_id: str, assignment_id: str) -> int:
    existing = _find_submission(db, user_id, assignment_id)
    return existing.attempts if existing else 0


def record_submission(
    db: Session,
    assignment: Assignment,
    user_id: str,
    submission_url: str,
    now: datetime,
) -> Submission:
    """
    Store one accepted attempt.

    The (user, assignment) row is read FOR UPDATE and the attempt limit checked
    again under that lock, so the counter and the URL change in one transaction.
    """
    existing = _find_submission(db, user_id, assignment.id, lock=True)

    if existing:
        try:
            ensure_attempts_remaining(assignment, existing.attempts)
        except Forbidden:
            db.rollback()
            raise
        existing.submission_url = submission_url
        existing.attempts = existing.attempts + 1
        existing.submission_updated = now
        submission = existing
    else:
        submission = Submission(
            assignment_id=assignment.id,
            user_id=user_id,
            submission_url=submission_url,
            attempts=1,
            submission_date=now,
            submission_updated=now,
        )
        db.add(submission)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(submission)
    logger.info(
        "Submission %s accepted (attempt %s of %s)",
        submission.id,
        submission.attempts,
        assignment.num_of_attempts,
    )
    return submission
