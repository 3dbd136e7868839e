import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from assignments_api.core.errors import NotFound
from assignments_api.models.assignment import Assignment
from assignments_api.models.submission import Submission
from assignments_api.schemas.assignment import AssignmentPayload

logger = logging.getLogger(__name__)


def _assignment_order_by():
    """
    Assignment ordering:
    - deadline ascending
    - creation time ascending
    - id ascending (stable tie-break)
    """
    return (
        Assignment.deadline.asc(),
        Assignment.assignment_created.asc(),
        Assignment.id.asc(),
    )


def find_assignment_by_id(db: Session, assignment_id: str) -> Assignment | None:
    return db.get(Assignment, assignment_id)


def get_assignment_or_404(db: Session, assignment_id: str) -> Assignment:
    assignment = find_assignment_by_id(db, assignment_id)
    if assignment is None:
        logger.warning("Assignment with ID %s not found", assignment_id)
        raise NotFound()
    return assignment


def list_assignments(db: Session) -> list[Assignment]:
    return db.query(Assignment).order_by(*_assignment_order_by()).all()


def create_assignment(db: Session, user_id: str, payload: AssignmentPayload) -> Assignment:
    now = datetime.now(timezone.utc)
    assignment = Assignment(
        user_id=user_id,
        name=payload.name,
        points=payload.points,
        num_of_attempts=payload.num_of_attempts,
        deadline=payload.deadline,
        assignment_created=now,
        assignment_updated=now,
    )
    db.add(assignment)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(assignment)
    logger.info("Assignment %s created by user %s", assignment.id, user_id)
    return assignment


def update_assignment(db: Session, assignment: Assignment, payload: AssignmentPayload) -> Assignment:
    # user_id is deliberately left alone
    assignment.name = payload.name
    assignment.points = payload.points
    assignment.num_of_attempts = payload.num_of_attempts
    assignment.deadline = payload.deadline
    assignment.assignment_updated = datetime.now(timezone.utc)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(assignment)
    logger.info("Assignment %s updated", assignment.id)
    return assignment


def has_submissions(db: Session, assignment_id: str) -> bool:
    return (
        db.query(Submission.id)
        .filter(Submission.assignment_id == assignment_id)
        .first()
        is not None
    )


def delete_assignment(db: Session, assignment: Assignment) -> None:
    db.delete(assignment)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Assignment %s removed", assignment.id)
