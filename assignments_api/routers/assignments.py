import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from assignments_api.core.current_user import get_current_user_id
from assignments_api.core.deps import get_db, get_request_body
from assignments_api.core.errors import SYNTAX_ERROR, AssignmentInUse, ValidationFailed
from assignments_api.core.health import require_healthy
from assignments_api.core.permissions import require_owner
from assignments_api.schemas.assignment import AssignmentRead
from assignments_api.services.assignments import (
    create_assignment,
    delete_assignment,
    get_assignment_or_404,
    has_submissions,
    list_assignments,
    update_assignment,
)
from assignments_api.services.validation import ensure_empty_body, validate_assignment_payload

logger = logging.getLogger(__name__)

# the health gate runs before any other dependency of these routes
router = APIRouter(dependencies=[Depends(require_healthy)])


@router.post(
    "/assignments",
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid payload or store rejected the values"},
        401: {"description": "Missing or invalid Basic credentials"},
        503: {"description": "Database unreachable"},
    },
)
def create(
    user_id: str = Depends(get_current_user_id),
    body: bytes = Depends(get_request_body),
    db: Session = Depends(get_db),
):
    payload = validate_assignment_payload(body)

    try:
        create_assignment(db, user_id, payload)
    except SQLAlchemyError:
        logger.exception("Error creating assignment")
        raise ValidationFailed()
    except Exception:
        logger.exception("Unexpected error creating assignment")
        raise ValidationFailed(SYNTAX_ERROR)

    return Response(status_code=status.HTTP_201_CREATED)


@router.get("/assignments", response_model=list[AssignmentRead])
def list_all(
    user_id: str = Depends(get_current_user_id),
    body: bytes = Depends(get_request_body),
    db: Session = Depends(get_db),
):
    ensure_empty_body(body)

    try:
        assignments = list_assignments(db)
    except SQLAlchemyError:
        logger.exception("Error retrieving all assignments")
        raise ValidationFailed()
    except Exception:
        logger.exception("Unexpected error retrieving all assignments")
        raise ValidationFailed(SYNTAX_ERROR)

    logger.info("Retrieved %s assignments for user %s", len(assignments), user_id)
    return assignments


@router.get(
    "/assignments/{assignment_id}",
    response_model=AssignmentRead,
    responses={404: {"description": "Assignment not found"}},
)
def read(
    assignment_id: str,
    user_id: str = Depends(get_current_user_id),
    body: bytes = Depends(get_request_body),
    db: Session = Depends(get_db),
):
    assignment = get_assignment_or_404(db, assignment_id)
    ensure_empty_body(body)
    return assignment


@router.api_route(
    "/assignments/{assignment_id}",
    methods=["PUT", "PATCH"],
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        403: {"description": "Assignment belongs to another user"},
        404: {"description": "Assignment not found"},
    },
)
def update(
    assignment_id: str,
    user_id: str = Depends(get_current_user_id),
    body: bytes = Depends(get_request_body),
    db: Session = Depends(get_db),
):
    assignment = get_assignment_or_404(db, assignment_id)
    # ownership first: a non-owner gets 403 whatever the payload
    require_owner(assignment, user_id)
    payload = validate_assignment_payload(body)

    try:
        update_assignment(db, assignment, payload)
    except SQLAlchemyError:
        logger.exception("Error updating assignment %s", assignment_id)
        raise ValidationFailed()
    except Exception:
        logger.exception("Unexpected error updating assignment %s", assignment_id)
        raise ValidationFailed(SYNTAX_ERROR)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/assignments/{assignment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "Unexpected body or assignment has submissions"},
        403: {"description": "Assignment belongs to another user"},
        404: {"description": "Assignment not found"},
    },
)
def remove(
    assignment_id: str,
    user_id: str = Depends(get_current_user_id),
    body: bytes = Depends(get_request_body),
    db: Session = Depends(get_db),
):
    assignment = get_assignment_or_404(db, assignment_id)
    require_owner(assignment, user_id)
    ensure_empty_body(body)

    try:
        in_use = has_submissions(db, assignment_id)
        if not in_use:
            delete_assignment(db, assignment)
    except SQLAlchemyError:
        logger.exception("Error removing assignment %s", assignment_id)
        raise ValidationFailed()
    except Exception:
        logger.exception("Unexpected error removing assignment %s", assignment_id)
        raise ValidationFailed(SYNTAX_ERROR)

    if in_use:
        logger.warning("Assignment %s has submissions, refusing delete", assignment_id)
        raise AssignmentInUse()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
