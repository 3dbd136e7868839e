import base64
import binascii
import logging

from fastapi import Depends, Header
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from assignments_api.core.deps import get_db
from assignments_api.core.errors import Unauthenticated
from assignments_api.core.security import dummy_verify, verify_password
from assignments_api.services.users import find_user_by_email

logger = logging.getLogger(__name__)

BASIC_SCHEME = "Basic "


def parse_basic_authorization(header: str | None) -> tuple[str, str] | None:
    """
    Decode an ``Authorization: Basic`` header into ``(email, password)``.

    Only the first colon separates the two, so passwords may contain colons.
    Returns None for anything that is not a well-formed Basic credential.
    """
    if not header or not header.startswith(BASIC_SCHEME):
        return None

    token = header[len(BASIC_SCHEME):].strip()
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    email, sep, password = decoded.partition(":")
    if not sep:
        return None
    return email, password


def authenticate(db: Session, email: str, password: str) -> str | None:
    try:
        user = find_user_by_email(db, email)
    except SQLAlchemyError:
        logger.exception("User lookup failed during authentication")
        return None

    if user is None:
        dummy_verify()
        return None

    if not verify_password(password, user.password):
        return None

    return user.id


def get_current_user_id(
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> str:
    credentials = parse_basic_authorization(authorization)
    if credentials is None:
        logger.warning("Missing or malformed Basic credentials")
        raise Unauthenticated()

    user_id = authenticate(db, *credentials)
    if user_id is None:
        logger.warning("Authentication failed")
        raise Unauthenticated()

    return user_id
