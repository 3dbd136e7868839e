import csv
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy.orm import Session

from assignments_api.core.security import hash_password
from assignments_api.models.user import User
from assignments_api.schemas.user import UserCsvRow
from assignments_api.services.users import find_user_by_email

logger = logging.getLogger(__name__)


def load_users_from_csv(db: Session, path: str | Path) -> int:
    """
    Import seed users from a CSV file with a
    ``first_name,last_name,email,password`` header.

    Users whose email already exists are left untouched, so the import can run
    on every startup. Returns the number of users created.
    """
    path = Path(path)
    if not path.is_file():
        logger.info("No user bootstrap file at %s", path)
        return 0

    now = datetime.now(timezone.utc)
    created = 0
    seen: set[str] = set()

    with path.open(newline="", encoding="utf-8") as f:
        for line_no, raw in enumerate(csv.DictReader(f), start=2):
            cleaned = {k.strip(): (v or "").strip() for k, v in raw.items() if k}
            try:
                row = UserCsvRow.model_validate(cleaned)
            except ValidationError:
                logger.warning("Skipping invalid user row at %s:%s", path, line_no)
                continue

            if row.email in seen or find_user_by_email(db, row.email):
                continue
            seen.add(row.email)

            db.add(
                User(
                    first_name=row.first_name,
                    last_name=row.last_name,
                    email=row.email,
                    password=hash_password(row.password),
                    account_created=now,
                    account_updated=now,
                )
            )
            created += 1

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Bootstrapped %s user(s) from %s", created, path)
    return created
