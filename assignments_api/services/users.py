from sqlalchemy.orm import Session

from assignments_api.models.user import User


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def find_user_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)
