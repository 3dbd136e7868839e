from passlib.context import CryptContext

from assignments_api.core.config import PASSWORD_HASH_ROUNDS

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=PASSWORD_HASH_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # stored value is not a recognizable hash
        return False


def dummy_verify() -> None:
    """Spend the same time as a real verification when there is no user to check."""
    pwd_context.dummy_verify()
