from tests.conftest import OWNER_EMAIL, TestingSessionLocal

from assignments_api.core.security import verify_password
from assignments_api.models.user import User
from assignments_api.services.bootstrap import load_users_from_csv


def test_import_hashes_passwords_and_skips_existing(tmp_path):
    csv_file = tmp_path / "users.csv"
    csv_file.write_text(
        "first_name,last_name,email,password\n"
        "Jane,Doe,jane.doe@example.com,s3cret\n"
        f"Owner,Again,{OWNER_EMAIL},whatever\n"
        "Bad,Row,not-an-email,pw\n"
        "John,Smith,john.smith@example.com,pa:ss\n"
    )

    db = TestingSessionLocal()
    try:
        assert load_users_from_csv(db, csv_file) == 2

        jane = db.query(User).filter(User.email == "jane.doe@example.com").one()
        assert jane.password != "s3cret"
        assert verify_password("s3cret", jane.password)

        owner = db.query(User).filter(User.email == OWNER_EMAIL).one()
        assert owner.first_name == "Owner"
        assert owner.last_name == "One"

        # second run creates nothing
        assert load_users_from_csv(db, csv_file) == 0
    finally:
        db.close()


def test_missing_file_is_ignored(tmp_path):
    db = TestingSessionLocal()
    try:
        assert load_users_from_csv(db, tmp_path / "absent.csv") == 0
    finally:
        db.close()
