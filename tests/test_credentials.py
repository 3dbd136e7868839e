import base64

from tests.conftest import OWNER_EMAIL, PASSWORD, TestingSessionLocal

from assignments_api.core.current_user import authenticate, parse_basic_authorization
from assignments_api.core.security import hash_password
from assignments_api.models.user import User


def encode(raw: str) -> str:
    return "Basic " + base64.b64encode(raw.encode()).decode()


def test_parse_valid_header():
    assert parse_basic_authorization(encode("a@b.com:secret")) == ("a@b.com", "secret")


def test_only_first_colon_separates_password():
    assert parse_basic_authorization(encode("a@b.com:pa:ss:word")) == ("a@b.com", "pa:ss:word")


def test_missing_or_foreign_scheme():
    assert parse_basic_authorization(None) is None
    assert parse_basic_authorization("") is None
    assert parse_basic_authorization("Bearer abc.def.ghi") is None
    assert parse_basic_authorization("basic " + encode("a:b")[6:]) is None


def test_garbage_payload():
    assert parse_basic_authorization("Basic !!!not-base64!!!") is None
    assert parse_basic_authorization(encode("no-colon-here")) is None
    bad_utf8 = base64.b64encode(b"\xff\xfe:\xff").decode()
    assert parse_basic_authorization("Basic " + bad_utf8) is None


def test_authenticate_returns_user_id(seed_data):
    db = TestingSessionLocal()
    try:
        assert authenticate(db, OWNER_EMAIL, PASSWORD) == seed_data["owner_id"]
        assert authenticate(db, OWNER_EMAIL, "wrong") is None
        assert authenticate(db, "nobody@example.com", PASSWORD) is None
        # exact match only
        assert authenticate(db, OWNER_EMAIL.upper(), PASSWORD) is None
    finally:
        db.close()


def test_password_with_colon_round_trip(client):
    db = TestingSessionLocal()
    try:
        db.add(
            User(
                first_name="Colon",
                last_name="User",
                email="colon@example.com",
                password=hash_password("a:b:c"),
            )
        )
        db.commit()
    finally:
        db.close()

    r = client.get("/assignments", headers={"Authorization": encode("colon@example.com:a:b:c")})
    assert r.status_code == 200


def test_corrupt_stored_hash_fails_closed():
    db = TestingSessionLocal()
    try:
        db.add(
            User(
                first_name="Broken",
                last_name="Hash",
                email="broken@example.com",
                password="not-a-bcrypt-hash",
            )
        )
        db.commit()
        assert authenticate(db, "broken@example.com", "anything") is None
    finally:
        db.close()
