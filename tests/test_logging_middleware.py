import logging

from tests.conftest import OTHER_EMAIL, PASSWORD, basic_auth

MIDDLEWARE_LOGGER = "assignments_api.core.logging_middleware"


def test_access_log_names_caller_and_outcome(client, caplog):
    caplog.set_level(logging.INFO, logger=MIDDLEWARE_LOGGER)

    client.get("/assignments", headers=basic_auth(OTHER_EMAIL))
    client.get("/assignments/missing", headers=basic_auth(OTHER_EMAIL))

    messages = [r.getMessage() for r in caplog.records if r.name == MIDDLEWARE_LOGGER]
    assert any(f"GET /assignments user={OTHER_EMAIL} -> 200 ok" in m for m in messages)
    assert any("GET /assignments/missing" in m and "-> 404 rejected" in m for m in messages)
    assert not any(PASSWORD in m for m in messages)


def test_access_log_without_credentials(client, caplog):
    caplog.set_level(logging.INFO, logger=MIDDLEWARE_LOGGER)

    client.get("/assignments")

    messages = [r.getMessage() for r in caplog.records if r.name == MIDDLEWARE_LOGGER]
    assert any("GET /assignments user=- -> 401 rejected" in m for m in messages)
