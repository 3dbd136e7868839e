import json
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from assignments_api.services.notifications import SubmissionNotifier

TOPIC = "arn:aws:sns:us-east-1:123456789012:submissions"


def test_publish_sends_json_message():
    client = MagicMock()
    client.publish.return_value = {"MessageId": "abc"}
    notifier = SubmissionNotifier(TOPIC, client_factory=lambda: client)

    notifier.publish("student@example.com", "https://example.com/a.zip", "a-1", 2)

    client.publish.assert_called_once()
    kwargs = client.publish.call_args.kwargs
    assert kwargs["TopicArn"] == TOPIC
    assert json.loads(kwargs["Message"]) == {
        "userInfo": {"email": "student@example.com"},
        "url": "https://example.com/a.zip",
        "assignment_id": "a-1",
        "attempt": 2,
    }


def test_publish_failure_is_logged_not_raised(caplog):
    client = MagicMock()
    client.publish.side_effect = ClientError(
        {"Error": {"Code": "NotFound", "Message": "Topic does not exist"}},
        "Publish",
    )
    notifier = SubmissionNotifier(TOPIC, client_factory=lambda: client)

    notifier.publish("student@example.com", "x", "a-1", 1)

    assert "Error publishing submission notification" in caplog.text


def test_publish_without_topic_is_skipped():
    factory = MagicMock()
    notifier = SubmissionNotifier(None, client_factory=factory)

    notifier.publish("student@example.com", "x", "a-1", 1)

    factory.assert_not_called()
