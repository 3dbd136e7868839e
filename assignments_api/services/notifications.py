import json
import logging

from botocore.exceptions import BotoCoreError, ClientError

from assignments_api.core.aws import sns_client
from assignments_api.core.config import SNS_TOPIC_ARN

logger = logging.getLogger(__name__)


class SubmissionNotifier:
    """Publishes accepted submissions to an SNS topic. Delivery is best effort."""

    def __init__(self, topic_arn: str | None, client_factory=sns_client):
        self.topic_arn = topic_arn
        self._client_factory = client_factory
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def publish(self, email: str, submission_url: str, assignment_id: str, attempt: int) -> None:
        if not self.topic_arn:
            logger.warning("SNS_TOPIC_ARN is not set, skipping submission notification")
            return

        message = {
            "userInfo": {"email": email},
            "url": submission_url,
            "assignment_id": assignment_id,
            "attempt": attempt,
        }
        try:
            response = self.client.publish(
                TopicArn=self.topic_arn,
                Message=json.dumps(message),
            )
        except (BotoCoreError, ClientError):
            # the submission is already committed, nothing to roll back
            logger.exception("Error publishing submission notification for %s", assignment_id)
            return

        logger.info("Submission notification published: %s", response.get("MessageId"))


notifier = SubmissionNotifier(SNS_TOPIC_ARN)


def get_notifier() -> SubmissionNotifier:
    return notifier
