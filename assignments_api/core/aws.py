import boto3

from assignments_api.core.config import AWS_ENDPOINT_URL, AWS_REGION


def _kw():
    k = {"region_name": AWS_REGION}
    if AWS_ENDPOINT_URL:
        k["endpoint_url"] = AWS_ENDPOINT_URL
    return k


def sns_client():
    return boto3.client("sns", **_kw())
