import copy
import os

import boto3
import pytest
from moto import mock_aws

from s3sh.core.errors import ConfigurationNotFoundError
from s3sh.services.s3.client import S3Client


@pytest.fixture(scope="function")
def aws_credentials():
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture(scope="function")
def s3_mock(aws_credentials):
    with mock_aws():
        yield boto3.client("s3", region_name="us-east-1")


@pytest.fixture
def s3_client_wrapper(s3_mock):
    return S3Client()


class FakeLifecycleGateway:
    """In-memory lifecycle store that records every call made to it."""

    def __init__(self, rules=None):
        self.rules = rules
        self.calls = []

    def get_lifecycle_configuration(self, bucket_name):
        self.calls.append(("get", bucket_name))
        if self.rules is None:
            raise ConfigurationNotFoundError(
                "GetBucketLifecycleConfiguration",
                "The lifecycle configuration does not exist",
                bucket=bucket_name,
                code="NoSuchLifecycleConfiguration",
            )
        return copy.deepcopy(self.rules)

    def put_lifecycle_configuration(self, bucket_name, rules):
        self.calls.append(("put", bucket_name))
        self.rules = copy.deepcopy(rules)


@pytest.fixture
def fake_lifecycle_gateway():
    return FakeLifecycleGateway
