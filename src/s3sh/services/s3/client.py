import logging
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    NoRegionError,
)

from s3sh.core.errors import ConfigurationNotFoundError, GatewayError
from s3sh.core.models import DEFAULT_REGION
from s3sh.services.s3.domains.buckets.models import (
    EncryptionMode,
    PublicAccessBlock,
    VersioningStatus,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def translate_aws_errors(
    operation: str, not_found_codes: list[str] | None = None
) -> Callable:
    """
    Decorator to standardize AWS error handling.

    ClientError codes listed in `not_found_codes` become
    ConfigurationNotFoundError, every other botocore failure becomes
    GatewayError. Nothing is swallowed.
    """
    if not_found_codes is None:
        not_found_codes = []

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            bucket = kwargs.get("bucket_name", args[1] if len(args) > 1 else None)
            logger.debug("%s %s", operation, bucket or "")
            try:
                return func(*args, **kwargs)
            except ClientError as e:
                error = e.response.get("Error", {})
                error_code = error.get("Code", "Unknown")
                message = error.get("Message") or str(e)

                if error_code in not_found_codes:
                    logger.debug("%s: %s reported %s", operation, bucket, error_code)
                    raise ConfigurationNotFoundError(
                        operation, message, bucket=bucket, code=error_code
                    ) from e

                logger.warning(
                    "AWS Error in %s for %s: %s - %s",
                    func.__name__,
                    bucket,
                    error_code,
                    e,
                )
                raise GatewayError(
                    operation, message, bucket=bucket, code=error_code
                ) from e
            except (NoCredentialsError, NoRegionError):
                raise
            except BotoCoreError as e:
                logger.warning("Transport error in %s: %s", func.__name__, e)
                raise GatewayError(operation, str(e), bucket=bucket) from e

        return wrapper

    return decorator


class S3Client:
    """
    Wrapper for Boto3 S3 interactions.

    Every call is a single request (or a single paginated listing); retries
    are left to botocore's adaptive retry mode.
    """

    def __init__(self, session: boto3.Session | None = None):
        self.retry_config = Config(retries={"mode": "adaptive", "max_attempts": 10})
        self.session = session or boto3.Session()
        self._client = self.session.client("s3", config=self.retry_config)

    @property
    def region(self) -> str:
        return self.session.region_name or DEFAULT_REGION

    # Buckets

    @translate_aws_errors("ListBuckets")
    def list_buckets(self) -> list[dict[str, Any]]:
        paginator = self._client.get_paginator("list_buckets")
        buckets = []
        for page in paginator.paginate():
            buckets.extend(page.get("Buckets", []))
        return buckets

    @translate_aws_errors("CreateBucket")
    def create_bucket(self, bucket_name: str, region: str | None = None) -> None:
        params: dict[str, Any] = {"Bucket": bucket_name}
        if region and region != DEFAULT_REGION:
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}
        self._client.create_bucket(**params)

    @translate_aws_errors("GetBucketLocation")
    def get_bucket_region(self, bucket_name: str) -> str:
        response = self._client.get_bucket_location(Bucket=bucket_name)
        return response.get("LocationConstraint") or DEFAULT_REGION

    @translate_aws_errors(
        "GetBucketLifecycleConfiguration",
        not_found_codes=["NoSuchLifecycleConfiguration"],
    )
    def get_lifecycle_configuration(self, bucket_name: str) -> list[dict[str, Any]]:
        response = self._client.get_bucket_lifecycle_configuration(Bucket=bucket_name)
        return response.get("Rules", [])

    @translate_aws_errors("PutBucketLifecycleConfiguration")
    def put_lifecycle_configuration(
        self, bucket_name: str, rules: list[dict[str, Any]]
    ) -> None:
        self._client.put_bucket_lifecycle_configuration(
            Bucket=bucket_name, LifecycleConfiguration={"Rules": rules}
        )

    @translate_aws_errors(
        "GetPublicAccessBlock",
        not_found_codes=["NoSuchPublicAccessBlockConfiguration"],
    )
    def get_public_access_block(self, bucket_name: str) -> PublicAccessBlock:
        response = self._client.get_public_access_block(Bucket=bucket_name)
        config = response.get("PublicAccessBlockConfiguration", {})
        return PublicAccessBlock(
            block_public_acls=config.get("BlockPublicAcls", False),
            ignore_public_acls=config.get("IgnorePublicAcls", False),
            block_public_policy=config.get("BlockPublicPolicy", False),
            restrict_public_buckets=config.get("RestrictPublicBuckets", False),
        )

    @translate_aws_errors("PutPublicAccessBlock")
    def put_public_access_block(
        self, bucket_name: str, config: PublicAccessBlock
    ) -> None:
        self._client.put_public_access_block(
            Bucket=bucket_name, PublicAccessBlockConfiguration=config.to_aws()
        )

    @translate_aws_errors("GetBucketVersioning")
    def get_versioning_status(self, bucket_name: str) -> str | None:
        response = self._client.get_bucket_versioning(Bucket=bucket_name)
        return response.get("Status")

    @translate_aws_errors("PutBucketVersioning")
    def put_versioning(self, bucket_name: str, status: VersioningStatus) -> None:
        self._client.put_bucket_versioning(
            Bucket=bucket_name, VersioningConfiguration={"Status": status.value}
        )

    @translate_aws_errors(
        "GetBucketEncryption",
        not_found_codes=["ServerSideEncryptionConfigurationNotFoundError"],
    )
    def get_encryption_algorithm(self, bucket_name: str) -> str | None:
        response = self._client.get_bucket_encryption(Bucket=bucket_name)
        rules = response.get("ServerSideEncryptionConfiguration", {}).get("Rules", [])
        if not rules:
            return None
        return rules[0].get("ApplyServerSideEncryptionByDefault", {}).get(
            "SSEAlgorithm"
        )

    @translate_aws_errors("PutBucketEncryption")
    def put_encryption(self, bucket_name: str, algorithm: EncryptionMode) -> None:
        rule = {"ApplyServerSideEncryptionByDefault": {"SSEAlgorithm": algorithm.value}}
        self._client.put_bucket_encryption(
            Bucket=bucket_name,
            ServerSideEncryptionConfiguration={"Rules": [rule]},
        )

    @translate_aws_errors("GetBucketTagging", not_found_codes=["NoSuchTagSet"])
    def get_bucket_tags(self, bucket_name: str) -> dict[str, str]:
        response = self._client.get_bucket_tagging(Bucket=bucket_name)
        return {t["Key"]: t["Value"] for t in response.get("TagSet", [])}

    @translate_aws_errors("PutBucketTagging")
    def put_tagging(self, bucket_name: str, tags: list[tuple[str, str]]) -> None:
        self._client.put_bucket_tagging(
            Bucket=bucket_name,
            Tagging={"TagSet": [{"Key": k, "Value": v} for k, v in tags]},
        )

    # Objects

    @translate_aws_errors("ListObjectsV2")
    def list_objects(self, bucket_name: str) -> list[dict[str, Any]]:
        paginator = self._client.get_paginator("list_objects_v2")
        objects = []
        for page in paginator.paginate(Bucket=bucket_name):
            objects.extend(page.get("Contents", []))
        return objects

    @translate_aws_errors("PutObject")
    def put_object(
        self, bucket_name: str, key: str, path: Path, content_type: str
    ) -> None:
        with path.open("rb") as body:
            self._client.put_object(
                Bucket=bucket_name, Key=key, Body=body, ContentType=content_type
            )

    @translate_aws_errors("DeleteObject")
    def delete_object(self, bucket_name: str, key: str) -> None:
        self._client.delete_object(Bucket=bucket_name, Key=key)

    @translate_aws_errors("RestoreObject")
    def restore_object(
        self, bucket_name: str, key: str, days: int = 1, tier: str = "Standard"
    ) -> None:
        self._client.restore_object(
            Bucket=bucket_name,
            Key=key,
            RestoreRequest={"Days": days, "GlacierJobParameters": {"Tier": tier}},
        )

    @translate_aws_errors("HeadObject")
    def head_object(self, bucket_name: str, key: str) -> dict[str, Any]:
        return self._client.head_object(Bucket=bucket_name, Key=key)
