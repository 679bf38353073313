from typing import Any


class S3shError(Exception):
    """Base class for every failure reported to the operator."""


class ValidationError(S3shError):
    """User input rejected before any remote call is made."""


class InvalidBucketNameError(ValidationError):
    pass


class UnknownStorageClassError(ValidationError):
    def __init__(self, storage_class: str):
        super().__init__(f"Invalid storage class: {storage_class}")
        self.storage_class = storage_class


class UnknownEncryptionModeError(ValidationError):
    def __init__(self, mode: str):
        super().__init__(
            f"Invalid encryption mode '{mode}'. Use 'AES256' or 'aws:kms'"
        )
        self.mode = mode


class GatewayError(S3shError):
    """
    A failure reported by S3 or by the transport underneath it.

    The message of the underlying botocore exception is kept verbatim so
    operators see what the service said.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        bucket: str | None = None,
        code: str | None = None,
    ):
        self.operation = operation
        self.bucket = bucket
        self.code = code
        self.message = message

        target = f" on '{bucket}'" if bucket else ""
        detail = f"{code}: {message}" if code else message
        super().__init__(f"{operation} failed{target} ({detail})")


class ConfigurationNotFoundError(GatewayError):
    """The bucket has no configuration of the requested kind."""


class ConcurrentModificationError(S3shError):
    def __init__(self, bucket: str, what: str = "lifecycle configuration"):
        super().__init__(
            f"The {what} of '{bucket}' changed since it was read; "
            "refusing to overwrite it"
        )
        self.bucket = bucket


class FacetApplicationError(S3shError):
    """
    A facet write failed part way through a configuration pipeline.

    `applied` lists the facets that were committed before the failure; they
    are not rolled back.
    """

    def __init__(self, facet: str, applied: list[Any], cause: Exception):
        self.facet = facet
        self.applied = applied
        super().__init__(f"Failed to apply {facet}: {cause}")
