import json
import re
from typing import Any

from s3sh.core.errors import (
    InvalidBucketNameError,
    UnknownEncryptionModeError,
    UnknownStorageClassError,
    ValidationError,
)
from s3sh.services.s3.domains.buckets.models import (
    EncryptionMode,
    StorageClass,
    Transition,
)

BUCKET_NAME_MIN_LENGTH = 3
BUCKET_NAME_MAX_LENGTH = 63

_BUCKET_NAME_CHARS = re.compile(r"[a-z0-9.\-]+")
_BUCKET_NAME_EDGE_CHARS = (".", "-")


def validate_bucket_name(name: str) -> None:
    """
    Raises InvalidBucketNameError unless `name` is 3-63 lowercase letters,
    digits, dots and hyphens that begins and ends with a letter or digit.
    """
    if not BUCKET_NAME_MIN_LENGTH <= len(name) <= BUCKET_NAME_MAX_LENGTH:
        raise InvalidBucketNameError(
            "Bucket name must be between 3 and 63 characters"
        )
    if not _BUCKET_NAME_CHARS.fullmatch(name):
        raise InvalidBucketNameError(
            "Bucket name must only contain lowercase letters, numbers, "
            "dots, and hyphens"
        )
    if name.startswith(_BUCKET_NAME_EDGE_CHARS) or name.endswith(
        _BUCKET_NAME_EDGE_CHARS
    ):
        raise InvalidBucketNameError(
            "Bucket name must begin and end with a letter or number"
        )


def map_storage_class(name: str) -> StorageClass:
    try:
        return StorageClass(name)
    except ValueError:
        raise UnknownStorageClassError(name) from None


def map_encryption_mode(value: EncryptionMode | str) -> EncryptionMode:
    """Accepts the S3 algorithm name ('AES256', 'aws:kms') or the member name."""
    if isinstance(value, EncryptionMode):
        return value
    try:
        return EncryptionMode(value)
    except ValueError:
        pass
    try:
        return EncryptionMode[value]
    except KeyError:
        raise UnknownEncryptionModeError(value) from None


def _invalid(detail: str) -> ValidationError:
    return ValidationError(f"Invalid transitions JSON: {detail}")


def _parse_transition(index: int, record: Any) -> Transition:
    if not isinstance(record, dict):
        raise _invalid(f"entry {index} is not an object")

    for required in ("days", "storage_class"):
        if required not in record:
            raise _invalid(f"entry {index} is missing field '{required}'")

    days = record["days"]
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        raise _invalid(f"entry {index} has invalid days: {days!r}")

    storage_class = record["storage_class"]
    if not isinstance(storage_class, str):
        raise UnknownStorageClassError(str(storage_class))

    return Transition(days=days, storage_class=map_storage_class(storage_class))


def parse_transitions(json_text: str) -> list[Transition]:
    """
    Decodes a JSON list such as '[{"days": 30, "storage_class": "STANDARD_IA"}]'.
    """
    try:
        records = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise _invalid(str(e)) from e

    if not isinstance(records, list):
        raise _invalid("expected a list of transitions")

    return [_parse_transition(i, record) for i, record in enumerate(records)]


def parse_tag(text: str) -> tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep:
        raise ValidationError(f"invalid KEY=value: no `=` found in `{text}`")
    if not key:
        raise ValidationError(f"invalid KEY=value: empty key in `{text}`")
    return key, value
