import mimetypes
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from s3sh.core.errors import ValidationError
from s3sh.services.s3.client import S3Client

DEFAULT_CONTENT_TYPE = "application/octet-stream"
RESTORE_DAYS = 1
RESTORE_TIER = "Standard"


@dataclass
class ObjectInfo:
    key: str
    size: int = 0
    last_modified: datetime | None = None
    content_type: str | None = None

    @classmethod
    def from_listing(cls, entry: dict[str, Any]) -> "ObjectInfo":
        return cls(
            key=entry.get("Key", "<unknown>"),
            size=entry.get("Size", 0),
            last_modified=entry.get("LastModified"),
        )

    @classmethod
    def from_head(cls, key: str, response: dict[str, Any]) -> "ObjectInfo":
        return cls(
            key=key,
            size=response.get("ContentLength", 0),
            last_modified=response.get("LastModified"),
            content_type=response.get("ContentType"),
        )


def guess_content_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or DEFAULT_CONTENT_TYPE


def list_objects(gateway: S3Client, bucket_name: str) -> list[ObjectInfo]:
    return [ObjectInfo.from_listing(o) for o in gateway.list_objects(bucket_name)]


def upload_object(
    gateway: S3Client, bucket_name: str, file_path: str, key: str | None = None
) -> str:
    """Uploads a local file; the key defaults to the file name."""
    path = Path(file_path)
    if not path.is_file():
        raise ValidationError(f"Invalid file path: {file_path}")

    object_key = key or path.name
    gateway.put_object(bucket_name, object_key, path, guess_content_type(path))
    return object_key


def delete_object(gateway: S3Client, bucket_name: str, key: str) -> None:
    gateway.delete_object(bucket_name, key)


def restore_object(gateway: S3Client, bucket_name: str, key: str) -> None:
    gateway.restore_object(bucket_name, key, days=RESTORE_DAYS, tier=RESTORE_TIER)


def get_object_attributes(gateway: S3Client, bucket_name: str, key: str) -> ObjectInfo:
    return ObjectInfo.from_head(key, gateway.head_object(bucket_name, key))
