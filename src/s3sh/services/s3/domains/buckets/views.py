from typing import Any

from rich.markup import escape

from s3sh.core.style import Status, colorize
from s3sh.services.s3.domains.buckets.configuration import BucketConfiguration
from s3sh.services.s3.domains.buckets.models import Facet, FacetResult


def _format_date(value: Any) -> str:
    return value.isoformat() if value else "Unknown"


class BucketListView:
    @classmethod
    def get_headers(cls) -> list[str]:
        return ["Name", "Creation Date"]

    @classmethod
    def format_row(cls, bucket: dict[str, Any]) -> list[str]:
        name = escape(bucket.get("Name", "<unknown>"))
        return [name, _format_date(bucket.get("CreationDate"))]

    @classmethod
    def to_dict(cls, bucket: dict[str, Any]) -> dict[str, Any]:
        return {
            "name": bucket.get("Name", "<unknown>"),
            "creation_date": _format_date(bucket.get("CreationDate")),
        }


class BucketConfigView:
    """Renders a BucketConfiguration as setting/value rows."""

    @classmethod
    def get_headers(cls) -> list[str]:
        return ["Setting", "Value"]

    @classmethod
    def rows(cls, config: BucketConfiguration) -> list[tuple[str, str]]:
        if config.public_access_blocked is None:
            public = "Unknown"
        elif config.public_access_blocked:
            public = colorize("Blocked", Status.OK)
        else:
            public = colorize("Not Blocked", Status.WARN)

        versioning_status = Status.OK if config.versioning == "Enabled" else Status.WARN
        encryption_status = Status.WARN if config.encryption == "None" else Status.OK
        tags = escape(", ".join(f"{k}={v}" for k, v in config.tags.items()))
        rule_ids = escape(", ".join(config.lifecycle_rules))

        return [
            ("Bucket", f"[bold]{escape(config.name)}[/bold]"),
            ("Region", colorize(config.region, Status.INFO)),
            ("Versioning", colorize(config.versioning, versioning_status)),
            ("Encryption", colorize(config.encryption, encryption_status)),
            ("Public Access", public),
            ("Tags", tags or "-"),
            ("Lifecycle Rules", rule_ids or "-"),
        ]

    @classmethod
    def format_row(cls, row: tuple[str, str]) -> list[str]:
        return list(row)

    @classmethod
    def to_dict(cls, config: BucketConfiguration) -> dict[str, Any]:
        return config.to_dict()


def describe_facet_result(bucket_name: str, result: FacetResult) -> str:
    value = colorize(result.value, Status.INFO)
    if result.facet == Facet.TAGS:
        return f"Bucket '{escape(bucket_name)}' tags updated: {value}"
    return f"Bucket '{escape(bucket_name)}' {result.facet} set to: {value}"
