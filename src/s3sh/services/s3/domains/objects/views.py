from typing import Any

from rich.markup import escape

from s3sh.services.s3.domains.objects.operations import ObjectInfo


def _format_date(value: Any) -> str:
    return value.isoformat() if value else "Unknown"


class ObjectListView:
    @classmethod
    def get_headers(cls) -> list[str]:
        return ["Key", "Size", "Last Modified"]

    @classmethod
    def format_row(cls, obj: ObjectInfo) -> list[str]:
        return [escape(obj.key), str(obj.size), _format_date(obj.last_modified)]

    @classmethod
    def to_dict(cls, obj: ObjectInfo) -> dict[str, Any]:
        return {
            "key": obj.key,
            "size": obj.size,
            "last_modified": _format_date(obj.last_modified),
        }


class ObjectAttributesView:
    @classmethod
    def get_headers(cls) -> list[str]:
        return ["Attribute", "Value"]

    @classmethod
    def rows(cls, obj: ObjectInfo) -> list[tuple[str, str]]:
        return [
            ("Object", f"[bold]{escape(obj.key)}[/bold]"),
            ("Size", f"{obj.size} bytes"),
            ("Content Type", escape(obj.content_type or "unknown")),
            ("Last Modified", _format_date(obj.last_modified)),
        ]

    @classmethod
    def format_row(cls, row: tuple[str, str]) -> list[str]:
        return list(row)

    @classmethod
    def to_dict(cls, obj: ObjectInfo) -> dict[str, Any]:
        return {
            "key": obj.key,
            "size": obj.size,
            "content_type": obj.content_type,
            "last_modified": _format_date(obj.last_modified),
        }
