from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class StorageClass(StrEnum):
    """Storage classes a lifecycle transition may target."""

    STANDARD_IA = "STANDARD_IA"
    ONEZONE_IA = "ONEZONE_IA"
    INTELLIGENT_TIERING = "INTELLIGENT_TIERING"
    GLACIER = "GLACIER"
    DEEP_ARCHIVE = "DEEP_ARCHIVE"


class EncryptionMode(StrEnum):
    """Default server-side encryption algorithms, valued as S3 names them."""

    AES256 = "AES256"
    KMS = "aws:kms"


class VersioningStatus(StrEnum):
    ENABLED = "Enabled"
    SUSPENDED = "Suspended"

    @classmethod
    def from_flag(cls, enabled: bool) -> "VersioningStatus":
        return cls.ENABLED if enabled else cls.SUSPENDED


class Facet(StrEnum):
    PUBLIC_ACCESS = "public access"
    VERSIONING = "versioning"
    ENCRYPTION = "encryption"
    TAGS = "tags"


@dataclass(frozen=True)
class PublicAccessBlock:
    block_public_acls: bool
    ignore_public_acls: bool
    block_public_policy: bool
    restrict_public_buckets: bool

    @classmethod
    def for_public(cls, is_public: bool) -> "PublicAccessBlock":
        """
        Public buckets clear every block flag, private ones set all four.
        Mixed postures are not expressible here.
        """
        blocked = not is_public
        return cls(blocked, blocked, blocked, blocked)

    def to_aws(self) -> dict[str, bool]:
        return {
            "BlockPublicAcls": self.block_public_acls,
            "IgnorePublicAcls": self.ignore_public_acls,
            "BlockPublicPolicy": self.block_public_policy,
            "RestrictPublicBuckets": self.restrict_public_buckets,
        }


@dataclass(frozen=True)
class Transition:
    days: int
    storage_class: StorageClass

    def to_aws(self) -> dict[str, Any]:
        return {"Days": self.days, "StorageClass": self.storage_class.value}


@dataclass
class LifecycleRule:
    rule_id: str
    prefix: str = ""
    enabled: bool = True
    transitions: list[Transition] = field(default_factory=list)
    expiration_days: int | None = None

    @property
    def status(self) -> str:
        return "Enabled" if self.enabled else "Disabled"

    def to_aws(self) -> dict[str, Any]:
        rule: dict[str, Any] = {
            "ID": self.rule_id,
            "Filter": {"Prefix": self.prefix},
            "Status": self.status,
            "Transitions": [t.to_aws() for t in self.transitions],
        }
        if self.expiration_days is not None:
            rule["Expiration"] = {"Days": self.expiration_days}
        return rule


@dataclass
class ConfigurationFacets:
    """
    Independent bucket settings requested in one invocation.

    `None` (or an empty tag list) leaves the remote setting untouched.
    `encryption` may still be a raw string; it is mapped when applied.
    """

    public: bool | None = None
    versioning: bool | None = None
    encryption: EncryptionMode | str | None = None
    tags: list[tuple[str, str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return (
            self.public is None
            and self.versioning is None
            and self.encryption is None
            and not self.tags
        )


@dataclass(frozen=True)
class FacetResult:
    facet: Facet
    value: str
