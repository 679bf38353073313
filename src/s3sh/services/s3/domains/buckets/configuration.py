import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from s3sh.core.errors import (
    ConfigurationNotFoundError,
    FacetApplicationError,
    S3shError,
)
from s3sh.services.s3.client import S3Client
from s3sh.services.s3.domains.buckets.lifecycle import fetch_lifecycle_rules
from s3sh.services.s3.domains.buckets.models import (
    ConfigurationFacets,
    Facet,
    FacetResult,
    PublicAccessBlock,
    VersioningStatus,
)
from s3sh.services.s3.domains.buckets.validation import (
    map_encryption_mode,
    validate_bucket_name,
)

logger = logging.getLogger(__name__)

FacetCallback = Callable[[str, FacetResult], None]


@dataclass
class FacetStep:
    facet: Facet
    apply: Callable[[], str]


def _public_access_step(gateway: S3Client, bucket_name: str, is_public: bool):
    def apply() -> str:
        gateway.put_public_access_block(
            bucket_name, PublicAccessBlock.for_public(is_public)
        )
        return "Public" if is_public else "Private"

    return FacetStep(Facet.PUBLIC_ACCESS, apply)


def _versioning_step(gateway: S3Client, bucket_name: str, enabled: bool):
    def apply() -> str:
        status = VersioningStatus.from_flag(enabled)
        gateway.put_versioning(bucket_name, status)
        return status.value

    return FacetStep(Facet.VERSIONING, apply)


def _encryption_step(gateway: S3Client, bucket_name: str, mode: Any):
    def apply() -> str:
        # Mapped here so an invalid mode fails in pipeline order.
        algorithm = map_encryption_mode(mode)
        gateway.put_encryption(bucket_name, algorithm)
        return algorithm.value

    return FacetStep(Facet.ENCRYPTION, apply)


def _tags_step(gateway: S3Client, bucket_name: str, tags: list[tuple[str, str]]):
    def apply() -> str:
        gateway.put_tagging(bucket_name, list(tags))
        return ", ".join(f"{k}={v}" for k, v in tags)

    return FacetStep(Facet.TAGS, apply)


def build_facet_pipeline(
    gateway: S3Client, bucket_name: str, facets: ConfigurationFacets
) -> list[FacetStep]:
    """
    One step per requested facet, in the fixed order public access,
    versioning, encryption, tags.
    """
    steps = []
    if facets.public is not None:
        steps.append(_public_access_step(gateway, bucket_name, facets.public))
    if facets.versioning is not None:
        steps.append(_versioning_step(gateway, bucket_name, facets.versioning))
    if facets.encryption is not None:
        steps.append(_encryption_step(gateway, bucket_name, facets.encryption))
    if facets.tags:
        steps.append(_tags_step(gateway, bucket_name, facets.tags))
    return steps


def apply_facets(
    gateway: S3Client,
    bucket_name: str,
    facets: ConfigurationFacets,
    on_applied: FacetCallback | None = None,
) -> list[FacetResult]:
    """
    Applies each requested facet with exactly one write, sequentially.

    The first failure stops the pipeline and raises FacetApplicationError;
    facets written before it stay applied.
    """
    applied: list[FacetResult] = []

    for step in build_facet_pipeline(gateway, bucket_name, facets):
        try:
            value = step.apply()
        except S3shError as e:
            logger.warning(
                "Stopped applying configuration to %s at %s after %d facet(s)",
                bucket_name,
                step.facet,
                len(applied),
            )
            raise FacetApplicationError(step.facet, applied, e) from e

        result = FacetResult(step.facet, value)
        applied.append(result)
        if on_applied:
            on_applied(bucket_name, result)

    return applied


def create_bucket(
    gateway: S3Client,
    bucket_name: str,
    region: str,
    facets: ConfigurationFacets | None = None,
    on_created: Callable[[str], None] | None = None,
    on_applied: FacetCallback | None = None,
) -> list[FacetResult]:
    validate_bucket_name(bucket_name)
    gateway.create_bucket(bucket_name, region)
    logger.debug("Created bucket %s in %s", bucket_name, region)

    if on_created:
        on_created(bucket_name)

    if facets is None or facets.is_empty:
        return []
    return apply_facets(gateway, bucket_name, facets, on_applied=on_applied)


@dataclass
class BucketConfiguration:
    name: str
    region: str
    versioning: str = "Never Enabled"
    encryption: str = "None"
    public_access_blocked: bool | None = None
    tags: dict[str, str] = field(default_factory=dict)
    lifecycle_rules: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "region": self.region,
            "versioning": self.versioning,
            "encryption": self.encryption,
            "public_access_blocked": self.public_access_blocked,
            "tags": self.tags,
            "lifecycle_rules": self.lifecycle_rules,
        }


def describe_bucket(gateway: S3Client, bucket_name: str) -> BucketConfiguration:
    """Read-only snapshot of the settings this tool can change."""
    config = BucketConfiguration(
        name=bucket_name, region=gateway.get_bucket_region(bucket_name)
    )

    config.versioning = gateway.get_versioning_status(bucket_name) or config.versioning

    try:
        config.encryption = gateway.get_encryption_algorithm(bucket_name) or "None"
    except ConfigurationNotFoundError:
        pass

    try:
        block = gateway.get_public_access_block(bucket_name)
        config.public_access_blocked = block == PublicAccessBlock.for_public(False)
    except ConfigurationNotFoundError:
        config.public_access_blocked = False

    try:
        config.tags = gateway.get_bucket_tags(bucket_name)
    except ConfigurationNotFoundError:
        pass

    config.lifecycle_rules = [
        rule.get("ID", "-") for rule in fetch_lifecycle_rules(gateway, bucket_name)
    ]
    return config
