import logging
from collections.abc import Callable
from typing import Any, Protocol

from s3sh.core.errors import (
    ConcurrentModificationError,
    ConfigurationNotFoundError,
    ValidationError,
)
from s3sh.services.s3.domains.buckets.models import LifecycleRule
from s3sh.services.s3.domains.buckets.validation import parse_transitions

logger = logging.getLogger(__name__)


class LifecycleGateway(Protocol):
    def get_lifecycle_configuration(self, bucket_name: str) -> list[dict[str, Any]]: ...

    def put_lifecycle_configuration(
        self, bucket_name: str, rules: list[dict[str, Any]]
    ) -> None: ...


WritePrecondition = Callable[[LifecycleGateway, str, list[dict[str, Any]]], None]


def fetch_lifecycle_rules(
    gateway: LifecycleGateway, bucket_name: str
) -> list[dict[str, Any]]:
    """A bucket without a lifecycle configuration has an empty rule set."""
    try:
        return list(gateway.get_lifecycle_configuration(bucket_name))
    except ConfigurationNotFoundError:
        logger.debug("No lifecycle configuration on %s, starting empty", bucket_name)
        return []


def unchanged_since_read(
    gateway: LifecycleGateway, bucket_name: str, baseline: list[dict[str, Any]]
) -> None:
    """
    Write precondition that re-reads the rule set and refuses to overwrite it
    if it no longer matches what the upsert started from.

    S3 has no conditional lifecycle write, so this narrows the race window
    but cannot close it.
    """
    if fetch_lifecycle_rules(gateway, bucket_name) != baseline:
        raise ConcurrentModificationError(bucket_name)


def merge_rule(
    rules: list[dict[str, Any]], new_rule: dict[str, Any]
) -> list[dict[str, Any]]:
    """
    Replaces any rule sharing the new rule's ID and appends the new rule.
    Other rules are carried forward verbatim and in order.
    """
    merged = [rule for rule in rules if rule.get("ID") != new_rule["ID"]]
    merged.append(new_rule)
    return merged


def upsert_lifecycle_rule(
    gateway: LifecycleGateway,
    bucket_name: str,
    rule_id: str,
    prefix: str,
    transitions_json: str,
    expiration_days: int | None = None,
    enabled: bool = True,
    precondition: WritePrecondition | None = None,
) -> list[dict[str, Any]]:
    """
    Inserts or replaces the lifecycle rule `rule_id` on a bucket.

    Transitions and expiration are validated before anything is read from
    the bucket. The full resulting rule set is written back in one call and
    returned. A concurrent writer between the read and the write is
    overwritten unless a `precondition` such as `unchanged_since_read` is
    supplied.
    """
    transitions = parse_transitions(transitions_json)
    if expiration_days is not None and expiration_days < 0:
        raise ValidationError(f"Invalid expiration days: {expiration_days}")

    new_rule = LifecycleRule(
        rule_id=rule_id,
        prefix=prefix,
        enabled=enabled,
        transitions=transitions,
        expiration_days=expiration_days,
    ).to_aws()

    baseline = fetch_lifecycle_rules(gateway, bucket_name)
    rules = merge_rule(baseline, new_rule)

    if precondition is not None:
        precondition(gateway, bucket_name, baseline)

    gateway.put_lifecycle_configuration(bucket_name, rules)
    logger.debug(
        "Wrote %d lifecycle rule(s) to %s (upserted %s)",
        len(rules),
        bucket_name,
        rule_id,
    )
    return rules
