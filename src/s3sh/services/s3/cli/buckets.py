import typer
from rich.markup import escape

from s3sh.core.errors import ValidationError
from s3sh.core.presenter import Presenter, console_out, print_success
from s3sh.core.runner import get_app_context, run_operation
from s3sh.services.s3.client import S3Client
from s3sh.services.s3.domains.buckets.configuration import (
    apply_facets,
    create_bucket,
    describe_bucket,
)
from s3sh.services.s3.domains.buckets.lifecycle import (
    unchanged_since_read,
    upsert_lifecycle_rule,
)
from s3sh.services.s3.domains.buckets.models import ConfigurationFacets, FacetResult
from s3sh.services.s3.domains.buckets.validation import map_encryption_mode, parse_tag
from s3sh.services.s3.domains.buckets.views import (
    BucketConfigView,
    BucketListView,
    describe_facet_result,
)

app = typer.Typer(help="Manage Buckets")


def _validate_encryption(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return map_encryption_mode(value)
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e


def _parse_tags(values: list[str] | None) -> list[tuple[str, str]]:
    try:
        return [parse_tag(v) for v in values or []]
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e


PUBLIC_OPTION = typer.Option(
    None,
    "--public/--private",
    help="Allow public access, or block all public access",
)
VERSIONING_OPTION = typer.Option(
    None, "--versioning/--no-versioning", help="Enable or suspend versioning"
)
ENCRYPTION_OPTION = typer.Option(
    None,
    "--encryption",
    help="Default encryption mode (AES256 or aws:kms)",
    callback=_validate_encryption,
)
TAGS_OPTION = typer.Option(
    None,
    "--tag",
    "--tags",
    help="Tag as Key=Value, repeatable. Replaces all existing tags",
    callback=_parse_tags,
)


def _report_facet(bucket_name: str, result: FacetResult):
    print_success(describe_facet_result(bucket_name, result))


def _finish(exit_code: int):
    if exit_code != 0:
        raise typer.Exit(exit_code)


@app.command("list")
def list_buckets(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON"),
):
    """List all buckets"""

    def operation(gateway: S3Client):
        presenter = Presenter(gateway.list_buckets(), BucketListView)
        if json_output:
            presenter.print_json()
        else:
            presenter.print_table(empty_message="No buckets found.")

    _finish(run_operation(get_app_context(ctx), operation))


@app.command("create")
def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the bucket"),
    public: bool | None = PUBLIC_OPTION,
    versioning: bool | None = VERSIONING_OPTION,
    encryption: str | None = ENCRYPTION_OPTION,
    tags: list[str] | None = TAGS_OPTION,
):
    """Create a new bucket and optionally configure it"""
    facets = ConfigurationFacets(public, versioning, encryption, tags or [])

    def on_created(bucket_name: str):
        print_success(f"Bucket '{escape(bucket_name)}' created successfully.")
        if not facets.is_empty:
            console_out.print("Applying configurations...")

    def operation(gateway: S3Client):
        create_bucket(
            gateway,
            name,
            gateway.region,
            facets,
            on_created=on_created,
            on_applied=_report_facet,
        )

    _finish(run_operation(get_app_context(ctx), operation))


@app.command("config")
def config(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the bucket"),
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON"),
):
    """Show bucket configuration"""

    def operation(gateway: S3Client):
        bucket_config = describe_bucket(gateway, name)
        if json_output:
            console_out.print_json(data=BucketConfigView.to_dict(bucket_config))
        else:
            Presenter(BucketConfigView.rows(bucket_config), BucketConfigView).print_table()

    _finish(run_operation(get_app_context(ctx), operation))


@app.command("update")
def update(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the bucket"),
    public: bool | None = PUBLIC_OPTION,
    versioning: bool | None = VERSIONING_OPTION,
    encryption: str | None = ENCRYPTION_OPTION,
    tags: list[str] | None = TAGS_OPTION,
):
    """Update bucket configuration. Only the given settings are changed"""
    facets = ConfigurationFacets(public, versioning, encryption, tags or [])
    if facets.is_empty:
        console_out.print("[yellow]Nothing to update.[/yellow]")
        return

    def operation(gateway: S3Client):
        apply_facets(gateway, name, facets, on_applied=_report_facet)

    _finish(run_operation(get_app_context(ctx), operation))


@app.command("lifecycle")
def lifecycle(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the bucket"),
    rule_id: str = typer.Option(..., "--id", help="Rule ID"),
    prefix: str = typer.Option("", "--prefix", help="Prefix filter"),
    transitions: str = typer.Option(
        ...,
        "--transitions",
        help='Transitions JSON, e.g. \'[{"days": 30, "storage_class": "STANDARD_IA"}]\'',
    ),
    expiration: int | None = typer.Option(
        None, "--expiration", min=0, help="Expiration days"
    ),
    enabled: bool = typer.Option(True, "--enabled/--disabled", help="Rule status"),
    if_unchanged: bool = typer.Option(
        False,
        "--if-unchanged",
        help="Re-read the rules before writing and abort if someone else changed them",
    ),
):
    """Create or replace a lifecycle rule by ID"""

    def operation(gateway: S3Client):
        upsert_lifecycle_rule(
            gateway,
            name,
            rule_id,
            prefix,
            transitions,
            expiration_days=expiration,
            enabled=enabled,
            precondition=unchanged_since_read if if_unchanged else None,
        )
        print_success(
            f"Lifecycle rule '{escape(rule_id)}' set for bucket '{escape(name)}'."
        )

    _finish(run_operation(get_app_context(ctx), operation))
