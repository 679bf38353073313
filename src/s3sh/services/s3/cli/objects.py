import typer
from rich.markup import escape

from s3sh.core.presenter import Presenter, console_err, console_out, print_success
from s3sh.core.runner import get_app_context, run_operation
from s3sh.services.s3.client import S3Client
from s3sh.services.s3.domains.objects.operations import (
    delete_object,
    get_object_attributes,
    list_objects,
    restore_object,
    upload_object,
)
from s3sh.services.s3.domains.objects.views import ObjectAttributesView, ObjectListView

app = typer.Typer(help="Manage Objects")


def _finish(exit_code: int):
    if exit_code != 0:
        raise typer.Exit(exit_code)


@app.command("list")
def list_(
    ctx: typer.Context,
    bucket: str = typer.Argument(..., help="Name of the bucket"),
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON"),
):
    """List objects in a bucket"""

    def operation(gateway: S3Client):
        presenter = Presenter(list_objects(gateway, bucket), ObjectListView)
        if json_output:
            presenter.print_json()
        else:
            presenter.print_table(empty_message="No objects found.")

    _finish(run_operation(get_app_context(ctx), operation))


@app.command("upload")
def upload(
    ctx: typer.Context,
    bucket: str = typer.Argument(..., help="Name of the bucket"),
    file: str = typer.Argument(..., help="Path to the file to upload"),
    key: str | None = typer.Option(
        None, "--key", "-k", help="Object key (defaults to the file name)"
    ),
):
    """Upload a file to a bucket"""

    def operation(gateway: S3Client):
        with console_err.status(
            f"[bold yellow]Uploading {escape(key or file)}...", spinner="dots"
        ):
            object_key = upload_object(gateway, bucket, file, key)
        print_success(
            f"Object '{escape(object_key)}' uploaded to '{escape(bucket)}'."
        )

    _finish(run_operation(get_app_context(ctx), operation))


@app.command("delete")
def delete(
    ctx: typer.Context,
    bucket: str = typer.Argument(..., help="Name of the bucket"),
    key: str = typer.Argument(..., help="Key of the object"),
):
    """Delete an object from a bucket"""

    def operation(gateway: S3Client):
        delete_object(gateway, bucket, key)
        print_success(f"Object '{escape(key)}' deleted from '{escape(bucket)}'.")

    _finish(run_operation(get_app_context(ctx), operation))


@app.command("restore")
def restore(
    ctx: typer.Context,
    bucket: str = typer.Argument(..., help="Name of the bucket"),
    key: str = typer.Argument(..., help="Key of the object"),
):
    """Restore an archived object for one day"""

    def operation(gateway: S3Client):
        restore_object(gateway, bucket, key)
        print_success(f"Restore request initiated for '{escape(key)}'.")

    _finish(run_operation(get_app_context(ctx), operation))


@app.command("attributes")
def attributes(
    ctx: typer.Context,
    bucket: str = typer.Argument(..., help="Name of the bucket"),
    key: str = typer.Argument(..., help="Key of the object"),
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON"),
):
    """Show object attributes"""

    def operation(gateway: S3Client):
        info = get_object_attributes(gateway, bucket, key)
        if json_output:
            console_out.print_json(data=ObjectAttributesView.to_dict(info))
        else:
            Presenter(ObjectAttributesView.rows(info), ObjectAttributesView).print_table()

    _finish(run_operation(get_app_context(ctx), operation))
