import typer

from s3sh.core.models import AppContext
from s3sh.services.s3.cli import bucket_app, object_app

app = typer.Typer(
    help="s3sh: A simple S3 CLI",
    epilog=(
        "Global options (--region, --profile, --verbose) go before the command group."
    ),
)
app.add_typer(bucket_app, name="bucket")
app.add_typer(object_app, name="object")


@app.callback()
def main(
    ctx: typer.Context,
    region: str | None = typer.Option(None, "--region", "-r", help="AWS Region"),
    profile: str | None = typer.Option(None, "--profile", "-p", help="AWS Profile"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    ctx.obj = AppContext(region=region, profile=profile, verbose=verbose)


if __name__ == "__main__":
    app()
