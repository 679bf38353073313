import logging
import sys
from collections.abc import Callable
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, NoCredentialsError, NoRegionError
from rich.markup import escape

from s3sh.core.errors import FacetApplicationError, S3shError
from s3sh.core.models import AppContext
from s3sh.core.presenter import console_err, print_error
from s3sh.services.s3.client import S3Client

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    log_level = logging.DEBUG if verbose else logging.ERROR
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def get_app_context(ctx: Any) -> AppContext:
    return ctx.obj if isinstance(ctx.obj, AppContext) else AppContext()


def create_session(region: str | None = None, profile: str | None = None):
    return boto3.Session(region_name=region, profile_name=profile)


def _report_partial_application(error: FacetApplicationError):
    if not error.applied:
        return
    applied = escape(", ".join(f"{r.facet} ({r.value})" for r in error.applied))
    console_err.print(
        f"[yellow]Already applied and left in place:[/yellow] {applied}"
    )


def run_operation(
    app_ctx: AppContext, operation: Callable[..., Any], *args: Any, **kwargs: Any
) -> int:
    """
    Runs `operation(gateway, *args, **kwargs)` against a fresh S3Client and
    converts every failure into a message on stderr and exit code 1.
    """
    setup_logging(app_ctx.verbose)

    try:
        session = create_session(app_ctx.region, app_ctx.profile)
        gateway = S3Client(session=session)
        operation(gateway, *args, **kwargs)
    except FacetApplicationError as e:
        print_error(str(e))
        _report_partial_application(e)
        return 1
    except S3shError as e:
        print_error(str(e))
        return 1
    except NoRegionError:
        console_err.print(
            "\n[bold red]Configuration Error:[/bold red] No AWS region specified."
        )
        console_err.print(
            "Please provide a region using the "
            "[green]--region"
            "[/green] flag or set the "
            "[green]AWS_DEFAULT_REGION[/green] environment variable.\n"
        )
        return 1
    except NoCredentialsError:
        console_err.print(
            "\n[bold red]Configuration Error:[/bold red] No AWS credentials found."
        )
        console_err.print(
            "Use the [green]--profile[/green] flag or configure credentials "
            "for the default profile.\n"
        )
        return 1
    except BotoCoreError as e:
        print_error(str(e))
        return 1

    return 0
