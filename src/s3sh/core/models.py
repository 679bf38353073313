from dataclasses import dataclass

DEFAULT_REGION = "us-east-1"


@dataclass
class AppContext:
    """Options shared by every command, collected by the root callback."""

    region: str | None = None
    profile: str | None = None
    verbose: bool = False
