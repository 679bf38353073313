from enum import StrEnum

from rich.markup import escape


class Status(StrEnum):
    """
    Standardized colors for operation outcomes.
    """

    OK = "green"
    ERROR = "red"
    WARN = "yellow"
    INFO = "cyan"


def colorize(text: str, status: Status) -> str:
    """
    Wraps text in Rich-compatible color tags based on the outcome status.
    The text is escaped, so brackets in data are printed literally.

    Args:
        text: The string to be colored.
        status: The Status enum value (e.g., Status.OK).

    Returns:
        String formatted as '[color]text[/color]'
    """
    return f"[{status}]{escape(text)}[/{status}]"


CHECK_MARK = colorize("✔", Status.OK)
