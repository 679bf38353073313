from collections.abc import Sequence
from typing import Any, Protocol

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from s3sh.core.style import CHECK_MARK, Status, colorize

console_out = Console()
console_err = Console(stderr=True)


class ViewProtocol(Protocol):
    @classmethod
    def get_headers(cls) -> list[str]: ...

    @classmethod
    def format_row(cls, item: Any) -> list[str]: ...

    @classmethod
    def to_dict(cls, item: Any) -> dict[str, Any]: ...


class Presenter:
    def __init__(self, items: Sequence[Any], view_class: type[ViewProtocol]):
        self.items = items
        self.view_class = view_class

    def print_json(self):
        console_out.print_json(data=[self.view_class.to_dict(i) for i in self.items])

    def print_table(self, title: str | None = None, empty_message: str = ""):
        if not self.items:
            console_out.print(colorize(empty_message or "Nothing found.", Status.WARN))
            return

        table = Table(title=title, show_lines=True)
        for header in self.view_class.get_headers():
            table.add_column(header)

        for item in self.items:
            table.add_row(*self.view_class.format_row(item))

        console_out.print(table)


def print_success(message: str):
    console_out.print(f"{CHECK_MARK} {message}")


def print_error(message: str):
    console_err.print(f"[bold red]Error:[/bold red] {escape(message)}")
