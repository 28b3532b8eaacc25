"""Console reporter for caravan results using Rich."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from caravan.log import LogLevel, render
from caravan.results import Ran, Result, ResultStatus, ResultStream, format_error


NA = "N/A"

# status -> (progress glyph, glyph color, badge label, badge style)
_STATUS_CONFIG: dict[ResultStatus, tuple[str, str, str, str]] = {
    ResultStatus.PASSED: (".", "green", "PASS", "bold white on green"),
    ResultStatus.FAILED: ("F", "red", "FAIL", "bold white on red"),
    ResultStatus.SKIPPED: ("-", "yellow", "SKIP", "reverse"),
}


def _get_status(result: Result) -> Text:
    _, _, label, style = _STATUS_CONFIG[result.status]
    return Text(f" {label} ", style=style)


def _get_id(result: Result) -> str:
    return result.id


def _get_time(result: Result) -> str:
    if isinstance(result, Ran):
        return f"{result.elapsed:.2f}"
    return NA


def _get_error(result: Result) -> str:
    if not isinstance(result, Ran):
        return NA
    if result.error is None:
        return ""
    return format_error(result.error)


def _get_log(result: Result) -> str:
    if not isinstance(result, Ran):
        return NA
    # Passing tests only show INFO messages, failures show everything.
    levels = {LogLevel.INFO} if result.ok else None
    return render(result.log, levels)


@dataclass(frozen=True)
class Column:
    """A report table column.

    With ``hide_if_empty`` the column is left out when no row has a value.
    """

    header: str
    get: Callable[[Result], str | Text]
    hide_if_empty: bool = False

    def is_visible(self, rows: list[Result]) -> bool:
        if not self.hide_if_empty:
            return True
        return any(self.get(row) for row in rows)


COLUMNS: tuple[Column, ...] = (
    Column("Status", _get_status),
    Column("ID", _get_id),
    Column("Time", _get_time),
    Column("Error", _get_error, hide_if_empty=True),
    Column("Log", _get_log, hide_if_empty=True),
)


class ConsoleReporter:
    """Consumes results as they arrive and renders the final report.

    A progress glyph is printed for every result the moment it is received:
    ``.`` for a pass, ``F`` for a failure and ``-`` for a skip. Once the
    stream closes, every result is shown in a table in arrival order.
    """

    def __init__(self, console: Console | None = None, *, max_width: int = 300) -> None:
        self.console = console or Console()
        self.max_width = max_width
        self.results: list[Result] = []
        self.failures = 0

    async def consume(self, results: ResultStream) -> int:
        """Read results until the stream is closed and return the failure count."""
        async for result in results:
            self.on_result(result)
        self.on_stream_closed()
        return self.failures

    def on_result(self, result: Result) -> None:
        glyph, color, _, _ = _STATUS_CONFIG[result.status]
        self.console.print(glyph, style=color, end="", highlight=False)
        self.results.append(result)
        if result.status.is_failure:
            self.failures += 1

    def on_stream_closed(self) -> None:
        self.console.print("\n")
        self.console.print(self.build_table(), width=min(self.console.width, self.max_width))

    def build_table(self) -> Table:
        columns = [column for column in COLUMNS if column.is_visible(self.results)]
        table = Table(box=box.SQUARE, show_lines=True, header_style="bold")
        for column in columns:
            table.add_column(column.header, overflow="fold")
        for result in self.results:
            cells = []
            for column in columns:
                value = column.get(result)
                cells.append(value if isinstance(value, Text) else Text(value))
            table.add_row(*cells)
        return table
