"""Output formatting for ``gitpod workspace list``."""

import json
from collections.abc import Sequence
from datetime import UTC, datetime

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.measure import Measurement
from rich.table import Table

from gitpod_cli.api.models import Workspace

TABLE_COLUMNS = ("Workspace ID", "Phase", "Created", "Context URL")

# Upper bound when measuring the unwrapped table width
_UNBOUNDED_WIDTH = 10_000

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY

# (upper bound in seconds, unit seconds, unit name), checked in order
_UNITS = (
    (_MINUTE, 1, "second"),
    (_HOUR, _MINUTE, "minute"),
    (_DAY, _HOUR, "hour"),
    (_WEEK, _DAY, "day"),
    (_MONTH, _WEEK, "week"),
    (_YEAR, _MONTH, "month"),
)


def format_relative_time(moment: datetime | None, now: datetime | None = None) -> str:
    """Describe ``moment`` relative to ``now``, e.g. ``3 hours ago``.

    Naive datetimes are treated as UTC. Future moments read ``... from now``.

    Example:
        >>> format_relative_time(datetime(2024, 1, 1, tzinfo=UTC), now=datetime(2024, 1, 3, tzinfo=UTC))
        '2 days ago'
    """
    if moment is None:
        return "unknown"

    now = now or datetime.now(UTC)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    delta = (now - moment).total_seconds()
    suffix = "ago" if delta >= 0 else "from now"
    seconds = int(abs(delta))

    if seconds < 1:
        return "now"

    for bound, unit, name in _UNITS:
        if seconds < bound:
            return _plural(seconds // unit, name, suffix)

    return _plural(seconds // _YEAR, "year", suffix)


def _plural(count: int, unit: str, suffix: str) -> str:
    count = max(count, 1)
    return f"{count} {unit}{'' if count == 1 else 's'} {suffix}"


def build_workspace_table(workspaces: Sequence[Workspace], now: datetime | None = None) -> Table:
    """Build the workspace listing table.

    Cells are never wrapped so IDs and URLs can be copied from the output.
    Values come from the server and are escaped so brackets in URLs are not
    read as console markup.
    """
    table = Table(box=box.SIMPLE_HEAD, show_edge=False)
    for column in TABLE_COLUMNS:
        table.add_column(column, no_wrap=True)

    for workspace in workspaces:
        table.add_row(
            escape(workspace.workspace_id),
            escape(workspace.phase_label),
            format_relative_time(workspace.created_at, now=now),
            escape(workspace.context_url),
        )

    return table


def print_workspace_table(console: Console, table: Table) -> None:
    """Print ``table`` at its natural width, widening ``console`` if needed.

    Lines longer than the terminal are left to the terminal to soft-wrap.
    """
    options = console.options.update_width(_UNBOUNDED_WIDTH)
    natural_width = Measurement.get(console, options, table).maximum
    if natural_width > console.width:
        console.width = natural_width
    console.print(table)


def workspaces_to_json(workspaces: Sequence[Workspace]) -> str:
    """Serialize the raw workspace records as a JSON array."""
    return json.dumps([workspace.raw for workspace in workspaces])
