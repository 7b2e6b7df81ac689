"""Tests for workspace list rendering."""

import json
from datetime import UTC, datetime, timedelta

import pytest
from rich.console import Console

from gitpod_cli.api.models import Workspace
from gitpod_cli.rendering.workspaces import (
    TABLE_COLUMNS,
    build_workspace_table,
    format_relative_time,
    print_workspace_table,
    workspaces_to_json,
)

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


def render(table) -> str:
    console = Console(width=200, record=True, color_system=None)
    console.print(table)
    return console.export_text()


class TestFormatRelativeTime:
    """Test human relative times."""

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(0), "now"),
            (timedelta(seconds=1), "1 second ago"),
            (timedelta(seconds=45), "45 seconds ago"),
            (timedelta(minutes=1), "1 minute ago"),
            (timedelta(minutes=59), "59 minutes ago"),
            (timedelta(hours=3), "3 hours ago"),
            (timedelta(days=1), "1 day ago"),
            (timedelta(days=6), "6 days ago"),
            (timedelta(days=14), "2 weeks ago"),
            (timedelta(days=60), "2 months ago"),
            (timedelta(days=800), "2 years ago"),
        ],
    )
    def test_past(self, delta, expected):
        assert format_relative_time(NOW - delta, now=NOW) == expected

    def test_future(self):
        assert format_relative_time(NOW + timedelta(hours=2), now=NOW) == "2 hours from now"

    def test_naive_datetime_is_utc(self):
        assert format_relative_time(datetime(2024, 6, 1, 11, 0, 0), now=NOW) == "1 hour ago"

    def test_missing(self):
        assert format_relative_time(None) == "unknown"


class TestWorkspaceTable:
    """Test table rendering."""

    def test_columns(self, make_workspace):
        table = build_workspace_table([Workspace.from_api(make_workspace())], now=NOW)

        assert [column.header for column in table.columns] == list(TABLE_COLUMNS)
        assert table.row_count == 1

    def test_row_content(self, make_workspace):
        workspaces = [
            Workspace.from_api(
                make_workspace(workspace_id="ws-running", phase="PHASE_RUNNING", created_at="2024-06-01T09:00:00Z")
            ),
            Workspace.from_api(
                make_workspace(workspace_id="ws-stopped", phase="PHASE_STOPPED", created_at="2024-05-30T12:00:00Z")
            ),
        ]

        output = render(build_workspace_table(workspaces, now=NOW))

        assert "ws-running" in output
        assert "running" in output
        assert "PHASE_" not in output
        assert "3 hours ago" in output
        assert "2 days ago" in output
        assert "stopped" in output
        assert "https://github.com/gitpod-io/gitpod" in output

    def test_empty(self):
        table = build_workspace_table([])

        assert table.row_count == 0

    @pytest.mark.parametrize(
        "context_url",
        [
            "https://github.com/o/r/blob/main/app/[slug]/page.tsx",
            "https://x.dev/a[/b]",
            "https://x.dev/[bold]x[/bold]",
        ],
    )
    def test_brackets_render_literally(self, make_workspace, context_url):
        """Context URLs are data, not console markup."""
        workspace = Workspace.from_api(make_workspace(context_url=context_url))

        output = render(build_workspace_table([workspace], now=NOW))

        assert context_url in output


class TestPrintWorkspaceTable:
    """Test printing on narrow consoles."""

    def test_long_url_is_not_wrapped(self, make_workspace):
        context_url = "https://github.com/gitpod-io/gitpod/tree/main/components/dashboard/src/workspaces/[id]/page.tsx"
        workspace = Workspace.from_api(make_workspace(context_url=context_url))
        console = Console(width=60, record=True, color_system=None)

        print_workspace_table(console, build_workspace_table([workspace], now=NOW))

        output = console.export_text()
        assert context_url in output
        assert "gitpodio-gitpod-abc123" in output
        assert "Context URL" in output

    def test_wide_console_is_left_alone(self, make_workspace):
        console = Console(width=200, record=True, color_system=None)

        print_workspace_table(console, build_workspace_table([Workspace.from_api(make_workspace())], now=NOW))

        assert console.width == 200
        assert "https://github.com/gitpod-io/gitpod" in console.export_text()


class TestWorkspacesToJson:
    """Test JSON output."""

    def test_json_array_of_raw_records(self, make_workspace):
        records = [make_workspace(workspace_id=f"ws-{i}") for i in range(3)]
        workspaces = [Workspace.from_api(record) for record in records]

        parsed = json.loads(workspaces_to_json(workspaces))

        assert parsed == records

    def test_empty(self):
        assert json.loads(workspaces_to_json([])) == []
