"""
Models for records returned by the Gitpod public API.

The API speaks the Connect protocol with JSON encoding: enums arrive as
their full names (``PHASE_RUNNING``) and timestamps as RFC 3339 strings.
These models normalize that wire format for rendering while keeping the
raw record for JSON output.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class WorkspacePhase(str, Enum):
    """Lifecycle phase of a workspace instance.

    Values are the wire names; ``display_name`` is what users see.
    """

    UNSPECIFIED = "PHASE_UNSPECIFIED"
    PREPARING = "PHASE_PREPARING"
    IMAGEBUILD = "PHASE_IMAGEBUILD"
    PENDING = "PHASE_PENDING"
    CREATING = "PHASE_CREATING"
    INITIALIZING = "PHASE_INITIALIZING"
    RUNNING = "PHASE_RUNNING"
    INTERRUPTED = "PHASE_INTERRUPTED"
    STOPPING = "PHASE_STOPPING"
    STOPPED = "PHASE_STOPPED"

    def __str__(self) -> str:
        return self.display_name

    @property
    def display_name(self) -> str:
        """Lower-case phase name without the wire prefix, e.g. ``running``."""
        return _PHASE_DISPLAY_NAMES[self]

    @classmethod
    def from_wire(cls, value: str | None) -> "WorkspacePhase":
        """Parse a wire value; unknown or missing values map to UNSPECIFIED."""
        if not value:
            return cls.UNSPECIFIED
        try:
            return cls(value.upper())
        except ValueError:
            return cls.UNSPECIFIED


_PHASE_DISPLAY_NAMES: dict[WorkspacePhase, str] = {
    WorkspacePhase.UNSPECIFIED: "unspecified",
    WorkspacePhase.PREPARING: "preparing",
    WorkspacePhase.IMAGEBUILD: "imagebuild",
    WorkspacePhase.PENDING: "pending",
    WorkspacePhase.CREATING: "creating",
    WorkspacePhase.INITIALIZING: "initializing",
    WorkspacePhase.RUNNING: "running",
    WorkspacePhase.INTERRUPTED: "interrupted",
    WorkspacePhase.STOPPING: "stopping",
    WorkspacePhase.STOPPED: "stopped",
}


def phase_display_name(value: str | None) -> str:
    """Display name for a raw wire phase.

    Known phases use the enum mapping. Unknown values (a phase added by a
    newer server) drop a leading ``PHASE_`` and are lower-cased instead of
    being collapsed to ``unspecified``.

    Example:
        >>> phase_display_name("PHASE_RUNNING")
        'running'
        >>> phase_display_name("PHASE_HIBERNATING")
        'hibernating'
    """
    phase = WorkspacePhase.from_wire(value)
    if phase is not WorkspacePhase.UNSPECIFIED or not value:
        return phase.display_name
    return value.removeprefix("PHASE_").lower()


@dataclass
class Workspace:
    """A workspace as listed by ``WorkspacesService/ListWorkspaces``."""

    workspace_id: str
    phase: WorkspacePhase
    phase_label: str
    created_at: datetime | None
    context_url: str
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Workspace":
        """Build a workspace from its Connect JSON representation.

        Missing nested objects are tolerated: a workspace without a running
        instance has no creation time and an unspecified phase.
        """
        instance = (data.get("status") or {}).get("instance") or {}
        raw_phase = (instance.get("status") or {}).get("phase")

        return cls(
            workspace_id=data.get("workspaceId", ""),
            phase=WorkspacePhase.from_wire(raw_phase),
            phase_label=phase_display_name(raw_phase),
            created_at=parse_timestamp(instance.get("createdAt")),
            context_url=(data.get("context") or {}).get("contextUrl", ""),
            raw=data,
        )


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp as emitted by protobuf JSON.

    Protobuf emits ``Z`` for UTC and up to nanosecond precision; fractions
    are truncated to microseconds.
    """
    if not value:
        return None

    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
