"""Project status catalog.

Statuses, their display colors, and the transition table. Which roles may
execute a transition is data here; the only rule outside this table is the
ownership override applied by the validator.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from src.vfxflow.models.enums import MANAGER_ROLES, AppRole, ProjectStatus

DEFAULT_STATUS_COLOR = "#6b7280"

_MANAGERS_AND_ARTIST = MANAGER_ROLES | {AppRole.ARTIST.value}


@dataclass(frozen=True)
class StatusDefinition:
    """Display metadata for one status."""

    name: str
    color: str
    sort_order: int
    description: str


@dataclass(frozen=True)
class Transition:
    """An admissible (from, to) pair and who may execute it."""

    from_status: str
    to_status: str
    allowed_roles: frozenset[str]
    auto_notification: bool = True

    def permits_any(self, roles: Iterable[str]) -> bool:
        return not self.allowed_roles.isdisjoint(roles)


STATUSES: tuple[StatusDefinition, ...] = (
    StatusDefinition(ProjectStatus.DRAFT.value, "#6b7280", 0, "Being prepared by the client"),
    StatusDefinition(ProjectStatus.OPEN.value, "#3b82f6", 1, "Published and accepting work"),
    StatusDefinition(ProjectStatus.IN_PROGRESS.value, "#f59e0b", 2, "Work under way"),
    StatusDefinition(ProjectStatus.REVIEW.value, "#8b5cf6", 3, "Delivered, awaiting sign-off"),
    StatusDefinition(ProjectStatus.COMPLETED.value, "#10b981", 4, "Signed off"),
    StatusDefinition(ProjectStatus.CANCELLED.value, "#ef4444", 5, "Abandoned"),
)

TRANSITIONS: tuple[Transition, ...] = (
    Transition(ProjectStatus.DRAFT.value, ProjectStatus.OPEN.value, MANAGER_ROLES),
    Transition(ProjectStatus.DRAFT.value, ProjectStatus.CANCELLED.value, MANAGER_ROLES),
    Transition(ProjectStatus.OPEN.value, ProjectStatus.IN_PROGRESS.value, MANAGER_ROLES),
    Transition(ProjectStatus.OPEN.value, ProjectStatus.CANCELLED.value, MANAGER_ROLES),
    Transition(ProjectStatus.IN_PROGRESS.value, ProjectStatus.REVIEW.value, _MANAGERS_AND_ARTIST),
    Transition(ProjectStatus.IN_PROGRESS.value, ProjectStatus.CANCELLED.value, MANAGER_ROLES),
    Transition(ProjectStatus.REVIEW.value, ProjectStatus.COMPLETED.value, MANAGER_ROLES),
    Transition(ProjectStatus.REVIEW.value, ProjectStatus.IN_PROGRESS.value, MANAGER_ROLES),
    Transition(ProjectStatus.REVIEW.value, ProjectStatus.CANCELLED.value, MANAGER_ROLES),
)

_STATUS_BY_NAME = {status.name: status for status in STATUSES}
_TRANSITION_BY_PAIR = {(t.from_status, t.to_status): t for t in TRANSITIONS}


def list_statuses() -> list[StatusDefinition]:
    """All statuses in display order."""
    return sorted(STATUSES, key=lambda s: s.sort_order)


def is_known_status(status: str) -> bool:
    return status in _STATUS_BY_NAME


def status_color(status: str) -> str:
    """Display color for a status, grey for anything unknown."""
    definition = _STATUS_BY_NAME.get(status)
    return definition.color if definition else DEFAULT_STATUS_COLOR


def get_transition(from_status: str, to_status: str) -> Transition | None:
    """Look up the catalog entry for a (from, to) pair."""
    return _TRANSITION_BY_PAIR.get((from_status, to_status))


def outgoing_transitions(from_status: str) -> list[Transition]:
    return [t for t in TRANSITIONS if t.from_status == from_status]


def is_terminal(status: str) -> bool:
    """Terminal statuses have no outgoing transitions."""
    return is_known_status(status) and not outgoing_transitions(status)


def get_available_transitions(
    current_status: str,
    user_roles: Iterable[str],
    *,
    is_owner: bool = False,
) -> list[Transition]:
    """Transitions out of ``current_status`` the user may choose from.

    Owners are offered every outgoing transition, matching the validator's
    ownership override. Anyone else needs a role the transition lists.
    """
    roles = frozenset(user_roles)
    return [
        t for t in outgoing_transitions(current_status) if is_owner or t.permits_any(roles)
    ]
