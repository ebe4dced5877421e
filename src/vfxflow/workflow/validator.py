"""Transition validation - a pure decision over the catalog."""

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from src.vfxflow.workflow.catalog import get_transition


class OwnedProject(Protocol):
    """The only project field the validator reads."""

    client_id: UUID


def validate_transition(
    project: OwnedProject,
    from_status: str,
    to_status: str,
    acting_user_id: UUID | None,
    acting_roles: Iterable[str],
) -> bool:
    """Decide whether ``acting_user_id`` may move ``project`` between two statuses.

    1. A transition to the same status is never valid.
    2. The (from, to) pair must exist in the catalog.
    3. One of the actor's roles must be permitted, unless the actor is the
       project's client (ownership override).

    No I/O and no side effects: the same arguments always give the same verdict.
    """
    if from_status == to_status:
        return False

    transition = get_transition(from_status, to_status)
    if transition is None:
        return False

    if acting_user_id is not None and acting_user_id == project.client_id:
        return True

    return transition.permits_any(acting_roles)
