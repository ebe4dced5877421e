"""Workflow error taxonomy.

Every failure the engine reports is one of these. Each carries a stable
``code`` for clients and the HTTP status the API layer answers with.
"""

from uuid import UUID


class WorkflowError(Exception):
    """Base class for expected, user-reportable workflow failures."""

    code: str = "workflow_error"
    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransitionDenied(WorkflowError):
    """Requested transition is not in the catalog or the actor lacks permission."""

    code = "transition_denied"
    status_code = 403

    def __init__(self, from_status: str, to_status: str):
        super().__init__(f"Transition from '{from_status}' to '{to_status}' is not allowed")
        self.from_status = from_status
        self.to_status = to_status


class ConcurrentModification(WorkflowError):
    """Optimistic precondition failed: someone else changed the record first."""

    code = "concurrent_modification"
    status_code = 409

    def __init__(self, entity_type: str, entity_id: UUID, expected: str | None = None):
        detail = f"{entity_type} {entity_id} was modified concurrently"
        if expected is not None:
            detail += f" (expected status '{expected}')"
        super().__init__(detail)
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected = expected


class AlreadyShared(WorkflowError):
    """An active grant already exists for this task and artist."""

    code = "already_shared"
    status_code = 409

    def __init__(self, task_id: UUID, artist_id: UUID):
        super().__init__("Task is already shared with this artist")
        self.task_id = task_id
        self.artist_id = artist_id


class NotPending(WorkflowError):
    """Grant was already resolved."""

    code = "not_pending"
    status_code = 409

    def __init__(self, grant_id: UUID, status: str):
        super().__init__(f"Grant {grant_id} is {status}, not pending")
        self.grant_id = grant_id
        self.status = status


class ArtistNotFound(WorkflowError):
    """Handle does not resolve to an active artist."""

    code = "artist_not_found"
    status_code = 404

    def __init__(self, handle: str):
        super().__init__(f"No artist found for '{handle}'")
        self.handle = handle


class GrantDecisionDenied(WorkflowError):
    code = "grant_decision_denied"
    status_code = 403

    def __init__(self, grant_id: UUID):
        super().__init__(f"Not allowed to decide on grant {grant_id}")
        self.grant_id = grant_id


class EntityNotFound(WorkflowError):
    code = "not_found"
    status_code = 404
    entity_type = "entity"

    def __init__(self, entity_id: UUID):
        super().__init__(f"{self.entity_type.capitalize()} {entity_id} not found")
        self.entity_id = entity_id


class ProjectNotFound(EntityNotFound):
    code = "project_not_found"
    entity_type = "project"


class TaskNotFound(EntityNotFound):
    code = "task_not_found"
    entity_type = "task"


class GrantNotFound(EntityNotFound):
    code = "grant_not_found"
    entity_type = "grant"


class GrantUpdateDenied(WorkflowError):
    code = "grant_update_denied"
    status_code = 403

    def __init__(self, grant_id: UUID):
        super().__init__(f"Not allowed to amend grant {grant_id}")
        self.grant_id = grant_id


class InvalidArgument(WorkflowError):
    """A value outside its enumeration, passed by a caller that bypassed schema validation."""

    code = "invalid_argument"
    status_code = 422

    def __init__(self, field: str, value: object):
        super().__init__(f"Invalid {field}: {value!r}")
        self.field = field
        self.value = value
