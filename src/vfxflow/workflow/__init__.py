"""Project lifecycle rules: status catalog and transition validation."""

from src.vfxflow.workflow.catalog import (
    DEFAULT_STATUS_COLOR,
    STATUSES,
    TRANSITIONS,
    StatusDefinition,
    Transition,
    get_available_transitions,
    get_transition,
    is_known_status,
    is_terminal,
    list_statuses,
    outgoing_transitions,
    status_color,
)
from src.vfxflow.workflow.validator import validate_transition

__all__ = [
    "DEFAULT_STATUS_COLOR",
    "STATUSES",
    "TRANSITIONS",
    "StatusDefinition",
    "Transition",
    "get_available_transitions",
    "get_transition",
    "is_known_status",
    "is_terminal",
    "list_statuses",
    "outgoing_transitions",
    "status_color",
    "validate_transition",
]
