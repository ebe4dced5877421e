"""Notification utilities - email."""

from src.vfxflow.core.notifications.email import (
    send_grant_decision_email,
    send_status_change_email,
    send_task_shared_email,
)

__all__ = [
    "send_grant_decision_email",
    "send_status_change_email",
    "send_task_shared_email",
]
