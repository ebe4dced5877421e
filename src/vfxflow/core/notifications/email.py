"""Workflow notification emails sent through the Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.vfxflow.core.config import get_settings
from src.vfxflow.core.logging import get_logger

logger = get_logger(__name__)

_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #1f2937; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_BUTTON_STYLE = (
    "background-color: #111827; color: white; padding: 10px 20px; "
    "text-decoration: none; border-radius: 4px; display: inline-block;"
)
_BADGE_STYLE = "color: white; padding: 2px 8px; border-radius: 4px; font-size: 13px;"


def _deliver(to: str, subject: str, body_html: str, email_type: str) -> bool:
    """Send one email, waiting at most ``email_send_timeout_seconds``.

    Returns:
        True if the email was sent (or skipped because no API key is set),
        False on error. Never raises.
    """
    settings = get_settings()

    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set - email not sent", to=to, email_type=email_type)
        return True

    resend.api_key = settings.resend_api_key

    def _send() -> None:
        resend.Emails.send(
            {
                "from": settings.email_from,
                "to": [to],
                "subject": subject,
                "html": body_html,
            }
        )

    try:
        future = _email_executor.submit(_send)
        future.result(timeout=settings.email_send_timeout_seconds)
        logger.info("Notification email sent", to=to, email_type=email_type)
        return True
    except FuturesTimeoutError:
        logger.error(
            "Email send timed out",
            to=to,
            email_type=email_type,
            timeout=settings.email_send_timeout_seconds,
        )
        return False
    except Exception as e:
        logger.error("Failed to send notification email", to=to, email_type=email_type, error=str(e))
        return False


def _page(heading: str, paragraphs: list[str], link_url: str, link_label: str) -> str:
    body = "\n".join(f"    <p>{p}</p>" for p in paragraphs)
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    <h2>{html.escape(heading)}</h2>
{body}
    <p style="margin: 28px 0;">
        <a href="{link_url}" style="{_BUTTON_STYLE}">{html.escape(link_label)}</a>
    </p>
</body>
</html>"""


def _badge(status: str, color: str) -> str:
    label = html.escape(status.replace("_", " "))
    return f'<span style="{_BADGE_STYLE} background-color: {color};">{label}</span>'


def send_status_change_email(
    to: str,
    recipient_name: str,
    project_title: str,
    project_id: str,
    from_status: str,
    to_status: str,
    from_color: str,
    to_color: str,
    reason: str | None = None,
) -> bool:
    """Tell a project watcher that the project moved to a new status."""
    settings = get_settings()
    paragraphs = [
        f"Hi {html.escape(recipient_name)},",
        f"<strong>{html.escape(project_title)}</strong> moved from "
        f"{_badge(from_status, from_color)} to {_badge(to_status, to_color)}.",
    ]
    if reason:
        paragraphs.append(f"Reason: {html.escape(reason)}")
    return _deliver(
        to=to,
        subject=f"{project_title}: now {to_status.replace('_', ' ')}",
        body_html=_page(
            "Project status changed",
            paragraphs,
            f"{settings.app_url}/projects/{project_id}",
            "Open project",
        ),
        email_type="status_change",
    )


def send_task_shared_email(
    to: str,
    artist_name: str,
    studio_name: str,
    task_name: str,
    access_level: str,
    grant_id: str,
) -> bool:
    """Ask an artist to accept or decline a task shared with them."""
    settings = get_settings()
    return _deliver(
        to=to,
        subject=f"{studio_name} shared a task with you",
        body_html=_page(
            "A task was shared with you",
            [
                f"Hi {html.escape(artist_name)},",
                f"{html.escape(studio_name)} shared <strong>{html.escape(task_name)}</strong> "
                f"with you ({html.escape(access_level)} access).",
                "Accept or decline the request to continue.",
            ],
            f"{settings.app_url}/shares/{grant_id}",
            "Review request",
        ),
        email_type="task_shared",
    )


def send_grant_decision_email(
    to: str,
    studio_name: str,
    artist_name: str,
    task_name: str,
    decision: str,
) -> bool:
    """Tell the studio that issued a grant how the artist decided."""
    settings = get_settings()
    verb = "accepted" if decision == "approved" else "declined"
    return _deliver(
        to=to,
        subject=f"{artist_name} {verb} {task_name}",
        body_html=_page(
            f"Share request {verb}",
            [
                f"Hi {html.escape(studio_name)},",
                f"{html.escape(artist_name)} {verb} the share request for "
                f"<strong>{html.escape(task_name)}</strong>.",
            ],
            f"{settings.app_url}/shares",
            "View shares",
        ),
        email_type="grant_decision",
    )
