"""
Notification Dispatcher.

``notify`` is called from inside service transactions. The email task is
only enqueued once the transaction commits, so a rolled-back transition
never notifies anyone, and any failure to enqueue is logged and dropped.
"""

import logging
from typing import Any, Dict, Optional

from django.db import transaction

from .templates import NotificationKind, is_known_kind

logger = logging.getLogger(__name__)


def _enqueue(kind: str, recipient_id: int, payload: Dict[str, Any]) -> None:
    from .tasks import send_notification_email

    try:
        send_notification_email.delay(kind, recipient_id, payload)
    except Exception:
        logger.exception("Failed to enqueue notification: kind=%s recipient=%s", kind, recipient_id)


def notify(kind: str, recipient_id: int, payload: Optional[Dict[str, Any]] = None) -> None:
    """
    Schedule a best-effort notification.

    Args:
        kind: One of NotificationKind
        recipient_id: Primary key of the recipient account
        payload: JSON-serialisable template context

    Raises:
        ValueError: for an unknown kind
    """
    if not is_known_kind(kind):
        raise ValueError(f"Unknown notification kind: {kind!r}")

    kind = NotificationKind(kind).value
    payload = dict(payload or {})
    transaction.on_commit(lambda: _enqueue(kind, recipient_id, payload))
