"""
Celery Tasks for Notification System.

Renders a notification kind's template and sends it by email. Tasks run on
the ``notifications`` queue and retry with backoff on transport failures.
"""

import logging
from typing import Any, Dict

from celery import shared_task
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail

from .templates import render

logger = logging.getLogger(__name__)
User = get_user_model()


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_backoff_max=600,
    queue='notifications'
)
def send_notification_email(self, kind: str, recipient_id: int, payload: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Send one notification email.

    Args:
        kind: Notification kind (see NotificationKind)
        recipient_id: Primary key of the recipient account
        payload: Template context

    Returns:
        Dict describing the outcome
    """
    try:
        recipient = User.objects.get(pk=recipient_id)
    except User.DoesNotExist:
        logger.error("User %s not found for notification %s", recipient_id, kind)
        return {'success': False, 'error': f'User {recipient_id} not found'}

    if not recipient.email:
        logger.warning("User %s has no email address; %s not sent", recipient_id, kind)
        return {'success': False, 'error': 'Recipient has no email address'}

    context = {
        'recipient_name': recipient.get_full_name() or recipient.username,
        'site_url': getattr(settings, 'SITE_URL', ''),
        **(payload or {}),
    }
    subject, body = render(kind, context)

    send_mail(
        subject=subject,
        message=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[recipient.email],
        fail_silently=False,
    )

    logger.info("Notification sent: kind=%s recipient=%s", kind, recipient_id)
    return {'success': True, 'kind': kind, 'recipient_id': recipient_id}
