"""
Notification kinds and their default email templates.

Templates use Django template syntax and are rendered against the payload
passed to ``notify``. Missing payload keys render as empty strings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from django.template import Context, Engine


class NotificationKind(str, Enum):
    """Enumeration of all notification kinds."""

    # Interviews
    INTERVIEW_REQUESTED = 'interview_requested'
    INTERVIEW_ACCEPTED = 'interview_accepted'
    INTERVIEW_DECLINED = 'interview_declined'
    INTERVIEW_CANCELLED = 'interview_cancelled'

    # Employer activity
    CV_SAVED = 'cv_saved'
    NEW_MESSAGE = 'new_message'

    # Verification
    VERIFICATION_APPROVED = 'verification_approved'
    VERIFICATION_REJECTED = 'verification_rejected'

    @classmethod
    def values(cls):
        return [kind.value for kind in cls]


@dataclass(frozen=True)
class NotificationTemplate:
    subject: str
    body: str


TEMPLATES: Dict[NotificationKind, NotificationTemplate] = {
    NotificationKind.INTERVIEW_REQUESTED: NotificationTemplate(
        subject='{{ employer_name }} would like to interview you',
        body=(
            'Hello {{ recipient_name }},\n\n'
            '{{ employer_name }} has requested a {{ interview_type }} interview'
            '{% if proposed_at %} on {{ proposed_at }}{% endif %}.\n'
            '{% if message %}\nTheir message:\n{{ message }}\n{% endif %}\n'
            'Review and respond to the request: {{ site_url }}/interviews/\n'
        ),
    ),
    NotificationKind.INTERVIEW_ACCEPTED: NotificationTemplate(
        subject='{{ jobseeker_name }} accepted your interview request',
        body=(
            'Hello {{ recipient_name }},\n\n'
            '{{ jobseeker_name }} accepted your interview request. '
            'Their contact details are now available on the request.\n'
            '{% if message %}\nTheir message:\n{{ message }}\n{% endif %}\n'
            '{{ site_url }}/interviews/\n'
        ),
    ),
    NotificationKind.INTERVIEW_DECLINED: NotificationTemplate(
        subject='{{ jobseeker_name }} declined your interview request',
        body=(
            'Hello {{ recipient_name }},\n\n'
            '{{ jobseeker_name }} declined your interview request.\n'
            '{% if message %}\nTheir message:\n{{ message }}\n{% endif %}'
        ),
    ),
    NotificationKind.INTERVIEW_CANCELLED: NotificationTemplate(
        subject='Interview request from {{ employer_name }} was cancelled',
        body=(
            'Hello {{ recipient_name }},\n\n'
            '{{ employer_name }} cancelled their interview request.\n'
        ),
    ),
    NotificationKind.CV_SAVED: NotificationTemplate(
        subject='An employer saved your CV',
        body=(
            'Hello {{ recipient_name }},\n\n'
            '{{ employer_name }} saved a copy of your CV (version {{ version }}).\n'
        ),
    ),
    NotificationKind.NEW_MESSAGE: NotificationTemplate(
        subject='New message from {{ sender_name }}',
        body=(
            'Hello {{ recipient_name }},\n\n'
            'You have a new message from {{ sender_name }}:\n\n'
            '{{ preview }}\n\n'
            'Read it on SeaVitae: {{ site_url }}/messages/\n'
        ),
    ),
    NotificationKind.VERIFICATION_APPROVED: NotificationTemplate(
        subject='Your employer account has been verified',
        body=(
            'Hello {{ recipient_name }},\n\n'
            'Your employer account has been verified. You can now search CVs, '
            'save snapshots and request interviews.\n'
        ),
    ),
    NotificationKind.VERIFICATION_REJECTED: NotificationTemplate(
        subject='Your employer verification was not approved',
        body=(
            'Hello {{ recipient_name }},\n\n'
            'We could not verify your employer account.\n\n'
            'Reason: {{ notes }}\n\n'
            'Update your details to resubmit: {{ site_url }}/employer/profile/\n'
        ),
    ),
}

_engine = Engine(autoescape=False)


def is_known_kind(kind: Any) -> bool:
    return kind in NotificationKind.values()


def render(kind: str, context: Dict[str, Any]) -> Tuple[str, str]:
    """Render ``(subject, body)`` for a notification kind."""
    template = TEMPLATES[NotificationKind(kind)]
    ctx = Context(context)
    subject = _engine.from_string(template.subject).render(ctx)
    body = _engine.from_string(template.body).render(ctx)
    return ' '.join(subject.split()), body
