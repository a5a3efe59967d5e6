"""
Message Services.

- MessageService.send: a verified employer opens a thread with a jobseeker
  whose CV is visible
- MessageService.reply: either participant answers inside a thread
- inbox, thread, conversation, read markers and sender-side delete
"""

import logging
from typing import Optional

from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.conf import get_setting
from core.pagination import paginate
from core.results import ErrorCode, ServiceResult
from employers.verification import VerificationGate
from jobseekers.models import JobSeekerProfile
from notifications.dispatcher import notify

from .models import Message

logger = logging.getLogger(__name__)

BOXES = ('received', 'sent')


def display_name(user) -> str:
    """Employer display name, jobseeker full name, else the account name."""
    employer = getattr(user, 'employer_profile', None)
    if employer is not None:
        return employer.display_name
    profile = getattr(user, 'jobseeker_profile', None)
    if profile is not None:
        return profile.full_name
    return user.get_full_name() or user.email


def _clean_content(content) -> tuple:
    """Return ``(content, None)`` or ``(None, failed ServiceResult)``."""
    content = (content or '').strip()
    limit = get_setting('MAX_MESSAGE_LENGTH')
    if not content:
        return None, ServiceResult.fail(ErrorCode.VALIDATION, errors={'content': ['Message cannot be empty.']})
    if len(content) > limit:
        return None, ServiceResult.fail(
            ErrorCode.VALIDATION,
            errors={'content': [f'Message must be at most {limit} characters.']},
        )
    return content, None


def _message_not_found() -> ServiceResult:
    return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Message not found.'))


def _with_names(queryset):
    return queryset.select_related(
        'sender__employer_profile', 'sender__jobseeker_profile',
        'recipient__employer_profile', 'recipient__jobseeker_profile',
    )


class MessageService:
    """
    Messaging between employers and jobseekers.

    Only employers may start a thread, and only when verified and the
    recipient's CV is visible. Employers stay behind the verification gate
    for replies too; jobseekers may always reply inside a thread.
    """

    @staticmethod
    @transaction.atomic
    def send(user, jobseeker_profile_id, content: str) -> ServiceResult:
        gate = VerificationGate.check(user)
        if not gate:
            return gate
        employer = gate.data

        content, invalid = _clean_content(content)
        if invalid:
            return invalid

        profile = JobSeekerProfile.objects.filter(pk=jobseeker_profile_id).first()
        if profile is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, _('Jobseeker not found.'))
        if not profile.is_visible:
            return ServiceResult.fail(ErrorCode.FORBIDDEN, _('This CV is not currently visible.'))

        message = Message.objects.create(sender=user, recipient_id=profile.user_id, content=content)

        notify('new_message', profile.user_id, {
            'sender_name': employer.display_name,
            'preview': message.preview,
        })

        logger.info("Message sent: message=%s employer=%s jobseeker=%s", message.pk, employer.pk, profile.pk)
        return ServiceResult.ok(message, _('Message sent.'))

    @staticmethod
    @transaction.atomic
    def reply(user, message_id, content: str) -> ServiceResult:
        """
        Reply inside the thread of ``message_id``.

        The reply goes to the other participant and is attached to the
        first message of the thread. Callers outside the thread get
        ``not_found``.
        """
        message = Message.objects.filter(pk=message_id).first()
        if message is None or not message.is_participant(user):
            return _message_not_found()

        if getattr(user, 'role', None) == 'employer':
            gate = VerificationGate.check(user)
            if not gate:
                return gate

        content, invalid = _clean_content(content)
        if invalid:
            return invalid

        recipient_id = message.recipient_id if message.sender_id == user.pk else message.sender_id
        reply = Message.objects.create(
            sender=user,
            recipient_id=recipient_id,
            parent_id=message.thread_root_id,
            content=content,
        )

        notify('new_message', recipient_id, {
            'sender_name': display_name(user),
            'preview': reply.preview,
        })

        logger.info("Reply sent: message=%s thread=%s sender=%s", reply.pk, reply.parent_id, user.pk)
        return ServiceResult.ok(reply, _('Reply sent.'))

    @staticmethod
    def inbox(user, box: Optional[str] = None, page=None, limit=None) -> ServiceResult:
        """
        Received or sent messages, newest first.

        ``box`` defaults to ``received`` for jobseekers and ``sent`` for
        employers. Received listings carry the ``unread`` count.
        """
        role = getattr(user, 'role', None)
        if role not in ('jobseeker', 'employer'):
            return ServiceResult.fail(ErrorCode.FORBIDDEN)
        if box is None:
            box = 'received' if role == 'jobseeker' else 'sent'
        if box not in BOXES:
            return ServiceResult.fail(
                ErrorCode.VALIDATION, errors={'box': [f'Box must be one of: {", ".join(BOXES)}.']},
            )

        if box == 'received':
            queryset = Message.objects.filter(recipient=user)
        else:
            queryset = Message.objects.filter(sender=user)

        data = paginate(_with_names(queryset).order_by('-created_at'), page, limit)
        data['box'] = box
        if box == 'received':
            data['unread'] = Message.objects.filter(recipient=user, is_read=False).count()
        return ServiceResult.ok(data)

    @staticmethod
    def thread(user, message_id) -> ServiceResult:
        """First message of the thread and its replies, oldest first."""
        message = Message.objects.filter(pk=message_id).first()
        if message is None or not message.is_participant(user):
            return _message_not_found()

        root_id = message.thread_root_id
        messages = list(
            _with_names(Message.objects.filter(Q(pk=root_id) | Q(parent_id=root_id)))
            .order_by('created_at', 'id')
        )
        return ServiceResult.ok(messages)

    @staticmethod
    def conversation(user, other_user_id, page=None, limit=None) -> ServiceResult:
        """Every message exchanged with one other account, newest first."""
        queryset = Message.objects.filter(
            Q(sender=user, recipient_id=other_user_id)
            | Q(sender_id=other_user_id, recipient=user)
        )
        return ServiceResult.ok(paginate(_with_names(queryset).order_by('-created_at'), page, limit))

    @staticmethod
    def unread_count(user) -> int:
        return Message.objects.filter(recipient=user, is_read=False).count()

    @staticmethod
    def mark_read(user, message_id) -> ServiceResult:
        """Recipient only. Other callers get ``not_found``."""
        message = Message.objects.filter(pk=message_id, recipient=user).first()
        if message is None:
            return _message_not_found()
        if not message.is_read:
            now = timezone.now()
            Message.objects.filter(pk=message.pk, is_read=False).update(is_read=True, read_at=now)
            message.is_read = True
            message.read_at = now
        return ServiceResult.ok(message)

    @staticmethod
    def mark_all_read(user) -> ServiceResult:
        updated = (
            Message.objects
            .filter(recipient=user, is_read=False)
            .update(is_read=True, read_at=timezone.now())
        )
        logger.info("Messages marked read: user=%s count=%s", user.pk, updated)
        return ServiceResult.ok({'updated': updated})

    @staticmethod
    @transaction.atomic
    def delete(user, message_id) -> ServiceResult:
        """
        Delete one of the caller's sent messages.

        Other callers get ``not_found``. The first message of a thread that
        already has replies cannot be deleted (``conflict``).
        """
        message = Message.objects.select_for_update().filter(pk=message_id, sender=user).first()
        if message is None:
            return _message_not_found()
        if message.replies.exists():
            return ServiceResult.fail(ErrorCode.CONFLICT, _('A message with replies cannot be deleted.'))

        message.delete()
        logger.info("Message deleted: message=%s sender=%s", message_id, user.pk)
        return ServiceResult.ok(message=_('Message deleted.'))
