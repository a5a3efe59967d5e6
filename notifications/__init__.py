"""
Notifications App for SeaVitae.

Best-effort email notifications for workflow events. Services call
``notifications.dispatcher.notify`` inside their transaction; delivery is
handed to Celery after commit and never affects the operation's outcome.

Usage:
    from notifications.dispatcher import notify

    notify('interview_requested', jobseeker.user_id, {
        'employer_name': employer.display_name,
        'interview_type': 'video',
    })
"""
