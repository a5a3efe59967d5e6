"""
Celery configuration for the SeaVitae project.

Celery is only used as the fire-and-forget transport for notifications;
no state transition of the core ever waits on a task.
"""

import os

from celery import Celery
from kombu import Exchange, Queue

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'seavitae.settings')

app = Celery('seavitae')

# All celery-related configuration keys use the `CELERY_` prefix.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks()


# ==================== QUEUE CONFIGURATION ====================

default_exchange = Exchange('default', type='direct')
notifications_exchange = Exchange('notifications', type='direct')

app.conf.task_queues = (
    Queue('default', default_exchange, routing_key='default'),
    Queue('notifications', notifications_exchange, routing_key='notifications'),
)

app.conf.task_default_queue = 'default'
app.conf.task_default_exchange = 'default'
app.conf.task_default_routing_key = 'default'


# ==================== TASK ROUTING ====================

app.conf.task_routes = {
    'notifications.tasks.*': {'queue': 'notifications', 'routing_key': 'notifications'},
}


# ==================== RATE LIMITING ====================

app.conf.task_annotations = {
    'notifications.tasks.send_notification_email': {'rate_limit': '100/m'},
}


# ==================== RETRY CONFIGURATION ====================

app.conf.task_default_retry_delay = 60
app.conf.task_max_retries = 3


# ==================== SERIALIZATION ====================

app.conf.task_serializer = 'json'
app.conf.result_serializer = 'json'
app.conf.accept_content = ['json']
app.conf.timezone = 'UTC'
app.conf.enable_utc = True
