from django.apps import AppConfig


class MessagesSysConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'messages_sys'
    verbose_name = 'Messages'
