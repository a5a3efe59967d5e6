"""
URL configuration for the messages app.

API namespace: v1:messages:view-name
"""

from django.urls import path

from . import views

app_name = 'messages'

urlpatterns = [
    path('', views.MessageListView.as_view(), name='list'),
    path('read-all/', views.MarkAllReadView.as_view(), name='read-all'),
    path('conversation/<int:user_id>/', views.ConversationView.as_view(), name='conversation'),
    path('<uuid:message_id>/', views.MessageDetailView.as_view(), name='detail'),
    path('<uuid:message_id>/reply/', views.ReplyView.as_view(), name='reply'),
    path('<uuid:message_id>/thread/', views.ThreadView.as_view(), name='thread'),
    path('<uuid:message_id>/read/', views.MarkReadView.as_view(), name='mark-read'),
]
