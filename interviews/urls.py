"""
URL configuration for the interviews app.

API namespace: v1:interviews:view-name
"""

from django.urls import path

from . import views

app_name = 'interviews'

urlpatterns = [
    path('', views.InterviewListView.as_view(), name='list'),
    path('<uuid:request_id>/', views.InterviewDetailView.as_view(), name='detail'),
    path('<uuid:request_id>/respond/', views.RespondView.as_view(), name='respond'),
    path('<uuid:request_id>/cancel/', views.CancelView.as_view(), name='cancel'),
    path('<uuid:request_id>/complete/', views.CompleteView.as_view(), name='complete'),
]
