"""
URL configuration for the reports app.

API namespace: v1:reports:view-name
"""

from django.urls import path

from . import views

app_name = 'reports'

urlpatterns = [
    path('', views.ReportListView.as_view(), name='list'),
    path('review/', views.ReportQueueView.as_view(), name='review-queue'),
    path('review/<uuid:report_id>/', views.ReportResolveView.as_view(), name='resolve'),
]
