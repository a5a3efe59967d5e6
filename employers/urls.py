"""
URL configuration for the employers app.

API namespace: v1:employers:view-name
"""

from django.urls import path

from . import views

app_name = 'employers'

urlpatterns = [
    path('profile/', views.EmployerProfileView.as_view(), name='profile'),
    path('snapshots/', views.SnapshotListView.as_view(), name='snapshot-list'),
    path('snapshots/<uuid:snapshot_id>/', views.SnapshotDetailView.as_view(), name='snapshot-detail'),
    path('review/', views.ReviewQueueView.as_view(), name='review-queue'),
    path('review/<uuid:employer_id>/', views.ReviewDecisionView.as_view(), name='review-decision'),
]
