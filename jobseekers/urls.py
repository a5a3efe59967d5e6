"""
URL configuration for the jobseekers app.

API namespace: v1:jobseekers:view-name
"""

from django.urls import path

from . import views

app_name = 'jobseekers'

urlpatterns = [
    path('profile/', views.ProfileView.as_view(), name='profile'),
    path('profile/visibility/', views.VisibilityView.as_view(), name='visibility'),
    path('profile/saved-by/', views.SavedByView.as_view(), name='saved-by'),
    path('cv/sections/', views.SectionsView.as_view(), name='sections'),
    path('cv/sections/<str:section_type>/', views.SectionView.as_view(), name='section'),
    path('search/', views.SearchView.as_view(), name='search'),
    path('<uuid:profile_id>/cv/', views.VisibleCVView.as_view(), name='visible-cv'),
]
