"""
URL configuration for the SeaVitae project.

API v1 endpoints are versioned under /api/v1/ and namespaced
v1:<app>:<view-name>.
"""

import time

from django.conf import settings
from django.contrib import admin
from django.db import connection
from django.http import JsonResponse
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView


# ==================== Health Check Endpoint ====================

def health_check(request):
    """
    Health check endpoint for load balancers and monitoring.
    """
    health_status = {
        'status': 'healthy',
        'timestamp': time.time(),
        'version': getattr(settings, 'APP_VERSION', '1.0.0'),
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        health_status['database'] = 'connected'
    except Exception as e:
        health_status['database'] = 'error'
        health_status['status'] = 'degraded'
        health_status['database_error'] = str(e)

    status_code = 200 if health_status['status'] == 'healthy' else 503
    return JsonResponse(health_status, status=status_code)


# ==================== API v1 ====================

api_v1_patterns = [
    path('jobseekers/', include('jobseekers.urls')),
    path('employers/', include('employers.urls')),
    path('interviews/', include('interviews.urls')),
    path('messages/', include('messages_sys.urls')),
    path('reports/', include('reports.urls')),
]


# ==================== URL Patterns ====================

urlpatterns = [
    path('health/', health_check, name='health_check'),

    path('api/v1/', include((api_v1_patterns, 'v1'), namespace='v1')),

    # API Schema and docs
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    path('admin/', admin.site.urls),
]
