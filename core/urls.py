"""
URL configuration for the HOS Logbook project.

API URL structure:
- /api/ - API root
- /api/health/ - Health check
- /api/logs/ - Timelines, compliance checks and log sheets
- /api/schedule/ - HOS schedule generation
- /api/config/ - HOS configuration
"""

from django.urls import path, include
from hoslog.views import (
    HealthCheckView,
    api_root,
    # HOS Config
    HOSConfigView,
)

urlpatterns = [
    # API root - Documentation
    path('api/', api_root, name='api_root'),

    # Health check endpoint
    path('api/health/', HealthCheckView.as_view(), name='health_check'),

    # ==========================================================================
    # Logs & Schedule - Uses hoslog app urls
    # ==========================================================================
    path('api/', include('hoslog.urls', namespace='hoslog')),

    # ==========================================================================
    # HOS Configuration Service
    # ==========================================================================
    path('api/config/hos', HOSConfigView.as_view(), name='config_hos'),
]
