"""
URL configuration for the hoslog app.
"""

from django.urls import path
from .views import (
    # Logs
    TimelineView,
    ComplianceView,
    LogSheetView,

    # Schedule
    ScheduleView,
)

app_name = 'hoslog'

urlpatterns = [
    # POST /api/logs/timeline/
    path('logs/timeline/', TimelineView.as_view(), name='timeline'),

    # POST /api/logs/compliance/
    path('logs/compliance/', ComplianceView.as_view(), name='compliance'),

    # POST /api/logs/render/
    path('logs/render/', LogSheetView.as_view(), name='render'),

    # POST /api/schedule/
    path('schedule/', ScheduleView.as_view(), name='schedule'),
]
