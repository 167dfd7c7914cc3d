"""
Services package for the HOS logbook.

Contains the timeline and compliance logic, separated from views.
"""

from .hos_service import HOSService, HOSConfig
from .eld_service import ELDLogService
from .route_service import RouteSummary

__all__ = ['HOSService', 'HOSConfig', 'ELDLogService', 'RouteSummary']
