"""
Route Summary Service.

Turns the raw output of an external routing service (distance in meters,
duration in seconds) into the summary the HOS planner works from, and
derives the trip statistics shown next to the map.

The routing call itself happens outside this package.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict

logger = logging.getLogger(__name__)

METERS_TO_MILES = 0.000621371
SECONDS_TO_HOURS = 1 / 3600

# Planning estimates, not quotes
DEFAULT_FUEL_COST_PER_MILE = 0.15
DEFAULT_TOLL_COST_PER_MILE = 0.05
DEFAULT_MAX_DRIVING_HOURS = 11.0


@dataclass
class RouteSummary:
    """Total distance and driving time of a route."""
    total_distance_miles: float
    total_duration_hours: float

    @classmethod
    def from_route(cls, distance_meters: float, duration_seconds: float) -> 'RouteSummary':
        """Build a summary from routing-service units (meters, seconds)."""
        return cls(
            total_distance_miles=distance_meters * METERS_TO_MILES,
            total_duration_hours=duration_seconds * SECONDS_TO_HOURS
        )

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class RouteStatistics:
    """Derived figures for the route summary panel."""
    total_distance_miles: float
    total_duration_hours: float
    average_speed_mph: float
    estimated_fuel_cost: float
    estimated_tolls: float
    driving_segments: int

    def to_dict(self) -> Dict:
        return asdict(self)


def calculate_route_statistics(
    route: RouteSummary,
    fuel_cost_per_mile: float = DEFAULT_FUEL_COST_PER_MILE,
    toll_cost_per_mile: float = DEFAULT_TOLL_COST_PER_MILE,
    max_driving_hours: float = DEFAULT_MAX_DRIVING_HOURS
) -> RouteStatistics:
    """
    Calculate statistics for a route.

    Args:
        route: Route distance and duration
        fuel_cost_per_mile: Fuel cost estimate in dollars per mile
        toll_cost_per_mile: Toll estimate in dollars per mile
        max_driving_hours: Driving hours per segment (daily driving limit)

    Returns:
        RouteStatistics for display
    """
    distance = route.total_distance_miles
    duration = route.total_duration_hours

    average_speed = distance / duration if duration > 0 else 0.0
    segments = math.ceil(duration / max_driving_hours) if duration > 0 else 0

    logger.debug(
        f"Route statistics: {distance:.1f} miles, {duration:.1f}h, "
        f"{average_speed:.1f} mph, {segments} driving segments"
    )

    return RouteStatistics(
        total_distance_miles=distance,
        total_duration_hours=duration,
        average_speed_mph=average_speed,
        estimated_fuel_cost=distance * fuel_cost_per_mile,
        estimated_tolls=distance * toll_cost_per_mile,
        driving_segments=segments
    )
