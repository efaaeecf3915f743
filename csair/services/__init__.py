"""Services layer - Application orchestration.

Available services:
- QueryService: Descriptive queries over the CSAir network
"""

from .query_service import QueryService, estimated_flight_time

__all__ = ["QueryService", "estimated_flight_time"]
