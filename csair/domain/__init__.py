"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    CSAirError,
    LoadError,
    NotFoundError,
    RenderingError,
    ValidationError,
)
from .models import (
    CityInfo,
    Coordinate,
    Coordinates,
    Edge,
    Metro,
    NetworkRecords,
    Region,
    format_number,
    normalize_code,
)

__all__ = [
    # Models
    "CityInfo",
    "Coordinate",
    "Coordinates",
    "Edge",
    "Metro",
    "NetworkRecords",
    "Region",
    "format_number",
    "normalize_code",
    # Errors
    "CSAirError",
    "LoadError",
    "NotFoundError",
    "RenderingError",
    "ValidationError",
]
