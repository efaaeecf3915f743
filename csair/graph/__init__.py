"""In-memory model of the CSAir network.

This subpackage holds the city directory (names, codes and metadata)
and the route network (one-hop connections between codes).
"""

from .connections import ConnectionSet, canonical_connection
from .directory import CityDirectory
from .route_network import INFINITY, NOT_FOUND, RouteNetwork

__all__ = [
    "CityDirectory",
    "ConnectionSet",
    "INFINITY",
    "NOT_FOUND",
    "RouteNetwork",
    "canonical_connection",
]
