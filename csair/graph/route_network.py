"""Undirected weighted route network keyed by city code.

The network is an adjacency map ``code -> {neighbor code -> miles}``.
Each undirected route is also kept once, in insertion order, so that
aggregate queries count every route a single time.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..domain.errors import NotFoundError, ValidationError
from ..domain.models import Edge, Number, format_number, normalize_code
from .connections import ConnectionSet

# Returned by distance_between when a code is not in the network.
NOT_FOUND = -1

INFINITY = math.inf


def _pair_key(first: str, second: str) -> Tuple[str, str]:
    return (first, second) if first <= second else (second, first)


class RouteNetwork:
    """Route graph built once from the route records, read-only after."""

    def __init__(self) -> None:
        self._adjacency: Dict[str, Dict[str, float]] = {}
        self._edges: Dict[Tuple[str, str], Edge] = {}
        self._connections = ConnectionSet()
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "RouteNetwork":
        """Build a network from raw ``routes`` entries.

        Each entry looks like ``{"ports": ["SCL", "LIM"], "distance": 2453}``.

        Raises:
            ValidationError: If any record is malformed.
        """
        network = cls()
        for record in records:
            first, second, distance = cls._parse_record(record)
            network.add_connection(first, second, distance)
        network._logger.info(
            "Route network built",
            extra={"cities": len(network), "routes": network.edge_count()},
        )
        return network

    @staticmethod
    def _parse_record(record: Mapping[str, Any]) -> Tuple[str, str, Number]:
        if not isinstance(record, Mapping):
            raise ValidationError("Route record must be an object", record=record)
        ports = record.get("ports")
        if not isinstance(ports, (list, tuple)) or len(ports) != 2:
            raise ValidationError("Route record needs exactly two ports", record=record)
        if "distance" not in record:
            raise ValidationError("Route record is missing its distance", record=record)
        return normalize_code(ports[0]), normalize_code(ports[1]), record["distance"]

    def add_connection(self, first: str, second: str, distance: Number) -> None:
        """Add an undirected route, creating either city if needed.

        A repeated pair keeps its original position and orientation but
        takes the new distance.

        Raises:
            ValidationError: On a self-loop or a non-positive distance.
        """
        if first == second:
            raise ValidationError(f"City {first} cannot connect to itself")
        if isinstance(distance, bool) or not isinstance(distance, (int, float)):
            raise ValidationError(
                f"Distance between {first} and {second} must be numeric: {distance!r}"
            )
        if not distance > 0:
            raise ValidationError(
                f"Distance between {first} and {second} must be positive: {distance}"
            )

        miles = float(distance)
        self._adjacency.setdefault(first, {})
        self._adjacency.setdefault(second, {})
        self._adjacency[first][second] = miles
        self._adjacency[second][first] = miles

        key = _pair_key(first, second)
        existing = self._edges.get(key)
        if existing is not None:
            self._logger.debug(
                "Route distance overwritten",
                extra={"ports": key, "old": existing.distance, "new": miles},
            )
            self._edges[key] = Edge(existing.first, existing.second, miles)
        else:
            self._edges[key] = Edge(first, second, miles)
        self._connections.add(first, second)

    def distance_between(self, first: str, second: str) -> float:
        """Return the direct distance between two cities.

        Returns:
            ``NOT_FOUND`` (-1) if either city is absent, 0 for the same
            city, ``math.inf`` when no route joins them, otherwise the
            route distance in miles.
        """
        if first not in self._adjacency or second not in self._adjacency:
            return NOT_FOUND
        if first == second:
            return 0
        return self._adjacency[first].get(second, INFINITY)

    def find_distance(self, first: str, second: str) -> Optional[float]:
        """Like distance_between, but None when either city is absent."""
        distance = self.distance_between(first, second)
        if distance == NOT_FOUND:
            return None
        return distance

    def neighbors(self, code: str) -> Dict[str, float]:
        """Return ``{neighbor code: miles}`` in route insertion order.

        Raises:
            NotFoundError: If the code is not in the network.
        """
        try:
            return dict(self._adjacency[code])
        except KeyError:
            raise NotFoundError(f"City code not in network: {code}", key=code)

    def degree(self, code: str) -> int:
        return len(self.neighbors(code))

    def edges(self) -> Tuple[Edge, ...]:
        """Return every undirected route once, in insertion order."""
        return tuple(self._edges.values())

    def _require_edges(self) -> Tuple[Edge, ...]:
        edges = self.edges()
        if not edges:
            raise NotFoundError("The network has no routes")
        return edges

    def longest_edge(self) -> Edge:
        """Return the longest route; the earliest inserted wins ties.

        Raises:
            NotFoundError: If the network has no routes.
        """
        longest, *rest = self._require_edges()
        for edge in rest:
            if edge.distance > longest.distance:
                longest = edge
        return longest

    def shortest_edge(self) -> Edge:
        """Return the shortest route; the earliest inserted wins ties.

        Raises:
            NotFoundError: If the network has no routes.
        """
        shortest, *rest = self._require_edges()
        for edge in rest:
            if edge.distance < shortest.distance:
                shortest = edge
        return shortest

    def edge_count(self) -> int:
        """Number of unique undirected routes."""
        return len(self._edges)

    def total_distance(self) -> float:
        """Sum of distances over the unique undirected routes."""
        return sum(edge.distance for edge in self._edges.values())

    def max_degree(self) -> int:
        """Largest neighbor count of any city, 0 for an empty network."""
        return max((len(n) for n in self._adjacency.values()), default=0)

    def codes(self) -> Tuple[str, ...]:
        """Every city code, in the order the cities were first seen."""
        return tuple(self._adjacency)

    def canonical_connection_list(self) -> List[str]:
        """Sorted 'AAA-BBB' strings, one per connected pair."""
        return self._connections.sorted()

    def connection_url_fragment(self) -> str:
        return self._connections.url_fragment()

    def describe(self) -> str:
        """Render the adjacency map, one line per city.

        Example::

            {Graph}
            {SCL => {LIM: 2453}}
            {LIM => {SCL: 2453}, {BOG: 1035}}
        """
        lines = ["{Graph}"]
        for code, neighbors in self._adjacency.items():
            if neighbors:
                links = ", ".join(
                    f"{{{port}: {format_number(miles)}}}"
                    for port, miles in neighbors.items()
                )
                lines.append(f"{{{code} => {links}}}")
            else:
                lines.append(f"{{{code}}}")
        return "\n".join(lines)

    def __contains__(self, code: object) -> bool:
        return code in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)
