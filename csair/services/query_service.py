"""Query service - Read-only façade over the directory and the network.

Every public method either returns a value or a formatted report line.
Lookups of unknown cities raise NotFoundError and leave the service
untouched, so a caller can report the error and ask again.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..config import get_config
from ..domain.errors import CSAirError, NotFoundError, RenderingError, ValidationError
from ..domain.models import CityInfo, Metro, NetworkRecords, Number, format_number
from ..graph import CityDirectory, RouteNetwork
from ..ports.rendering import MapRendererPort

SHORT_HAUL_MILES = 400


def estimated_flight_time(distance: Number) -> float:
    """Estimate the flight time in hours for a distance in miles.

    Up to 400 miles (inclusive) the plane is still accelerating or
    decelerating: ``2 * sqrt(d / 1406.25)``. Beyond that it cruises at
    750 mph after the 16/15 hours spent on the first 400 miles.

    Raises:
        ValidationError: If the distance is negative.
    """
    if distance < 0:
        raise ValidationError(f"Distance cannot be negative: {distance}")
    if distance <= SHORT_HAUL_MILES:
        return 2.0 * math.sqrt(distance / 1406.25)
    return 16.0 / 15.0 + (distance - SHORT_HAUL_MILES) / 750.0


@dataclass
class QueryService:
    """Answers descriptive queries about the CSAir network.

    Attributes:
        directory: City names, codes and metadata
        network: Routes between city codes
        map_base_url: Prefix of the external map link
        map_renderer: Optional renderer for the HTML network map
    """

    directory: CityDirectory
    network: RouteNetwork
    map_base_url: str = field(default_factory=lambda: get_config().map.base_url)
    map_renderer: Optional[MapRendererPort] = None

    _logger: logging.Logger = field(init=False, repr=False)
    _info_handlers: Dict[CityInfo, Callable[[str], str]] = field(
        init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._info_handlers = {
            CityInfo.CODE: lambda code: code,
            CityInfo.COUNTRY: lambda code: self.directory.metro_for(code).country,
            CityInfo.CONTINENT: lambda code: self.directory.metro_for(code).continent,
            CityInfo.TIMEZONE: lambda code: self.directory.metro_for(code).timezone_label,
            CityInfo.COORDINATES: lambda code: str(
                self.directory.metro_for(code).coordinates
            ),
            CityInfo.POPULATION: lambda code: str(
                self.directory.metro_for(code).population
            ),
            CityInfo.REGION: lambda code: self.directory.metro_for(
                code
            ).region.display_name,
            CityInfo.CLOSEST_CITIES: self.closest_cities_report,
        }

    @classmethod
    def from_records(
        cls,
        records: NetworkRecords,
        map_base_url: Optional[str] = None,
        map_renderer: Optional[MapRendererPort] = None,
    ) -> QueryService:
        """Build the directory and the network from the same records.

        Raises:
            ValidationError: If any metro or route record is malformed,
                or a route names a code with no metro record.
        """
        directory = CityDirectory.from_records(records.metros)
        network = RouteNetwork.from_records(records.routes)
        unknown = sorted(code for code in network.codes() if code not in directory)
        if unknown:
            raise ValidationError(
                f"Routes reference cities with no metro record: {', '.join(unknown)}"
            )
        return cls(
            directory=directory,
            network=network,
            map_base_url=map_base_url or get_config().map.base_url,
            map_renderer=map_renderer,
        )

    # City lookups

    def list_all_cities(self) -> List[str]:
        """Every city name in alphabetical order."""
        return self.directory.all_names()

    def code_for(self, name: str) -> str:
        return self.directory.encode(name)

    def city_label(self, code: str) -> str:
        """'Name (CODE)', the usual way search engines show airports."""
        return f"{self.directory.decode(code)} ({code})"

    def city_info(self, name: str, selector: Union[CityInfo, str, int]) -> str:
        """Return one piece of information about a city.

        Args:
            name: Display name of the city.
            selector: What to return. Raw menu options are accepted and
                unknown ones fall back to the closest cities report.

        Raises:
            NotFoundError: If the city is unknown.
        """
        info = CityInfo.parse(selector)
        code = self.directory.encode(name)
        self._logger.debug("City info", extra={"code": code, "info": info.name})
        return self._info_handlers[info](code)

    def city_info_safe(
        self, name: str, selector: Union[CityInfo, str, int]
    ) -> Tuple[Optional[str], Optional[str]]:
        """Like city_info, but returns ``(value, error message)``."""
        try:
            return self.city_info(name, selector), None
        except NotFoundError as e:
            self._logger.warning("City lookup failed", extra={"key": e.key})
            return None, f"Not found: {e.message}"
        except CSAirError as e:
            return None, f"Error: {e}"

    def closest_cities(self, code: str) -> List[str]:
        """One line per direct neighbor: 'Name (CODE) - N miles'.

        Lines follow the order in which the routes were loaded.

        Raises:
            NotFoundError: If the code is not in the network.
        """
        return [
            f"{self.city_label(port)} - {format_number(miles)} miles"
            for port, miles in self.network.neighbors(code).items()
        ]

    def closest_cities_report(self, code: str) -> str:
        return "\n".join(self.closest_cities(code))

    # Flights

    def distance_between(self, first: str, second: str) -> Optional[float]:
        """Direct distance between two codes, None if either is unknown."""
        return self.network.find_distance(first, second)

    def longest_flight(self) -> str:
        edge = self.network.longest_edge()
        return (
            f"Longest flight: {self.city_label(edge.first)} - "
            f"{self.city_label(edge.second)}: {format_number(edge.distance)} miles"
        )

    def shortest_flight(self) -> str:
        edge = self.network.shortest_edge()
        return (
            f"Shortest flight: {self.city_label(edge.first)} - "
            f"{self.city_label(edge.second)}: {format_number(edge.distance)} miles"
        )

    def average_distance(self) -> int:
        """Mean route length in miles, truncated toward zero.

        Raises:
            NotFoundError: If the network has no routes.
        """
        count = self.network.edge_count()
        if count == 0:
            raise NotFoundError("The network has no routes")
        return int(self.network.total_distance() / count)

    def average_distance_report(self) -> str:
        return f"Average flight distance: {self.average_distance()} miles"

    def estimated_flight_time(self, distance: Number) -> float:
        return estimated_flight_time(distance)

    # Cities

    def _require_metros(self) -> Tuple[Metro, ...]:
        metros = self.directory.metros()
        if not metros:
            raise NotFoundError("The directory has no cities")
        return metros

    def biggest_city(self) -> Metro:
        """Most populated city; equal populations go to the lowest code."""
        return min(self._require_metros(), key=lambda m: (-m.population, m.code))

    def smallest_city(self) -> Metro:
        """Least populated city; equal populations go to the lowest code."""
        return min(self._require_metros(), key=lambda m: (m.population, m.code))

    def biggest_city_report(self) -> str:
        metro = self.biggest_city()
        return f"Biggest city: {metro.display_name}: {metro.population} inhabitants"

    def smallest_city_report(self) -> str:
        metro = self.smallest_city()
        return f"Smallest city: {metro.display_name}: {metro.population} inhabitants"

    def average_population(self) -> int:
        """Mean population, truncated toward zero."""
        metros = self._require_metros()
        return int(sum(m.population for m in metros) / len(metros))

    def average_population_report(self) -> str:
        return (
            "Average population of CSAir cities: "
            f"{self.average_population()} inhabitants"
        )

    def continents(self) -> Dict[str, List[str]]:
        """City names grouped by continent.

        Continents appear in the order they are first met in the
        directory; names inside each continent are sorted.
        """
        buckets: Dict[str, List[str]] = {}
        for metro in self.directory.metros():
            buckets.setdefault(metro.continent, []).append(metro.name)
        return {continent: sorted(names) for continent, names in buckets.items()}

    def continents_report(self) -> str:
        lines = ["CSAir cities in each continent"]
        for continent, names in self.continents().items():
            lines.append("")
            lines.append(f"{continent}:")
            lines.extend(names)
        return "\n".join(lines)

    def hub_cities(self) -> List[str]:
        """Codes of the cities with the most connections, sorted by code."""
        most = self.network.max_degree()
        if most == 0:
            return []
        return sorted(
            code for code in self.network.codes() if self.network.degree(code) == most
        )

    def hub_cities_report(self) -> str:
        lines = [f"Cities with most CSAir connections ({self.network.max_degree()}):"]
        lines.extend(self.city_label(code) for code in self.hub_cities())
        return "\n".join(lines)

    # Maps

    def map_url(self) -> str:
        """Link to the external map service showing every route."""
        return self.map_base_url + self.network.connection_url_fragment()

    def render_map(self, output_path: Path) -> Path:
        """Render every city and route to an HTML map.

        Raises:
            RenderingError: If no renderer is configured or rendering fails.
        """
        if self.map_renderer is None:
            raise RenderingError(
                "No map renderer configured", output_path=str(output_path)
            )
        return self.map_renderer.render(
            self.directory.metros(), self.network.edges(), output_path
        )
