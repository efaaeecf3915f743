"""Immutable domain models for the CSAir network.

All models are frozen dataclasses with slots. These models have no
external dependencies and represent the core concepts of the network:
metros, their coordinates and regions, and the routes between them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Mapping, Optional, Tuple, Union

from .errors import ValidationError

Number = Union[int, float]

LATITUDE_DIRECTIONS = frozenset({"N", "S"})
LONGITUDE_DIRECTIONS = frozenset({"E", "W"})

METRO_FIELDS = (
    "code",
    "name",
    "country",
    "continent",
    "timezone",
    "population",
    "coordinates",
    "region",
)


def normalize_code(value: Any) -> str:
    """Canonical form of a city code: stripped and upper-cased."""
    return str(value).strip().upper()


def format_number(value: Number) -> str:
    """Render a number without a trailing ``.0`` when it is integral."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Region(IntEnum):
    """Region code carried by every metro record."""

    AMERICAS = 1
    AFRICA = 2
    EUROPE = 3
    ASIA_AND_OCEANIA = 4

    @property
    def display_name(self) -> str:
        return _REGION_NAMES[self]


_REGION_NAMES = {
    Region.AMERICAS: "Americas",
    Region.AFRICA: "Africa",
    Region.EUROPE: "Europe",
    Region.ASIA_AND_OCEANIA: "Asia and Oceania",
}


class CityInfo(Enum):
    """Selector for a single piece of city information.

    The values match the option numbers of the interactive menu, so a
    caller holding raw user input can use ``CityInfo.parse``.
    """

    CODE = "1"
    COUNTRY = "2"
    CONTINENT = "3"
    TIMEZONE = "4"
    COORDINATES = "5"
    POPULATION = "6"
    REGION = "7"
    CLOSEST_CITIES = "8"

    @classmethod
    def parse(cls, value: Union[str, int, "CityInfo"]) -> "CityInfo":
        """Map an option to a selector; unknown options mean closest cities."""
        if isinstance(value, CityInfo):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            return cls.CLOSEST_CITIES


@dataclass(frozen=True, slots=True)
class Coordinate:
    """One half of a position, e.g. 33 degrees South."""

    direction: str
    degrees: float

    @property
    def signed_degrees(self) -> float:
        """Degrees as a signed value, negative for South and West."""
        if self.direction in ("S", "W"):
            return -self.degrees
        return self.degrees

    def __str__(self) -> str:
        return f"{format_number(self.degrees)}°{self.direction}"


@dataclass(frozen=True, slots=True)
class Coordinates:
    """Latitude and longitude of a metro, kept in source order.

    Attributes:
        points: The two coordinates as they appear in the data file
    """

    points: Tuple[Coordinate, Coordinate]

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Coordinates":
        """Build coordinates from a ``{"N": 19, "W": 99}`` style mapping.

        Raises:
            ValidationError: If the mapping is not one latitude and one
                longitude with numeric degrees.
        """
        if not isinstance(raw, Mapping) or len(raw) != 2:
            raise ValidationError(
                "Coordinates need exactly one latitude and one longitude",
                record=raw,
            )
        points = []
        for direction, degrees in raw.items():
            direction = str(direction).upper()
            if direction not in LATITUDE_DIRECTIONS | LONGITUDE_DIRECTIONS:
                raise ValidationError(
                    f"Unknown coordinate direction: {direction}", record=raw
                )
            if isinstance(degrees, bool) or not isinstance(degrees, (int, float)):
                raise ValidationError(
                    f"Coordinate degrees must be numeric: {degrees!r}", record=raw
                )
            points.append(Coordinate(direction=direction, degrees=float(degrees)))

        directions = {p.direction for p in points}
        if not (directions & LATITUDE_DIRECTIONS and directions & LONGITUDE_DIRECTIONS):
            raise ValidationError(
                "Coordinates need exactly one latitude and one longitude",
                record=raw,
            )
        return cls(points=(points[0], points[1]))

    @property
    def latitude(self) -> Coordinate:
        return next(p for p in self.points if p.direction in LATITUDE_DIRECTIONS)

    @property
    def longitude(self) -> Coordinate:
        return next(p for p in self.points if p.direction in LONGITUDE_DIRECTIONS)

    def __str__(self) -> str:
        return ", ".join(str(p) for p in self.points)


@dataclass(frozen=True, slots=True)
class Metro:
    """A city served by the network, with its descriptive metadata.

    Attributes:
        code: Three-letter airport-style code (e.g. 'SCL')
        name: Display name of the city
        country: Country code or name
        continent: Continent name
        timezone: Offset from GMT in hours
        population: Number of inhabitants
        coordinates: Position of the city
        region: Region the city belongs to
    """

    code: str
    name: str
    country: str
    continent: str
    timezone: float
    population: int
    coordinates: Coordinates
    region: Region

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Metro":
        """Build a metro from a raw ``metros`` entry of the data file.

        Raises:
            ValidationError: If a field is missing or has the wrong shape.
        """
        if not isinstance(record, Mapping):
            raise ValidationError("Metro record must be an object", record=record)

        missing = [name for name in METRO_FIELDS if name not in record]
        if missing:
            raise ValidationError(
                f"Metro record is missing fields: {', '.join(missing)}",
                record=record,
            )

        code = normalize_code(record["code"])
        name = str(record["name"]).strip()
        if not code or not name:
            raise ValidationError("Metro code and name must be non-empty", record=record)

        try:
            timezone = float(record["timezone"])
            population = int(record["population"])
            region = Region(int(record["region"]))
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Invalid metro record for {code}", record=record, cause=e
            )

        if population < 0:
            raise ValidationError(
                f"Population of {code} cannot be negative", record=record
            )

        return cls(
            code=code,
            name=name,
            country=str(record["country"]),
            continent=str(record["continent"]),
            timezone=timezone,
            population=population,
            coordinates=Coordinates.from_mapping(record["coordinates"]),
            region=region,
        )

    @property
    def timezone_label(self) -> str:
        """Timezone relative to GMT, e.g. 'GMT +5' or 'GMT -4.5'."""
        if self.timezone >= 0:
            return f"GMT +{format_number(self.timezone)}"
        return f"GMT {format_number(self.timezone)}"

    @property
    def display_name(self) -> str:
        """Name followed by the code in parentheses, e.g. 'Lima (LIM)'."""
        return f"{self.name} ({self.code})"


@dataclass(frozen=True, slots=True)
class Edge:
    """An undirected route between two metros.

    Attributes:
        first: Code of the first endpoint, as first recorded
        second: Code of the second endpoint
        distance: Flight distance in miles
    """

    first: str
    second: str
    distance: float

    @property
    def ports(self) -> Tuple[str, str]:
        return (self.first, self.second)


@dataclass(frozen=True, slots=True)
class NetworkRecords:
    """Raw collections read from the network data source.

    Individual records are left untouched; the directory and the route
    network validate them when they are registered.

    Attributes:
        routes: Raw ``routes`` entries, in file order
        metros: Raw ``metros`` entries, in file order
        data_sources: URLs listed under ``data sources``, if any
        source: Identifier of the source (usually a file path)
    """

    routes: Tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    metros: Tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    data_sources: Tuple[str, ...] = field(default_factory=tuple)
    source: Optional[str] = None
