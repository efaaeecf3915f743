"""City directory: name/code mapping and per-city metadata."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple

from ..domain.errors import NotFoundError, ValidationError
from ..domain.models import Metro


class CityDirectory:
    """Bijection between city names and codes, plus the metro records.

    Codes are read from the metro records themselves; they are never
    derived from names. Metros are kept in registration order.
    """

    def __init__(self) -> None:
        self._metros: Dict[str, Metro] = {}
        self._codes_by_name: Dict[str, str] = {}
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "CityDirectory":
        """Build a directory from raw ``metros`` entries.

        Raises:
            ValidationError: If any record is malformed or duplicated.
        """
        directory = cls()
        for record in records:
            directory.register_metro(record)
        directory._logger.info(
            "City directory built", extra={"metros": len(directory)}
        )
        return directory

    def register_metro(self, record: Mapping[str, Any]) -> str:
        """Register one raw metro record and return its code.

        Raises:
            ValidationError: If the record is malformed, or its code or
                name is already registered.
        """
        metro = Metro.from_record(record)
        if metro.code in self._metros:
            raise ValidationError(f"Duplicate metro code: {metro.code}", record=record)
        if metro.name in self._codes_by_name:
            raise ValidationError(f"Duplicate metro name: {metro.name}", record=record)

        self._metros[metro.code] = metro
        self._codes_by_name[metro.name] = metro.code
        self._logger.debug("Metro registered", extra={"code": metro.code})
        return metro.code

    def encode(self, name: str) -> str:
        """Return the code of a city name.

        Raises:
            NotFoundError: If the name is unknown.
        """
        try:
            return self._codes_by_name[name]
        except KeyError:
            raise NotFoundError(f"Unknown city: {name}", key=name)

    def decode(self, code: str) -> str:
        """Return the name of a city code.

        Raises:
            NotFoundError: If the code is unknown.
        """
        return self.metro_for(code).name

    def metro_for(self, code: str) -> Metro:
        """Return the metro registered under a code.

        Raises:
            NotFoundError: If the code is unknown.
        """
        try:
            return self._metros[code]
        except KeyError:
            raise NotFoundError(f"Unknown city code: {code}", key=code)

    def all_names(self) -> List[str]:
        """Return every city name, sorted case-sensitively."""
        return sorted(self._codes_by_name)

    def metros(self) -> Tuple[Metro, ...]:
        """Return every metro in registration order."""
        return tuple(self._metros.values())

    def __contains__(self, code: object) -> bool:
        return code in self._metros

    def __iter__(self) -> Iterator[Metro]:
        return iter(self._metros.values())

    def __len__(self) -> int:
        return len(self._metros)
