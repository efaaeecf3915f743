"""Record source port - Abstraction for loading the raw network data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import NetworkRecords


class RecordSourcePort(Protocol):
    """Port for loading route and metro records.

    Implementation: adapters/records/json_repository.py

    The source reads a data document once and hands back the raw
    collections. It does not validate individual records.
    """

    def load(self) -> NetworkRecords:
        """Load the network records.

        Returns:
            The raw routes, metros and data sources.

        Raises:
            LoadError: If the source is missing or malformed.
        """
        ...
