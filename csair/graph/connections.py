"""Canonical connection strings used for external map links."""

from __future__ import annotations

from typing import List, Set


def canonical_connection(first: str, second: str) -> str:
    """Return 'AAA-BBB' with the two codes in case-insensitive order."""
    if first.lower() < second.lower():
        return f"{first.upper()}-{second.upper()}"
    return f"{second.upper()}-{first.upper()}"


class ConnectionSet:
    """Deduplicated set of undirected connections between codes."""

    def __init__(self) -> None:
        self._connections: Set[str] = set()

    def add(self, first: str, second: str) -> None:
        """Record a connection; a city paired with itself is ignored."""
        if first == second:
            return
        self._connections.add(canonical_connection(first, second))

    def sorted(self) -> List[str]:
        return sorted(self._connections)

    def url_fragment(self, separator: str = ",+") -> str:
        """Join the sorted connections, e.g. 'LIM-MEX,+MEX-SCL'."""
        return separator.join(self.sorted())

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, connection: object) -> bool:
        return connection in self._connections
