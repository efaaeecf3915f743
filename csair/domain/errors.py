"""Typed domain errors for the CSAir network.

All errors inherit from CSAirError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class CSAirError(Exception):
    """Base error for the CSAir domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class LoadError(CSAirError):
    """The network data source is missing or malformed.

    Attributes:
        file_path: Path to the data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class NotFoundError(CSAirError):
    """A city name or code is unknown to the network.

    Attributes:
        key: The name or code that was looked up
    """

    key: str = ""


@dataclass
class ValidationError(CSAirError):
    """A metro or route record breaks a network invariant.

    Attributes:
        record: The offending raw record, when available
    """

    record: Optional[Any] = field(default=None, repr=False)


@dataclass
class RenderingError(CSAirError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
