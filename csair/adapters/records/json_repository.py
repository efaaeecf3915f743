"""JSON record repository adapter.

Reads the network document once and checks its top-level shape with
Pydantic. Individual route and metro entries are passed through as-is;
they are validated when the directory and the network register them.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from ...config import DataConfig, get_config
from ...domain.errors import LoadError
from ...domain.models import NetworkRecords


class NetworkDocument(BaseModel):
    """Top-level layout of the network data file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    routes: List[Any]
    metros: List[Any]
    data_sources: List[str] = Field(default_factory=list, alias="data sources")


@dataclass
class JSONRecordRepository:
    """Record source that loads from a JSON file.

    Attributes:
        config: Data configuration (directory, file name)
        path: Explicit file path, overriding the configured one
    """

    config: DataConfig = field(default_factory=lambda: get_config().data)
    path: Optional[Path] = None
    _logger: logging.Logger = field(init=False, repr=False)

    _records: Optional[NetworkRecords] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def data_path(self) -> Path:
        return Path(self.path) if self.path is not None else self.config.data_path

    def load(self) -> NetworkRecords:
        """Load route and metro records from the JSON file.

        Returns:
            The raw records, in file order.

        Raises:
            LoadError: If the file is missing, is not JSON, or lacks the
                ``routes`` or ``metros`` lists.
        """
        if self._records is not None:
            return self._records

        path = self.data_path
        self._logger.debug("Loading network records", extra={"path": str(path)})

        try:
            with path.open(encoding="utf-8") as f:
                raw = json.load(f)
        except OSError as e:
            raise LoadError(
                f"Cannot read network data from {path}",
                file_path=str(path),
                cause=e,
            )
        except json.JSONDecodeError as e:
            raise LoadError(
                f"Network data in {path} is not valid JSON",
                file_path=str(path),
                cause=e,
            )

        try:
            document = NetworkDocument.model_validate(raw)
        except SchemaError as e:
            raise LoadError(
                f"Network data in {path} is malformed",
                file_path=str(path),
                cause=e,
            )

        records = NetworkRecords(
            routes=tuple(document.routes),
            metros=tuple(document.metros),
            data_sources=tuple(document.data_sources),
            source=str(path),
        )
        self._records = records
        self._logger.info(
            "Network records loaded",
            extra={"routes": len(records.routes), "metros": len(records.metros)},
        )
        return records

    def clear_cache(self) -> None:
        """Forget the loaded records so the next load re-reads the file."""
        self._records = None
        self._logger.debug("Record cache cleared")
