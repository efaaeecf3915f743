"""Record adapters - Implementations of RecordSourcePort.

Available implementations:
- JSONRecordRepository: Loads routes and metros from a JSON document
"""

from .json_repository import JSONRecordRepository

__all__ = ["JSONRecordRepository"]
