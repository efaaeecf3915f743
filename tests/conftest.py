"""Shared fixtures for the CSAir test-suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from csair.config import reset_config
from csair.domain.models import NetworkRecords
from csair.services import QueryService

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def make_metro(code, name, population=1000000, continent="South America", **overrides):
    record = {
        "code": code,
        "name": name,
        "country": "XX",
        "continent": continent,
        "timezone": -5,
        "coordinates": {"S": 12, "W": 77},
        "population": population,
        "region": 1,
    }
    record.update(overrides)
    return record


def make_route(first, second, distance):
    return {"ports": [first, second], "distance": distance}


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def records() -> NetworkRecords:
    return NetworkRecords(
        metros=(
            make_metro("SCL", "Santiago", 500000, timezone=-4, coordinates={"S": 33, "W": 71}),
            make_metro("LIM", "Lima", 7000000),
            make_metro("BOG", "Bogota", 120000, coordinates={"N": 5, "W": 74}),
        ),
        routes=(
            make_route("SCL", "LIM", 2453),
            make_route("LIM", "BOG", 1035),
        ),
    )


@pytest.fixture
def service(records) -> QueryService:
    return QueryService.from_records(records)
