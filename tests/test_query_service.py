from pathlib import Path

import pytest

from csair.domain.errors import NotFoundError, RenderingError, ValidationError
from csair.domain.models import CityInfo, NetworkRecords
from csair.services import QueryService, estimated_flight_time

from .conftest import make_metro, make_route


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def render(self, metros, edges, output_path):
        self.calls.append((tuple(metros), tuple(edges), output_path))
        return output_path


class TestCityInfo:
    @pytest.mark.parametrize(
        "selector, expected",
        [
            (CityInfo.CODE, "SCL"),
            (CityInfo.COUNTRY, "XX"),
            (CityInfo.CONTINENT, "South America"),
            (CityInfo.TIMEZONE, "GMT -4"),
            (CityInfo.COORDINATES, "33°S, 71°W"),
            (CityInfo.POPULATION, "500000"),
            (CityInfo.REGION, "Americas"),
            (CityInfo.CLOSEST_CITIES, "Lima (LIM) - 2453 miles"),
        ],
    )
    def test_selectors(self, service, selector, expected):
        assert service.city_info("Santiago", selector) == expected

    def test_raw_menu_option(self, service):
        assert service.city_info("Lima", "1") == "LIM"

    def test_unknown_option_falls_back_to_closest_cities(self, service):
        assert service.city_info("Lima", "42") == service.closest_cities_report("LIM")

    def test_unknown_city_raises(self, service):
        with pytest.raises(NotFoundError):
            service.city_info("Atlantis", CityInfo.CODE)

    def test_safe_lookup_reports_error_and_recovers(self, service):
        value, error = service.city_info_safe("Atlantis", CityInfo.CODE)
        assert value is None
        assert error == "Not found: Unknown city: Atlantis"

        value, error = service.city_info_safe("Lima", CityInfo.CODE)
        assert value == "LIM"
        assert error is None


def test_list_all_cities(service):
    assert service.list_all_cities() == ["Bogota", "Lima", "Santiago"]


def test_code_for(service):
    assert service.code_for("Bogota") == "BOG"


def test_closest_cities_follow_route_order(service):
    assert service.closest_cities("LIM") == [
        "Santiago (SCL) - 2453 miles",
        "Bogota (BOG) - 1035 miles",
    ]


def test_closest_cities_of_unknown_code(service):
    with pytest.raises(NotFoundError):
        service.closest_cities("XXX")


def test_distance_between(service):
    assert service.distance_between("SCL", "LIM") == 2453
    assert service.distance_between("SCL", "SCL") == 0
    assert service.distance_between("SCL", "XXX") is None


def test_flight_reports(service):
    assert service.longest_flight() == (
        "Longest flight: Santiago (SCL) - Lima (LIM): 2453 miles"
    )
    assert service.shortest_flight() == (
        "Shortest flight: Lima (LIM) - Bogota (BOG): 1035 miles"
    )


def test_average_distance(service):
    assert service.average_distance() == 1744
    assert service.average_distance_report() == "Average flight distance: 1744 miles"


def test_average_distance_truncates():
    service = QueryService.from_records(
        NetworkRecords(
            metros=(make_metro("AAA", "A"), make_metro("BBB", "B"), make_metro("CCC", "C")),
            routes=(make_route("AAA", "BBB", 10), make_route("BBB", "CCC", 11)),
        )
    )
    assert service.average_distance() == 10


def test_population_statistics(service):
    assert service.biggest_city().code == "LIM"
    assert service.smallest_city().code == "BOG"
    assert service.average_population() == 2540000
    assert service.biggest_city_report() == "Biggest city: Lima (LIM): 7000000 inhabitants"
    assert service.smallest_city_report() == (
        "Smallest city: Bogota (BOG): 120000 inhabitants"
    )
    assert service.average_population_report() == (
        "Average population of CSAir cities: 2540000 inhabitants"
    )


def test_population_ties_go_to_lowest_code():
    service = QueryService.from_records(
        NetworkRecords(
            metros=(
                make_metro("ZZZ", "Zeta", 100),
                make_metro("AAA", "Alpha", 100),
            )
        )
    )
    assert service.biggest_city().code == "AAA"
    assert service.smallest_city().code == "AAA"


def test_empty_network_statistics():
    service = QueryService.from_records(NetworkRecords())
    with pytest.raises(NotFoundError):
        service.average_distance()
    with pytest.raises(NotFoundError):
        service.biggest_city()
    with pytest.raises(NotFoundError):
        service.average_population()
    assert service.hub_cities() == []


def test_continents_grouped_and_sorted():
    service = QueryService.from_records(
        NetworkRecords(
            metros=(
                make_metro("PAR", "Paris", continent="Europe"),
                make_metro("LIM", "Lima"),
                make_metro("MAD", "Madrid", continent="Europe"),
                make_metro("BOG", "Bogota"),
            )
        )
    )
    assert service.continents() == {
        "Europe": ["Madrid", "Paris"],
        "South America": ["Bogota", "Lima"],
    }
    assert list(service.continents()) == ["Europe", "South America"]
    assert service.continents_report().splitlines() == [
        "CSAir cities in each continent",
        "",
        "Europe:",
        "Madrid",
        "Paris",
        "",
        "South America:",
        "Bogota",
        "Lima",
    ]


def test_hub_cities():
    metros = tuple(make_metro(code, code.title()) for code in ["AAA", "BBB", "CCC", "DDD", "XXX"])
    routes = (
        make_route("XXX", "AAA", 10),
        make_route("XXX", "BBB", 10),
        make_route("XXX", "CCC", 10),
        make_route("XXX", "DDD", 10),
        make_route("AAA", "BBB", 10),
        make_route("BBB", "CCC", 10),
    )
    service = QueryService.from_records(NetworkRecords(metros=metros, routes=routes))

    assert service.hub_cities() == ["XXX"]
    assert service.hub_cities_report().splitlines() == [
        "Cities with most CSAir connections (4):",
        "Xxx (XXX)",
    ]


def test_hub_cities_ties_sorted_by_code(service):
    service.network.add_connection("BOG", "SCL", 3000)
    assert service.hub_cities() == ["BOG", "LIM", "SCL"]


def test_map_url(service):
    assert service.map_url() == "http://www.gcmap.com/mapui?P=BOG-LIM,+LIM-SCL"


def test_map_url_custom_base(records):
    service = QueryService.from_records(records, map_base_url="http://maps.test/?P=")
    assert service.map_url().startswith("http://maps.test/?P=BOG-LIM")


def test_estimated_flight_time_short_haul():
    assert estimated_flight_time(400) == pytest.approx(1.0667, abs=1e-4)
    assert estimated_flight_time(0) == 0


def test_estimated_flight_time_long_haul(service):
    assert service.estimated_flight_time(1000) == pytest.approx(1.8667, abs=1e-4)
    assert estimated_flight_time(1150) == pytest.approx(16 / 15 + 1)


def test_estimated_flight_time_rejects_negative():
    with pytest.raises(ValidationError):
        estimated_flight_time(-1)


def test_render_map_uses_renderer(records):
    renderer = RecordingRenderer()
    service = QueryService.from_records(records, map_renderer=renderer)

    result = service.render_map(Path("network.html"))

    assert result == Path("network.html")
    metros, edges, _ = renderer.calls[0]
    assert [m.code for m in metros] == ["SCL", "LIM", "BOG"]
    assert [e.ports for e in edges] == [("SCL", "LIM"), ("LIM", "BOG")]


def test_render_map_without_renderer(service):
    with pytest.raises(RenderingError):
        service.render_map(Path("network.html"))


def test_lowercase_codes_match_between_metros_and_routes():
    service = QueryService.from_records(
        NetworkRecords(
            metros=(make_metro("scl", "Santiago"), make_metro(" lim", "Lima")),
            routes=(make_route("scl", "lim ", 2453),),
        )
    )

    assert service.code_for("Santiago") == "SCL"
    assert service.city_info("Santiago", "8") == "Lima (LIM) - 2453 miles"
    assert service.longest_flight() == (
        "Longest flight: Santiago (SCL) - Lima (LIM): 2453 miles"
    )
    assert service.hub_cities() == ["LIM", "SCL"]


def test_routes_to_cities_without_metro_record_are_rejected():
    records = NetworkRecords(
        metros=(make_metro("SCL", "Santiago"),),
        routes=(make_route("SCL", "LIM", 2453), make_route("SCL", "BOG", 3000)),
    )
    with pytest.raises(ValidationError) as exc_info:
        QueryService.from_records(records)
    assert "BOG, LIM" in exc_info.value.message


def test_average_population_truncates():
    service = QueryService.from_records(
        NetworkRecords(
            metros=(
                make_metro("AAA", "A", 1),
                make_metro("BBB", "B", 1),
                make_metro("CCC", "C", 2),
            )
        )
    )
    assert service.average_population() == 1


def test_default_map_base_url_comes_from_config(monkeypatch, records):
    monkeypatch.setenv("CSAIR_MAP_BASE_URL", "http://maps.test/?P=")

    service = QueryService.from_records(records)
    direct = QueryService(directory=service.directory, network=service.network)

    assert service.map_url() == "http://maps.test/?P=BOG-LIM,+LIM-SCL"
    assert direct.map_base_url == "http://maps.test/?P="
