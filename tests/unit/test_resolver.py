from flight_stats.errors import ResolutionError
from flight_stats.models import FlightInfo
from flight_stats.resolver import (
    FlightInfoResolver,
    NoValue,
    OneValue,
    TwoValues,
    DURATION_TOKEN,
    duration_from_tokens,
    parse_distance,
    parse_duration,
    tokenize,
)
from tracking_pages import tracking_markup


class _StubSource:
    def __init__(self, pages):
        self.pages = pages

    def fetch_tracking_page(self, flight_code):
        page = self.pages.get(flight_code)
        if isinstance(page, Exception):
            raise page
        if page is None:
            raise ResolutionError(flight_code, "HTTP 404")
        return page


def test_parse_distance():
    assert parse_distance("1,234") == 1234
    assert parse_distance("500 1234") == 1234
    assert parse_distance("2,451 mi (Planned: 2,475 mi)") == 2475
    assert parse_distance("unknown") is None


def test_duration_from_tokens():
    assert duration_from_tokens(TwoValues("2", "30")) == 150
    assert duration_from_tokens(OneValue("45")) == 45
    assert duration_from_tokens(NoValue()) == 0


def test_parse_duration_from_text():
    assert parse_duration("1h 05m") == 65
    assert parse_duration("55m") == 55


def test_tokenize_keeps_first_two_tokens():
    assert tokenize("3 4 5", DURATION_TOKEN) == TwoValues("3", "4")
    assert tokenize("", DURATION_TOKEN) == NoValue()


def test_resolve_builds_flight_info():
    source = _StubSource({
        "AA123": tracking_markup("JFK", "LAX", "5h 45m", "2,451 mi 2,475 mi"),
    })
    resolver = FlightInfoResolver(source, show_progress=False)

    info = resolver.resolve("AA123")

    assert info == FlightInfo(
        code="AA123",
        origin="JFK",
        destination="LAX",
        distance_miles=2475,
        duration_minutes=345,
    )


def test_resolve_without_distance_keeps_flight():
    source = _StubSource({"BA456": tracking_markup("LHR", "JFK", "7h 0m")})
    resolver = FlightInfoResolver(source, show_progress=False)

    info = resolver.resolve("BA456")

    assert info.distance_miles is None
    assert info.duration_minutes == 420


def test_resolve_without_duration_is_invalid():
    source = _StubSource({"on2024": tracking_markup("", "", "")})
    resolver = FlightInfoResolver(source, show_progress=False)

    assert resolver.resolve("on2024") is None


def test_resolve_all_prunes_failed_codes():
    source = _StubSource({
        "AA123": tracking_markup("JFK", "LAX", "5h 45m", "2,475 mi"),
        "BA456": tracking_markup("LHR", "JFK", "420"),
        "XX1": tracking_markup("", "", "no data"),
        "YY2": RuntimeError("connection reset"),
    })
    resolver = FlightInfoResolver(source, max_workers=4, show_progress=False)
    frequency_map = {"AA123": 2, "XX1": 1, "BA456": 1, "YY2": 1, "ZZ3": 1}

    infos, pruned = resolver.resolve_all(frequency_map)

    assert set(infos) == {"AA123", "BA456"}
    assert infos["BA456"].duration_minutes == 420
    assert pruned == {"AA123": 2, "BA456": 1}
    assert frequency_map == {"AA123": 2, "XX1": 1, "BA456": 1, "YY2": 1, "ZZ3": 1}


def test_resolve_absorbs_unexpected_source_errors():
    source = _StubSource({"AA123": RuntimeError("connection reset")})
    resolver = FlightInfoResolver(source, show_progress=False)

    assert resolver.resolve("AA123") is None
