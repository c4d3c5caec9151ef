from flight_stats.flight_list import build_flight_list
from flight_stats.models import ExtractionFailed, FlightInfo, FlightRecord, MessageBooking

INFOS = {
    "AA123": FlightInfo("AA123", "JFK", "LAX", 2475, 345),
    "BA456": FlightInfo("BA456", "LHR", "JFK", None, 420),
    "LH400": FlightInfo("LH400", "FRA", "JFK", 3851, 530),
}
FREQUENCIES = {"AA123": 1, "BA456": 1, "LH400": 1}


def _record(date, code):
    return FlightRecord.from_info(date, INFOS[code])


def test_pairs_dates_and_codes_by_position():
    scans = [MessageBooking("m1", dates=("5Jan24", "12Jan24"), codes=("AA123", "BA456"))]

    flights = build_flight_list(scans, FREQUENCIES, INFOS)

    assert flights == [_record("5Jan24", "AA123"), _record("12Jan24", "BA456")]


def test_extra_dates_are_dropped():
    scans = [MessageBooking("m1", dates=("1Mar24", "2Mar24", "3Mar24"), codes=("AA123", "LH400"))]

    flights = build_flight_list(scans, FREQUENCIES, INFOS)

    assert len(flights) == 2
    assert [flight.date for flight in flights] == ["1Mar24", "2Mar24"]


def test_pruned_codes_never_appear():
    scans = [MessageBooking("m1", dates=("1Jan24", "2Jan24"), codes=("XX999", "AA123"))]

    flights = build_flight_list(scans, FREQUENCIES, INFOS)

    # XX999 is filtered before pairing, so AA123 takes the first date
    assert flights == [_record("1Jan24", "AA123")]
    assert all(flight.code != "XX999" for flight in flights)


def test_codes_without_info_are_skipped():
    frequencies = dict(FREQUENCIES, QF1=1)
    scans = [MessageBooking("m1", dates=("1Jan24", "2Jan24"), codes=("QF1", "AA123"))]

    flights = build_flight_list(scans, frequencies, INFOS)

    assert flights == [_record("2Jan24", "AA123")]


def test_identical_records_collapse_in_first_seen_order():
    scans = [
        MessageBooking("m1", dates=("5Jan24",), codes=("AA123",)),
        MessageBooking("m2", dates=("10Feb24",), codes=("BA456",)),
        MessageBooking("m3", dates=("5Jan24",), codes=("AA123",)),
        ExtractionFailed("m4", reason="bad encoding"),
        MessageBooking("m5", dates=("7Jan24",), codes=()),
    ]

    flights = build_flight_list(scans, FREQUENCIES, INFOS)

    assert flights == [_record("5Jan24", "AA123"), _record("10Feb24", "BA456")]
