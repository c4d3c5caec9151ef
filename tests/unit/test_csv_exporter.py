import pytest

from flight_stats.errors import ExportError
from flight_stats.exporters.csv_exporter import CSVExporter
from flight_stats.models import FlightRecord


def test_export_writes_header_and_integer_rows(tmp_path):
    output = tmp_path / "out" / "flightdata.csv"
    flights = [
        FlightRecord("5Jan24", "AA123", 2475, 345, "JFK New York", "LAX Los Angeles"),
        FlightRecord("10Feb2024", "BA456", None, 420, "LHR", "JFK"),
    ]

    path = CSVExporter(output).export(flights)

    assert path == output
    assert output.read_text(encoding="utf-8").splitlines() == [
        "Date,Flight Code,From,To,Distance,Duration",
        "5Jan24,AA123,JFK New York,LAX Los Angeles,2475,345",
        "10Feb2024,BA456,LHR,JFK,,420",
    ]


def test_export_empty_list_writes_header_only(tmp_path):
    output = tmp_path / "flightdata.csv"

    CSVExporter(output).export([])

    assert output.read_text(encoding="utf-8").splitlines() == [
        "Date,Flight Code,From,To,Distance,Duration",
    ]


def test_export_failure_raises(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(ExportError):
        CSVExporter(blocker / "flightdata.csv").export([])
