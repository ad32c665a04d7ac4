from datetime import datetime

import pytest

from eta import ETAInfo
from eta.formatting import (
    arrival_line,
    deliver_by_line,
    describe_trip,
    format_trip_datetime,
    leaving_line,
    return_line,
)


@pytest.fixture
def eta_info():
    return ETAInfo(
        origin_name="Williams Lake",
        dest_name="Quesnel",
        depart_at=datetime(2026, 10, 5, 15, 0),
        eta_at=datetime(2026, 10, 5, 17, 25),
        buffer_tag="(estimate)",
        distance_km=120,
    )


@pytest.mark.unit
class TestFormatTripDatetime:
    def test_afternoon(self) -> None:
        """Trip times read as weekday, month, day and 12-hour time."""
        assert format_trip_datetime(datetime(2026, 10, 5, 15, 0)) == "Mon, Oct 5, 3:00 PM"

    def test_midnight_and_noon(self) -> None:
        """12-hour clock shows midnight as 12 AM and noon as 12 PM."""
        assert format_trip_datetime(datetime(2026, 1, 1, 0, 5)) == "Thu, Jan 1, 12:05 AM"
        assert format_trip_datetime(datetime(2026, 12, 6, 12, 30)) == "Sun, Dec 6, 12:30 PM"


@pytest.mark.unit
class TestTripLines:
    def test_leaving_line(self, eta_info) -> None:
        """The leaving line names the origin and departure."""
        assert leaving_line(eta_info) == "Leaving Williams Lake • Mon, Oct 5, 3:00 PM"

    def test_arrival_line_carries_buffer_tag(self, eta_info) -> None:
        """The arrival line ends with the estimate tag."""
        assert arrival_line(eta_info) == "ETA to Quesnel • Mon, Oct 5, 5:25 PM (estimate)"

    def test_arrival_line_without_eta(self, eta_info) -> None:
        """No arrival time means no arrival line."""
        assert arrival_line(eta_info.model_copy(update={"eta_at": None})) is None

    def test_return_line(self, eta_info) -> None:
        """The return line appears only when a return is scheduled."""
        assert return_line(eta_info) is None

        with_return = eta_info.model_copy(
            update={"return_depart_at": datetime(2026, 10, 6, 9, 0)}
        )
        assert return_line(with_return) == "Return: leaving Quesnel • Tue, Oct 6, 9:00 AM"

    def test_deliver_by_line(self, eta_info) -> None:
        """Deliver-by uses the departure time."""
        assert deliver_by_line(eta_info) == "Deliver by Mon, Oct 5, 3:00 PM"


@pytest.mark.unit
class TestDescribeTrip:
    def test_unknown_timing(self) -> None:
        """Unknown timing collapses to a single TBD line."""
        assert describe_trip(None) == ["Leaving time TBD"]

    def test_one_way(self, eta_info) -> None:
        """One-way trips show leaving and arrival."""
        assert describe_trip(eta_info) == [
            "Leaving Williams Lake • Mon, Oct 5, 3:00 PM",
            "ETA to Quesnel • Mon, Oct 5, 5:25 PM (estimate)",
        ]

    def test_round_trip(self, eta_info) -> None:
        """Round trips add the return line last."""
        with_return = eta_info.model_copy(
            update={"return_depart_at": datetime(2026, 10, 6, 9, 0)}
        )
        lines = describe_trip(with_return)
        assert len(lines) == 3
        assert lines[-1].startswith("Return: leaving Quesnel")
