"""Tests for swap reporters."""

from collections.abc import Callable
from io import StringIO

from rich.console import Console

from swapwatch.data.swaps.decoder import EventDecoder
from swapwatch.data.swaps.models import RawLog
from swapwatch.data.swaps.reporter import CollectingReporter, ConsoleReporter, Reporter


LogFactory = Callable[..., RawLog]


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_prints_swap_details(self, make_swap_log: LogFactory) -> None:
        """Test the rendered block shows parties, direction and amounts."""
        event = EventDecoder().decode(make_swap_log())
        output = StringIO()
        reporter = ConsoleReporter(console=Console(file=output, width=200))

        reporter.report(event)

        text = output.getvalue()
        assert "Swap Details:" in text
        assert f"Sender: {event.sender}" in text
        assert f"Recipient: {event.recipient}" in text
        assert "Direction: USDC to DAI" in text
        assert "Amounts: -227732.600003252530000000 DAI, 227754.403440 USDC" in text

    def test_is_reporter(self) -> None:
        """Test the console reporter satisfies the Reporter protocol."""
        assert isinstance(ConsoleReporter(console=Console(file=StringIO())), Reporter)


class TestCollectingReporter:
    """Tests for CollectingReporter."""

    def test_keeps_events_in_order(self, make_swap_log: LogFactory) -> None:
        """Test events are kept in report order."""
        decoder = EventDecoder()
        events = [decoder.decode(make_swap_log(log_index=i)) for i in range(3)]
        reporter = CollectingReporter()

        for event in events:
            reporter.report(event)

        assert reporter.events == events
        assert isinstance(reporter, Reporter)
