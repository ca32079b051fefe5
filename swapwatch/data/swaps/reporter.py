"""Reporters receive decoded swaps one at a time."""

from typing import Protocol, runtime_checkable

from rich.console import Console

from swapwatch.data.swaps.models import DecodedSwapEvent, TokenPair


@runtime_checkable
class Reporter(Protocol):
    """Anything that accepts decoded swaps."""

    def report(self, event: DecodedSwapEvent) -> None: ...


class ConsoleReporter:
    """Prints each swap to the terminal."""

    def __init__(self, pair: TokenPair | None = None, console: Console | None = None) -> None:
        self.pair = pair or TokenPair()
        self.console = console or Console()

    def report(self, event: DecodedSwapEvent) -> None:
        origin = ""
        if event.block_number is not None:
            origin = f" [dim](block #{event.block_number}, tx {event.tx_hash})[/]"

        self.console.print(f"[bold]Swap Details:[/]{origin}")
        self.console.print(f"  Sender: {event.sender}")
        self.console.print(f"  Recipient: {event.recipient}")
        self.console.print(f"  Direction: [cyan]{event.direction_label}[/]")
        self.console.print(
            f"  Amounts: {event.decimal0:f} {self.pair.token0_symbol},"
            f" {event.decimal1:f} {self.pair.token1_symbol}"
        )


class CollectingReporter:
    """Keeps reported swaps in memory, for embedding and tests."""

    def __init__(self) -> None:
        self.events: list[DecodedSwapEvent] = []

    def report(self, event: DecodedSwapEvent) -> None:
        self.events.append(event)


__all__ = [
    "CollectingReporter",
    "ConsoleReporter",
    "Reporter",
]
