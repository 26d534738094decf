"""Level 2 order books and the volume-weighted quotes derived from them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

from .kollider import Symbol
from .messages import Level2State

# Order sizes, in contracts, for which a quote is kept.
QUOTE_QUANTITIES = (10, 100, 1_000, 2_000, 3_000, 5_000, 10_000, 100_000, 1_000_000)


@dataclass
class OrderBook:
    """Aggregated bid and ask levels of one symbol, price mapped to volume.

    Deltas are only applied once a snapshot has been received.
    """

    symbol: Symbol
    bids: dict[Decimal, int] = field(default_factory=dict)
    asks: dict[Decimal, int] = field(default_factory=dict)
    has_snapshot: bool = False

    def apply(self, update: Level2State) -> None:
        """Apply a snapshot or a delta update to the book."""
        if update.symbol != self.symbol:
            raise ValueError(f"update for {update.symbol!r} applied to the book of {self.symbol!r}")
        if update.update_type == "snapshot":
            self.bids = dict(update.bids)
            self.asks = dict(update.asks)
            self.has_snapshot = True
        elif update.update_type == "delta":
            if not self.has_snapshot:
                return
            _apply_delta(self.bids, update.bids)
            _apply_delta(self.asks, update.asks)
        else:
            raise ValueError("Unsupported level2 update")


def _apply_delta(levels: dict[Decimal, int], changes: dict[Decimal, int]) -> None:
    for price, volume in changes.items():
        if volume == 0:
            levels.pop(price, None)
        elif volume > 0:
            levels[price] = volume


def _side_quotes(levels: Iterable[tuple[Decimal, int]], rounding: str, price_dp: int) -> dict[int, Decimal]:
    """Average fill price for each quoted quantity that the levels can fill."""
    quotes: dict[int, Decimal] = {}
    remaining_levels = iter(levels)
    filled = 0
    notional = Decimal(0)
    level_price = Decimal(0)
    level_volume = 0
    exhausted = False

    for quantity in QUOTE_QUANTITIES:
        while filled < quantity and not exhausted:
            if level_volume <= 0:
                try:
                    level_price, level_volume = next(remaining_levels)
                except StopIteration:
                    exhausted = True
                    break
                continue
            take = min(level_volume, quantity - filled)
            level_volume -= take
            filled += take
            notional += level_price * take
        if filled < quantity:
            break
        average = (notional / filled).to_integral_value(rounding=rounding)
        quotes[quantity] = average.scaleb(-price_dp)
    return quotes


def build_quotes(book: OrderBook, price_dp: int) -> tuple[dict[int, Decimal], dict[int, Decimal]]:
    """Return ``(bid_quotes, ask_quotes)``: quantity mapped to average fill price.

    Bids are walked from the highest price and rounded up, asks from the
    lowest price and rounded down; the integer result is shifted by
    ``price_dp`` decimal places. Quantities the book cannot fill are absent.
    """
    bid_levels = sorted(book.bids.items(), key=lambda level: level[0], reverse=True)
    ask_levels = sorted(book.asks.items(), key=lambda level: level[0])
    return (
        _side_quotes(bid_levels, ROUND_CEILING, price_dp),
        _side_quotes(ask_levels, ROUND_FLOOR, price_dp),
    )