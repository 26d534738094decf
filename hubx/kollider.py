"""Exchange-side types: order sides, positions, balances and mark prices."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

OrderId = int
UserId = int
Symbol = str


class Side(Enum):
    """Side of an order or position."""

    BID = "Bid"
    ASK = "Ask"

    def to_sign(self) -> int:
        """Return +1 for a bid and -1 for an ask."""
        return 1 if self is Side.BID else -1

    @classmethod
    def from_sign(cls, sign: int) -> "Side":
        """Negative numbers map to an ask, everything else to a bid."""
        return cls.ASK if sign < 0 else cls.BID


class OrderType(Enum):
    MARKET = "Market"
    LIMIT = "Limit"


class MarginType(Enum):
    ISOLATED = "Isolated"
    CROSS = "Cross"


class SettlementType(Enum):
    INSTANT = "Instant"
    DELAYED = "Delayed"


class TradeOrigin(Enum):
    SDK = "Sdk"


@dataclass(kw_only=True)
class PositionState:
    """State of a single open position on the exchange."""

    timestamp: int = 0
    symbol: Symbol = ""
    upnl: Decimal = Decimal(0)
    rpnl: Decimal = Decimal(0)
    funding: Decimal = Decimal(0)
    leverage: Decimal = Decimal(0)
    real_leverage: Decimal = Decimal(0)
    entry_price: Decimal = Decimal(0)
    side: Side | None = None
    quantity: Decimal = Decimal(0)
    open_order_ids: set[OrderId] = field(default_factory=set)
    liq_price: Decimal = Decimal(0)
    bankruptcy_price: Decimal = Decimal(0)
    is_liquidating: bool = False
    entry_value: Decimal = Decimal(0)
    mark_value: Decimal = Decimal(0)
    adl_score: Decimal = Decimal(0)
    entry_time: int | None = None


@dataclass
class Positions:
    """All positions keyed by symbol."""

    positions: dict[Symbol, PositionState] = field(default_factory=dict)


@dataclass
class Balances:
    """Cash and margin balances keyed by symbol."""

    cash: dict[Symbol, Decimal] = field(default_factory=dict)
    isolated_margin: dict[Symbol, Decimal] = field(default_factory=dict)
    order_margin: dict[Symbol, Decimal] = field(default_factory=dict)
    cross_margin: Decimal = Decimal(0)


@dataclass
class MarkPrice:
    """Mark price of a symbol."""

    price: Decimal
    symbol: Symbol