"""Messages exchanged between the dealer, the bank, the API and the exchange."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from .core import Account, AccountId, Currency, Money, Rate, RequestId, UserId
from .kollider import Symbol


class Channel(Enum):
    """Exchange websocket subscription channels."""

    POSITION_STATES = "PositionStates"
    MARK_PRICES = "MarkPrices"
    ORDERBOOK_LEVEL2 = "OrderbookLevel2"


@dataclass(kw_only=True)
class TradableSymbol:
    """Contract specification of a symbol traded on the exchange."""

    symbol: Symbol
    contract_size: Decimal = Decimal(1)
    max_leverage: Decimal = Decimal(1)
    base_margin: Decimal = Decimal(0)
    liquidation_fee: Decimal = Decimal(0)
    is_inverse_priced: bool = False
    price_dp: int = 0
    underlying_symbol: Symbol = ""
    last_price: Decimal = Decimal(0)
    tick_size: Decimal = Decimal(1)
    risk_limit: Decimal = Decimal(0)


@dataclass(kw_only=True)
class Level2State:
    """An order book snapshot or delta: price levels mapped to volume."""

    update_type: str
    symbol: Symbol
    seq_number: int = 0
    bids: dict[Decimal, int] = field(default_factory=dict)
    asks: dict[Decimal, int] = field(default_factory=dict)


class QuoteResponseError(Enum):
    CURRENCY_NOT_AVAILABLE = "CurrencyNotAvailable"


class SwapResponseError(Enum):
    INVALID = "Invalid"
    CURRENCY_NOT_AVAILABLE = "CurrencyNotAvailable"
    INVALID_QUOTE_ID = "InvalidQuoteId"


class InvoiceResponseError(Enum):
    RATE_NOT_AVAILABLE = "RateNotAvailable"


class FiatDepositResponseError(Enum):
    CURRENCY_NOT_AVAILABLE = "CurrencyNotAvailable"


class HealthStatus(Enum):
    RUNNING = "Running"
    DOWN = "Down"


@dataclass(kw_only=True)
class QuoteRequest:
    """A user asks for a guaranteed rate for a conversion."""

    uid: UserId
    amount: Money
    from_currency: Currency
    to_currency: Currency
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class QuoteResponse:
    """A quoted rate, valid until ``valid_until`` (milliseconds since the epoch)."""

    req_id: RequestId
    uid: UserId
    amount: Money
    from_currency: Currency
    to_currency: Currency
    valid_until: int = 0
    rate: Rate | None = None
    quote_id: int | None = None
    error: QuoteResponseError | None = None
    fees: Money | None = None


@dataclass(kw_only=True)
class SwapRequest:
    """A user asks to convert an amount, optionally at a previously quoted rate."""

    uid: UserId
    amount: Money
    from_currency: Currency
    to_currency: Currency
    quote_id: int | None = None
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class SwapResponse:
    req_id: RequestId
    uid: UserId
    amount: Money
    from_currency: Currency
    to_currency: Currency
    success: bool = True
    rate: Rate | None = None
    error: SwapResponseError | None = None
    fees: Money | None = None


@dataclass(kw_only=True)
class InvoiceRequest:
    """A user asks for an invoice worth ``amount`` in ``currency``."""

    uid: UserId
    amount: Money
    currency: Currency
    target_account_currency: Currency | None = None
    metadata: str | None = None
    meta: str = ""
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class InvoiceResponse:
    req_id: RequestId
    uid: UserId
    amount: Money
    currency: Currency
    target_account_currency: Currency | None = None
    metadata: str | None = None
    meta: str = ""
    rate: Rate | None = None
    payment_request: str | None = None
    payment_hash: str | None = None
    account_id: AccountId | None = None
    error: InvoiceResponseError | None = None
    fees: Money | None = None


@dataclass(kw_only=True)
class PaymentRequest:
    """A user asks to pay a lightning invoice from a fiat or BTC account."""

    uid: UserId
    currency: Currency
    payment_request: str | None = None
    invoice_amount: Money | None = None
    rate: Rate | None = None
    fees: Money | None = None
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class CreateLnurlWithdrawalRequest:
    uid: UserId
    amount: Money
    currency: Currency
    rate: Rate | None = None
    fees: Money | None = None
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class AvailableCurrenciesRequest:
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class AvailableCurrenciesResponse:
    req_id: RequestId
    currencies: list[Currency] = field(default_factory=list)
    error: str | None = None


@dataclass(kw_only=True)
class CreateInvoiceRequest:
    """The dealer asks the bank for an invoice of ``amount`` satoshis.

    ``insurance`` marks a request drawn on the insurance fund.
    """

    amount: int
    memo: str = ""
    insurance: bool = False
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class CreateInvoiceResponse:
    amount: int
    payment_request: str
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class PayInvoice:
    """The dealer asks the bank to pay an invoice, from the insurance fund if ``insurance``."""

    payment_request: str
    insurance: bool = False
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class BankState:
    """Exposures of the bank, one account per currency and type."""

    fiat_exposures: dict[AccountId, Account] = field(default_factory=dict)
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class FiatDepositRequest:
    uid: UserId
    amount: Money
    currency: Currency
    payment_request: str | None = None
    req_id: RequestId = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class FiatDepositResponse:
    req_id: RequestId
    uid: UserId
    amount: Money
    currency: Currency
    payment_request: str | None = None
    rate: Rate | None = None
    error: FiatDepositResponseError | None = None
    fees: Money | None = None


@dataclass(kw_only=True)
class DealerHealth:
    status: HealthStatus
    available_currencies: list[Currency] = field(default_factory=list)
    rates: dict[tuple[Currency, Currency], Rate] = field(default_factory=dict)
    timestamp: int = 0


@dataclass(kw_only=True)
class KarmaBalance:
    karma: Decimal = Decimal(0)


@dataclass(kw_only=True)
class Disconnected:
    timestamp: int


@dataclass(kw_only=True)
class Reconnected:
    timestamp: int


@dataclass(kw_only=True)
class Authenticate:
    """Exchange reply to an authentication request."""

    message: str

    def success(self) -> bool:
        return self.message == "success"


@dataclass(kw_only=True)
class OrderInvoice:
    invoice: str
    symbol: Symbol = ""


@dataclass(kw_only=True)
class SettlementRequest:
    """The exchange settled funds; ``amount`` is a decimal string of satoshis."""

    amount: str
    symbol: Symbol


@dataclass(kw_only=True)
class ChangeMarginSuccess:
    amount: Decimal
    symbol: Symbol


@dataclass(kw_only=True)
class AddMarginRequest:
    amount: Decimal
    symbol: Symbol
    invoice: str


@dataclass(kw_only=True)
class FundingPayment:
    amount: Decimal
    symbol: Symbol = ""