"""Currencies, accounts, money amounts and exchange rates."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import ROUND_DOWN, Decimal, localcontext
from enum import Enum

from .kollider import Side, Symbol

SATS_IN_BITCOIN = Decimal("100000000")
RATE_DP = 12


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def _truncate(value, dp: int) -> Decimal:
    """Round towards zero to ``dp`` decimal places."""
    value = _to_decimal(value)
    if not value.is_finite():
        raise ValueError(f"not a finite amount: {value}")
    if value.as_tuple().exponent >= -dp:
        return value
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits) + dp + 1)
        return value.quantize(Decimal(1).scaleb(-dp), rounding=ROUND_DOWN)


def _strip(value: Decimal) -> Decimal:
    """Drop trailing zeros without switching to exponent notation."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits) + 1)
        stripped = value.normalize()
        if stripped.as_tuple().exponent > 0:
            stripped = stripped.quantize(Decimal(1))
    return stripped


class TxState(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"


class TxType(Enum):
    INTERNAL = "Internal"
    EXTERNAL = "External"


class AccountType(Enum):
    INTERNAL = "Internal"
    EXTERNAL = "External"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "AccountType":
        for member in cls:
            if member.value == text:
                return member
        raise ValueError("unknown account type")


class AccountClass(Enum):
    CASH = "Cash"
    FEES = "Fees"

    def __str__(self) -> str:
        return "Fee" if self is AccountClass.FEES else self.value

    @classmethod
    def parse(cls, text: str) -> "AccountClass":
        for member in cls:
            if member.value == text:
                return member
        raise ValueError("unknown account class")


class Currency(Enum):
    """Available currencies."""

    USD = "USD"
    GBP = "GBP"
    EUR = "EUR"
    BTC = "BTC"
    KKP = "KKP"

    def __str__(self) -> str:
        return self.value

    def dp(self) -> int:
        """Number of decimal places amounts in this currency keep."""
        return _CURRENCY_DP[self]

    @classmethod
    def parse(cls, text: str) -> "Currency":
        """Parse a currency code, ignoring case."""
        lowered = text.lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        raise ValueError("unknown currency")

    def symbol(self) -> Symbol:
        """The perpetual contract symbol that prices this fiat currency in BTC."""
        try:
            return _CURRENCY_SYMBOL[self]
        except KeyError:
            raise ValueError("Incorrect usage") from None


_CURRENCY_DP = {
    Currency.BTC: 12,
    Currency.USD: 6,
    Currency.EUR: 6,
    Currency.GBP: 6,
    Currency.KKP: 8,
}

_CURRENCY_SYMBOL = {
    Currency.USD: "BTCUSD.PERP",
    Currency.EUR: "BTCEUR.PERP",
    Currency.GBP: "BTCGBP.PERP",
}


class DenomUnit(Enum):
    SATS = "Sats"
    MILLI_CENTS = "MilliCents"
    MILLI_PENCE = "MilliPence"
    KARMA = "Karma"


@dataclass(frozen=True)
class Denom:
    """Smallest unit of a currency and how many of them make one whole unit."""

    unit: DenomUnit
    value: int

    @classmethod
    def from_currency(cls, currency: Currency) -> "Denom":
        unit, value = _DENOMS[currency]
        return cls(unit, value)


_DENOMS = {
    Currency.BTC: (DenomUnit.SATS, 100000000),
    Currency.USD: (DenomUnit.MILLI_CENTS, 100000),
    Currency.GBP: (DenomUnit.MILLI_PENCE, 100000),
    Currency.EUR: (DenomUnit.MILLI_CENTS, 100000),
    Currency.KKP: (DenomUnit.KARMA, 1),
}


AccountId = uuid.UUID
RequestId = uuid.UUID
Txid = uuid.UUID
UserId = int


@dataclass
class Account:
    """A balance held in one currency."""

    currency: Currency
    account_type: AccountType
    account_class: AccountClass
    balance: Decimal = Decimal(0)
    account_id: AccountId = field(default_factory=uuid.uuid4)

    def normalize(self) -> None:
        """Truncate the balance to the currency's precision."""
        self.balance = Money.normalized_value(self.balance, self.currency)


class ServiceIdentity(Enum):
    API = "Api"
    LND_CONNECTOR = "LndConnector"
    BANK_ENGINE = "BankEngine"
    DEALER = "Dealer"
    LOOPBACK = "Loopback"
    NOSTR = "Nostr"
    JOURNAL = "Journal"


@dataclass(init=False)
class ConversionInfo:
    """Describes a conversion between BTC and a fiat currency."""

    from_currency: Currency
    to_currency: Currency
    base: Currency
    quote: Currency
    symbol: Symbol
    side: Side

    def __init__(self, from_currency: Currency, to_currency: Currency) -> None:
        if from_currency == to_currency:
            raise ValueError("Conversion between the same currency is not supported")
        if Currency.BTC not in (from_currency, to_currency):
            raise ValueError("Conversions must involve BTC")
        fiat = to_currency if from_currency is Currency.BTC else from_currency
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.base = Currency.BTC
        self.quote = fiat
        self.symbol = fiat.symbol()
        self.side = Side.ASK if to_currency == fiat else Side.BID

    def is_linear(self) -> bool:
        return self.base == self.from_currency


@dataclass
class LndNodeInfo:
    identity_pubkey: str = ""
    uris: list[str] = field(default_factory=list)
    num_active_channels: int = 0
    num_pending_channels: int = 0
    num_peers: int = 0
    testnet: bool = False


@dataclass(frozen=True)
class Money:
    """An amount in a currency, truncated to the currency's precision."""

    currency: Currency
    value: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        truncated = _truncate(self.value, self.currency.dp())
        object.__setattr__(self, "value", _strip(truncated))

    @classmethod
    def zero(cls, currency: Currency) -> "Money":
        return cls(currency, Decimal(0))

    def multiplied(self, factor) -> "Money":
        return Money(self.currency, self.value * _to_decimal(factor))

    def divided(self, divisor) -> "Money":
        return Money(self.currency, self.value / _to_decimal(divisor))

    def try_sats(self) -> Decimal:
        """The amount in satoshis; only defined for BTC."""
        if self.currency is not Currency.BTC:
            raise ValueError("Is not Bitcoin.")
        return self.value * SATS_IN_BITCOIN

    @classmethod
    def from_sats(cls, value) -> "Money":
        return cls(Currency.BTC, _to_decimal(value) / SATS_IN_BITCOIN)

    @classmethod
    def from_btc(cls, value) -> "Money":
        return cls(Currency.BTC, _to_decimal(value))

    def exchange(self, rate: "Rate") -> "Money":
        """Convert using ``rate``, inverting it if it is quoted the other way round."""
        if self.currency == rate.base:
            exchange_rate = rate
        elif self.currency == rate.quote:
            exchange_rate = rate.inverse()
        else:
            raise ValueError(f"Cannot exchange {self!r} with rate {rate!r}")
        return Money(exchange_rate.quote, self.value * exchange_rate.value)

    @classmethod
    def parse(cls, text: str) -> "Money":
        """A zero amount of the named currency."""
        lowered = text.lower()
        if lowered in ("btc", "eur", "gbp", "usd"):
            return cls.zero(Currency.parse(lowered))
        raise ValueError("unknown money")

    @staticmethod
    def normalized_value(value, currency: Currency) -> Decimal:
        return _truncate(value, currency.dp())


@dataclass(frozen=True)
class Rate:
    """Price of one unit of ``base`` in ``quote``."""

    base: Currency
    quote: Currency
    value: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", Rate.normalized_value(self.value))

    def inverse(self) -> "Rate":
        return Rate(self.quote, self.base, Decimal(1) / self.value)

    @staticmethod
    def normalized_value(value) -> Decimal:
        return _strip(_truncate(value, RATE_DP))