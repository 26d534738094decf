"""Conversion rates and fees priced from order book quotes."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_UP, Decimal

from .core import ConversionInfo, Money, Rate
from .messages import QuoteResponse, SwapRequest

_U64_MAX = 2**64 - 1

Quotes = Mapping[int, Decimal]


def _to_u64(value: Decimal) -> int | None:
    """Truncate to an unsigned 64-bit integer, or ``None`` if out of range."""
    if value < 0:
        return None
    whole = int(value)
    if whole > _U64_MAX:
        return None
    return whole


def _level_at_or_above(quotes: Quotes, quantity: int) -> Decimal | None:
    """Price of the smallest quoted quantity that covers ``quantity``."""
    eligible = [level for level in quotes if quantity <= level < _U64_MAX]
    if not eligible:
        return None
    return quotes[min(eligible)]


def linear_rate(price: Decimal, spread: Decimal, charge_spread: bool) -> Decimal:
    """Rate for selling the base currency: the price less half the spread."""
    modifier = Decimal(1) - spread / 2 if charge_spread else Decimal(1)
    return price * modifier


def inverse_rate(price: Decimal, spread: Decimal, charge_spread: bool) -> Decimal:
    """Rate for buying the base currency: the reciprocal of the price plus half the spread."""
    modifier = Decimal(1) + spread / 2 if charge_spread else Decimal(1)
    return Decimal(1) / (price * modifier)


def _priced(
    price: Decimal,
    value_in_fiat: Decimal,
    conversion: ConversionInfo,
    spread: Decimal,
    charge_spread: bool,
) -> tuple[Rate, Money]:
    # Fees are paid in the target currency.
    if conversion.is_linear():
        user_rate = linear_rate(price, spread, charge_spread)
        fee_value = (price - user_rate) / price * value_in_fiat
    else:
        no_fee_rate = Decimal(1) / price
        user_rate = inverse_rate(price, spread, charge_spread)
        fee_value = (no_fee_rate - user_rate) / no_fee_rate * (value_in_fiat / price)
    rate = Rate(conversion.from_currency, conversion.to_currency, user_rate)
    fees = Money(conversion.to_currency, fee_value)
    return rate, fees


def _quotes_for(
    bid_quotes: Quotes | None, ask_quotes: Quotes | None, conversion: ConversionInfo
) -> Quotes | None:
    return ask_quotes if conversion.side.to_sign() > 0 else bid_quotes


def cross_rate(
    quotes: Quotes | None,
    amount: Money,
    conversion: ConversionInfo,
    spread: Decimal,
    charge_spread: bool,
) -> tuple[Rate | None, Money | None]:
    """Rate and fees for converting ``amount`` between BTC and a fiat currency.

    ``quotes`` are the quotes of the book side the conversion trades against.
    BTC amounts are valued in fiat at the best quote before the level is looked up.
    """
    if quotes is None:
        return None, None
    if conversion.from_currency != conversion.quote:
        valid_levels = [level for level in quotes if level < _U64_MAX]
        if not valid_levels:
            return None, None
        best_price = quotes[min(valid_levels)]
    else:
        best_price = Decimal(1)

    value_in_fiat = amount.value * best_price
    lookup_quantity = _to_u64(value_in_fiat)
    if lookup_quantity is None:
        return None, None
    price = _level_at_or_above(quotes, lookup_quantity)
    if price is None:
        return None, None
    return _priced(price, value_in_fiat, conversion, spread, charge_spread)


def value_rate(
    quotes: Quotes | None,
    amount: Money,
    conversion: ConversionInfo,
    spread: Decimal,
) -> tuple[Rate | None, Money | None]:
    """Rate and fees where ``amount`` is already a value in the fiat currency.

    The value is rounded up to whole units and the spread is always charged.
    """
    if quotes is None:
        return None, None
    value_in_fiat = amount.value.quantize(Decimal(1), rounding=ROUND_UP)
    lookup_quantity = _to_u64(value_in_fiat)
    if lookup_quantity is None:
        return None, None
    price = _level_at_or_above(quotes, lookup_quantity)
    if price is None:
        return None, None
    return _priced(price, value_in_fiat, conversion, spread, True)


def validate_quote(quote: QuoteResponse, swap_request: SwapRequest) -> bool:
    """Whether a swap request matches the quote it refers to."""
    return (
        quote.from_currency == swap_request.from_currency
        and quote.to_currency == swap_request.to_currency
        and quote.amount.value == swap_request.amount.value
        and quote.uid == swap_request.uid
    )


def get_better_rate(rate1: Rate | None, rate2: Rate | None, is_linear: bool) -> Rate | None:
    """The rate more favourable to the user: higher when linear, lower otherwise."""
    if rate1 is None:
        return rate2
    if rate2 is None:
        return rate1
    if is_linear:
        return rate1 if rate1.value > rate2.value else rate2
    return rate1 if rate1.value < rate2.value else rate2