from decimal import Decimal

import pytest

from hubx.core import ConversionInfo, Currency, Money, Rate
from hubx.messages import Level2State, QuoteResponse, SwapRequest
from hubx.orderbook import OrderBook, build_quotes
from hubx.pricing import (
    cross_rate,
    get_better_rate,
    inverse_rate,
    linear_rate,
    validate_quote,
    value_rate,
)

SPREAD = Decimal("0.01")


@pytest.fixture
def usd_quotes():
    book = OrderBook("BTCUSD.PERP")
    book.apply(
        Level2State(
            update_type="snapshot",
            symbol="BTCUSD.PERP",
            bids={Decimal(10000): 5000, Decimal(20000): 2000, Decimal(30000): 1000},
            asks={Decimal(40000): 1000, Decimal(50000): 2000, Decimal(60000): 5000},
        )
    )
    return build_quotes(book, 0)


def btc_to_usd():
    return ConversionInfo(Currency.BTC, Currency.USD)


def usd_to_btc():
    return ConversionInfo(Currency.USD, Currency.BTC)


def test_linear_rate_charges_half_spread():
    assert linear_rate(Decimal(30000), SPREAD, True) == Decimal("29850.0")
    assert linear_rate(Decimal(30000), SPREAD, False) == Decimal(30000)


def test_inverse_rate_charges_half_spread():
    price = Decimal(40000)
    assert inverse_rate(price, SPREAD, True) == Decimal(1) / Decimal(40200)
    assert inverse_rate(price, SPREAD, False) == Decimal(1) / linear_rate(price, SPREAD, False)
    assert inverse_rate(price, SPREAD, True) < inverse_rate(price, SPREAD, False)


def test_cross_rate_first_bucket(usd_quotes):
    bids, asks = usd_quotes
    amount = Money(Currency.BTC, Decimal("0.0001"))
    rate, fees = cross_rate(bids, amount, btc_to_usd(), SPREAD, True)
    assert rate.value == Decimal("29850.0")
    assert rate.base is Currency.BTC and rate.quote is Currency.USD
    assert fees.currency is Currency.USD
    assert fees.value == amount.value * Decimal(30000) - amount.value * rate.value

    rate, fees = cross_rate(asks, Money(Currency.USD, Decimal("9.0")), usd_to_btc(), SPREAD, True)
    assert rate.value == Rate.normalized_value(Decimal(1) / Decimal("40200.0"))
    assert fees.currency is Currency.BTC
    assert fees.value > 0


def test_cross_rate_not_first_bucket(usd_quotes):
    bids, asks = usd_quotes
    rate, _ = cross_rate(bids, Money(Currency.BTC, Decimal("0.0875")), btc_to_usd(), SPREAD, True)
    assert rate.value == Decimal("23217.33")
    rate, _ = cross_rate(asks, Money(Currency.USD, Decimal(3500)), usd_to_btc(), SPREAD, True)
    assert rate.value == Rate.normalized_value(Decimal(1) / Decimal(52260))


def test_cross_rate_without_spread_has_no_fees(usd_quotes):
    bids, _ = usd_quotes
    rate, fees = cross_rate(bids, Money(Currency.BTC, Decimal("0.0001")), btc_to_usd(), SPREAD, False)
    assert rate.value == Decimal(30000)
    assert fees.value == 0


def test_cross_rate_no_bucket(usd_quotes):
    bids, asks = usd_quotes
    assert cross_rate(asks, Money(Currency.USD, Decimal(100000)), usd_to_btc(), SPREAD, True) == (None, None)
    assert cross_rate(bids, Money(Currency.BTC, Decimal(10)), btc_to_usd(), SPREAD, True) == (None, None)


def test_cross_rate_missing_quotes():
    amount = Money(Currency.BTC, Decimal("0.001"))
    assert cross_rate(None, amount, btc_to_usd(), SPREAD, True) == (None, None)
    assert cross_rate({}, amount, btc_to_usd(), SPREAD, True) == (None, None)


def test_value_rate_uses_value_directly(usd_quotes):
    bids, asks = usd_quotes
    rate, fees = value_rate(bids, Money(Currency.USD, Decimal("9.2")), btc_to_usd(), SPREAD)
    assert rate.value == Decimal("29850.0")
    assert fees.currency is Currency.USD
    rate, _ = value_rate(asks, Money(Currency.USD, Decimal(3500)), usd_to_btc(), SPREAD)
    assert rate.value == Rate.normalized_value(Decimal(1) / Decimal(52260))


def test_value_rate_rounds_value_up(usd_quotes):
    bids, _ = usd_quotes
    conversion = btc_to_usd()
    rounded, _ = value_rate(bids, Money(Currency.USD, Decimal("2000.5")), conversion, SPREAD)
    next_level, _ = value_rate(bids, Money(Currency.USD, Decimal(3000)), conversion, SPREAD)
    exact, _ = value_rate(bids, Money(Currency.USD, Decimal(2000)), conversion, SPREAD)
    assert rounded == next_level
    assert rounded.value < exact.value


def test_value_rate_out_of_book(usd_quotes):
    _, asks = usd_quotes
    assert value_rate(asks, Money(Currency.USD, Decimal(100000)), usd_to_btc(), SPREAD) == (None, None)
    assert value_rate(None, Money(Currency.USD, Decimal(1)), usd_to_btc(), SPREAD) == (None, None)


def _quote(uid=1003, amount="0.0875", to_currency=Currency.USD):
    return QuoteResponse(
        req_id=None,
        uid=uid,
        amount=Money(Currency.BTC, Decimal(amount)),
        from_currency=Currency.BTC,
        to_currency=to_currency,
        quote_id=1,
    )


def _swap(uid=1003, amount="0.0875", to_currency=Currency.USD):
    return SwapRequest(
        uid=uid,
        amount=Money(Currency.BTC, Decimal(amount)),
        from_currency=Currency.BTC,
        to_currency=to_currency,
        quote_id=1,
    )


def test_validate_quote_accepts_matching_request():
    assert validate_quote(_quote(), _swap()) is True


@pytest.mark.parametrize(
    "swap",
    [_swap(uid=728), _swap(amount="0.555"), _swap(to_currency=Currency.GBP)],
)
def test_validate_quote_rejects_modified_request(swap):
    assert validate_quote(_quote(), swap) is False


def test_get_better_rate():
    low = Rate(Currency.BTC, Currency.USD, Decimal(100))
    high = Rate(Currency.BTC, Currency.USD, Decimal(200))
    assert get_better_rate(low, high, True) == high
    assert get_better_rate(high, low, True) == high
    assert get_better_rate(low, high, False) == low
    assert get_better_rate(high, low, False) == low
    assert get_better_rate(low, None, True) == low
    assert get_better_rate(None, high, False) == high
    assert get_better_rate(None, None, True) is None