# hubx

Money and account types, a bank ledger, and order-book based swap pricing for
a Lightning custodial service that holds balances in BTC and fiat currencies.

## What is inside

- `hubx.core`: currencies (`Currency`, with `dp()`, `parse()` and
  `symbol()`), accounts (`Account`, `AccountType`, `AccountClass`),
  fixed-precision `Money` and `Rate` values that truncate towards zero,
  `Denom`, and `ConversionInfo` for conversions between BTC and a fiat
  currency.
- `hubx.kollider`: exchange-side types: `Side`, `PositionState`,
  `Positions`, `Balances` and `MarkPrice`.
- `hubx.nostr`: `NostrProfile`, loaded from and written to plain dicts with
  `from_dict` and `to_dict`.
- `hubx.ledger`: `UserAccount`, whose `get_default_account` returns the first
  matching account or creates one, and `Ledger.create`, which sets up the
  fee, liability, dealer, insurance fund and external accounts.
- `hubx.messages`: dataclasses for quote, swap, invoice, payment, deposit,
  health and exchange messages, and their error enums.
- `hubx.orderbook`: `OrderBook`, which applies level-2 snapshots and deltas,
  and `build_quotes`, which turns a book into volume-weighted average prices
  for fixed order sizes.
- `hubx.pricing`: spread-adjusted `linear_rate` and `inverse_rate`,
  `cross_rate` and `value_rate` for pricing a conversion from quotes,
  `validate_quote`, and `get_better_rate`.

## Installation

```
pip install .
```

## Examples

Exchanging money at a rate; the rate is inverted when it is quoted the other
way round:

```python
from decimal import Decimal
from hubx.core import Currency, Money, Rate

money = Money(Currency.EUR, Decimal("3.0"))
rate = Rate(Currency.EUR, Currency.USD, Decimal("0.5"))
print(money.exchange(rate).value)   # Decimal('1.5')
```

Pricing a BTC to USD conversion from an order book:

```python
from decimal import Decimal
from hubx.core import ConversionInfo, Currency, Money
from hubx.messages import Level2State
from hubx.orderbook import OrderBook, build_quotes
from hubx.pricing import cross_rate

book = OrderBook("BTCUSD.PERP")
book.apply(Level2State(
    update_type="snapshot",
    symbol="BTCUSD.PERP",
    bids={Decimal(30000): 1000, Decimal(20000): 2000, Decimal(10000): 5000},
    asks={Decimal(40000): 1000, Decimal(50000): 2000, Decimal(60000): 5000},
))
bid_quotes, ask_quotes = build_quotes(book, price_dp=0)

rate, fees = cross_rate(
    bid_quotes,
    Money(Currency.BTC, Decimal("0.0001")),
    ConversionInfo(Currency.BTC, Currency.USD),
    spread=Decimal("0.01"),
    charge_spread=True,
)
```

A BTC to fiat conversion trades against the bid quotes, fiat to BTC against
the ask quotes.

## What the package does not do

The package holds the types and the pricing arithmetic only. It does not
connect to an exchange or a Lightning node, does not place hedging orders or
adjust margin, has no engine that processes incoming messages, stores nothing
in a database, and has no command-line program.

## Running the tests

```
pip install ".[test]"
pytest
```