"""Money, account and ledger types, order books and swap pricing for BTC and fiat."""

__version__ = "0.1.0"