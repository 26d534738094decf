"""The bank's ledger of user, fee, liability and dealer accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .core import Account, AccountClass, AccountId, AccountType, Currency, UserId

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class UserAccount:
    """All accounts belonging to one owner."""

    owner: UserId
    accounts: dict[AccountId, Account] = field(default_factory=dict)
    invoices: list[str] = field(default_factory=list)
    last_withdrawal_request: datetime = _EPOCH
    last_deposit_request: datetime = _EPOCH

    def get_default_account(self, currency: Currency, account_type: AccountType | None = None) -> Account:
        """Return the first account matching currency (and type), creating one if none exists."""
        for account in self.accounts.values():
            if account.currency == currency and (account_type is None or account.account_type == account_type):
                return account
        if account_type is None:
            account_type = AccountType.INTERNAL
        account = Account(currency, account_type, AccountClass.CASH)
        self.accounts[account.account_id] = account
        return account


@dataclass
class Ledger:
    """Assets, liabilities and bank-owned accounts."""

    user_accounts: dict[UserId, UserAccount]
    insurance_fund_account: Account
    fee_account: UserAccount
    bank_liabilities: UserAccount
    dealer_accounts: UserAccount
    external_fee_account: Account

    @classmethod
    def create(cls, owner: UserId, dealer: UserId) -> "Ledger":
        return cls(
            user_accounts={},
            insurance_fund_account=Account(Currency.BTC, AccountType.INTERNAL, AccountClass.CASH),
            fee_account=UserAccount(owner),
            bank_liabilities=UserAccount(owner),
            dealer_accounts=UserAccount(dealer),
            external_fee_account=Account(Currency.BTC, AccountType.EXTERNAL, AccountClass.CASH),
        )