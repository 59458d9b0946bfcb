"""Domain models for mn_credit — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Account:
    id: str
    credits: int                     # spendable balance, never negative
    total_credits_used: int          # lifetime usage, never decreases
    created_at: datetime | None = None
    last_purchase_at: datetime | None = None


@dataclass(frozen=True)
class CreditBalance:
    credits: int
    total_credits_used: int


@dataclass(frozen=True)
class CreditTransaction:
    id: int                          # BIGSERIAL
    account_id: str
    kind: str                        # TransactionKind value
    amount: int                      # negative=usage positive=purchase
    description: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class CreditPackage:
    id: str                          # CreditPackageId value
    name: str
    credits: int
    price_cents: int
    description: str
    popular: bool = False

    @property
    def purchase_label(self) -> str:
        return f"Purchased {self.name} package"
