"""Pydantic schemas for mn_credit API."""

from pydantic import BaseModel, Field

from src.mn_common.cents import cents_to_display
from src.mn_common.datetime_utils import to_iso
from src.mn_credit.domain.models import CreditPackage, CreditTransaction

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PurchaseRequest(BaseModel):
    # Unknown selectors are rejected by get_package with code 2003
    package: str = Field(..., description="Package selector: small, medium or large")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    account_id: str
    credits: int
    total_credits_used: int
    last_purchase_at: str | None = None  # ISO8601 string


class PurchaseResponse(BaseModel):
    package: str
    purchased: int
    price_display: str
    transaction_id: int
    credits: int
    total_credits_used: int


class TransactionItem(BaseModel):
    id: int
    kind: str
    amount: int
    description: str
    created_at: str | None  # ISO8601 string

    @classmethod
    def from_domain(cls, entry: CreditTransaction) -> "TransactionItem":
        return cls(
            id=entry.id,
            kind=entry.kind,
            amount=entry.amount,
            description=entry.description,
            created_at=to_iso(entry.created_at),
        )


class TransactionHistoryResponse(BaseModel):
    items: list[TransactionItem]


class CreditPackageItem(BaseModel):
    id: str
    name: str
    credits: int
    price_cents: int
    price_display: str
    description: str
    popular: bool

    @classmethod
    def from_domain(cls, pkg: CreditPackage) -> "CreditPackageItem":
        return cls(
            id=pkg.id,
            name=pkg.name,
            credits=pkg.credits,
            price_cents=pkg.price_cents,
            price_display=cents_to_display(pkg.price_cents),
            description=pkg.description,
            popular=pkg.popular,
        )


class CreditPackagesResponse(BaseModel):
    items: list[CreditPackageItem]
