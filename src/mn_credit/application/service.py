"""CreditApplicationService — thin composition layer over the ledger.

Every entry point provisions the account first (get_balance), so callers never
see AccountNotFoundError for an id supplied by the gateway.
"""

from src.mn_common.cents import cents_to_display
from src.mn_common.datetime_utils import to_iso
from src.mn_credit.application.schemas import (
    BalanceResponse,
    CreditPackageItem,
    CreditPackagesResponse,
    PurchaseResponse,
    TransactionHistoryResponse,
    TransactionItem,
)
from src.mn_credit.domain.ledger import CreditLedgerProtocol
from src.mn_credit.domain.packages import CREDIT_PACKAGES, get_package


class CreditApplicationService:
    def __init__(self, ledger: CreditLedgerProtocol) -> None:
        self._ledger = ledger

    async def get_balance(self, account_id: str) -> BalanceResponse:
        balance = await self._ledger.get_balance(account_id)
        account = await self._ledger.get_account(account_id)
        return BalanceResponse(
            account_id=account_id,
            credits=balance.credits,
            total_credits_used=balance.total_credits_used,
            last_purchase_at=to_iso(account.last_purchase_at) if account else None,
        )

    async def purchase(self, account_id: str, package_id: str) -> PurchaseResponse:
        pkg = get_package(package_id)
        await self._ledger.get_balance(account_id)
        entry = await self._ledger.credit(account_id, pkg.credits, pkg.purchase_label)
        balance = await self._ledger.get_balance(account_id)
        return PurchaseResponse(
            package=pkg.id,
            purchased=pkg.credits,
            price_display=cents_to_display(pkg.price_cents),
            transaction_id=entry.id,
            credits=balance.credits,
            total_credits_used=balance.total_credits_used,
        )

    async def list_transactions(self, account_id: str) -> TransactionHistoryResponse:
        await self._ledger.get_balance(account_id)
        entries = await self._ledger.list_transactions(account_id)
        return TransactionHistoryResponse(
            items=[TransactionItem.from_domain(e) for e in entries]
        )

    def list_packages(self) -> CreditPackagesResponse:
        return CreditPackagesResponse(
            items=[CreditPackageItem.from_domain(pkg) for pkg in CREDIT_PACKAGES]
        )
