"""InMemoryCreditLedger — process-local implementation of CreditLedgerProtocol.

Intended for tests and single-process demos. State lives on the instance, not
in module globals. Each account has its own asyncio.Lock so the
read-check-write of a debit is serialized even when the task yields inside
it; provisioning has a separate lock so a racing first access grants once.
Not safe across threads or processes.
"""

import asyncio
import dataclasses
import itertools
import logging

from src.mn_common.datetime_utils import utc_now
from src.mn_common.enums import TransactionKind
from src.mn_common.errors import (
    AccountNotFoundError,
    InsufficientCreditsError,
    InvalidCreditAmountError,
)
from src.mn_credit.domain.models import Account, CreditBalance, CreditTransaction

logger = logging.getLogger("mn.credit")


class InMemoryCreditLedger:
    def __init__(self, starting_credits: int = 3) -> None:
        self._starting_credits = starting_credits
        self._accounts: dict[str, Account] = {}
        self._transactions: list[CreditTransaction] = []
        self._locks: dict[str, asyncio.Lock] = {}
        self._provision_lock = asyncio.Lock()
        self._ids = itertools.count(1)

    def _lock_for(self, account_id: str) -> asyncio.Lock:
        lock = self._locks.get(account_id)
        if lock is None:
            lock = self._locks[account_id] = asyncio.Lock()
        return lock

    def _require(self, account_id: str) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def _append(
        self, account_id: str, kind: TransactionKind, amount: int, description: str
    ) -> CreditTransaction:
        entry = CreditTransaction(
            id=next(self._ids),
            account_id=account_id,
            kind=kind.value,
            amount=amount,
            description=description,
            created_at=utc_now(),
        )
        self._transactions.append(entry)
        return entry

    async def get_balance(self, account_id: str) -> CreditBalance:
        async with self._provision_lock:
            account = self._accounts.get(account_id)
            if account is None:
                account = Account(
                    id=account_id,
                    credits=self._starting_credits,
                    total_credits_used=0,
                    created_at=utc_now(),
                )
                self._accounts[account_id] = account
                logger.info("provisioned account=%s", account_id)
        return CreditBalance(
            credits=account.credits, total_credits_used=account.total_credits_used
        )

    async def get_account(self, account_id: str) -> Account | None:
        account = self._accounts.get(account_id)
        return dataclasses.replace(account) if account else None

    async def debit(
        self, account_id: str, amount: int, description: str
    ) -> CreditTransaction:
        if amount <= 0:
            raise InvalidCreditAmountError(amount)
        async with self._lock_for(account_id):
            account = self._require(account_id)
            available = account.credits
            if available < amount:
                logger.warning(
                    "debit refused account=%s required=%d available=%d",
                    account_id,
                    amount,
                    available,
                )
                raise InsufficientCreditsError(amount, available)
            account.credits = available - amount
            account.total_credits_used += amount
            entry = self._append(account_id, TransactionKind.USAGE, -amount, description)
        logger.info(
            "debit account=%s amount=%d balance=%d tx=%d",
            account_id,
            amount,
            account.credits,
            entry.id,
        )
        return entry

    async def credit(
        self, account_id: str, amount: int, description: str
    ) -> CreditTransaction:
        if amount <= 0:
            raise InvalidCreditAmountError(amount)
        async with self._lock_for(account_id):
            account = self._require(account_id)
            account.credits += amount
            account.last_purchase_at = utc_now()
            entry = self._append(account_id, TransactionKind.PURCHASE, amount, description)
        logger.info(
            "credit account=%s amount=%d balance=%d tx=%d",
            account_id,
            amount,
            account.credits,
            entry.id,
        )
        return entry

    async def list_transactions(self, account_id: str) -> list[CreditTransaction]:
        # Appended in creation order; ids break timestamp ties
        return [t for t in self._transactions if t.account_id == account_id]

    async def close(self) -> None:
        return None
