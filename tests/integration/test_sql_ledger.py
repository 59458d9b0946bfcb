"""Integration tests for SqlCreditLedger against a real SQL engine (SQLite)."""

import asyncio

import pytest

from src.mn_common.errors import (
    AccountNotFoundError,
    InsufficientCreditsError,
    InvalidCreditAmountError,
)
from src.mn_credit.domain.models import CreditBalance
from src.mn_credit.infrastructure.persistence import SqlCreditLedger


class TestScenarios:
    async def test_new_account_is_provisioned(self, sql_ledger: SqlCreditLedger) -> None:
        assert await sql_ledger.get_balance("acct-1") == CreditBalance(3, 0)

        account = await sql_ledger.get_account("acct-1")
        assert account is not None
        assert account.created_at is not None
        assert account.last_purchase_at is None

    async def test_provisioning_is_idempotent(self, sql_ledger: SqlCreditLedger) -> None:
        await sql_ledger.get_balance("acct-1")
        await sql_ledger.get_balance("acct-1")
        assert await sql_ledger.get_balance("acct-1") == CreditBalance(3, 0)

    async def test_debit_then_refused_debit_then_purchase(
        self, sql_ledger: SqlCreditLedger
    ) -> None:
        await sql_ledger.get_balance("acct-1")

        entry = await sql_ledger.debit("acct-1", 1, "Generated subjective section")
        assert entry.kind == "usage"
        assert entry.amount == -1
        assert await sql_ledger.get_balance("acct-1") == CreditBalance(2, 1)

        with pytest.raises(InsufficientCreditsError) as exc_info:
            await sql_ledger.debit("acct-1", 5, "Generated plan section")
        assert exc_info.value.available == 2
        assert await sql_ledger.get_balance("acct-1") == CreditBalance(2, 1)
        assert len(await sql_ledger.list_transactions("acct-1")) == 1

        purchase = await sql_ledger.credit("acct-1", 15, "Purchased Professional package")
        assert purchase.kind == "purchase"
        assert purchase.amount == 15
        assert await sql_ledger.get_balance("acct-1") == CreditBalance(17, 1)
        account = await sql_ledger.get_account("acct-1")
        assert account is not None
        assert account.last_purchase_at is not None

    async def test_history_is_ascending(self, sql_ledger: SqlCreditLedger) -> None:
        await sql_ledger.get_balance("acct-1")
        await sql_ledger.debit("acct-1", 1, "one")
        await sql_ledger.credit("acct-1", 5, "two")
        await sql_ledger.debit("acct-1", 2, "three")

        entries = await sql_ledger.list_transactions("acct-1")
        assert [e.description for e in entries] == ["one", "two", "three"]
        assert [e.amount for e in entries] == [-1, 5, -2]
        assert all(e.account_id == "acct-1" for e in entries)


class TestErrors:
    async def test_debit_unknown_account(self, sql_ledger: SqlCreditLedger) -> None:
        with pytest.raises(AccountNotFoundError):
            await sql_ledger.debit("ghost", 1, "x")

    async def test_credit_unknown_account(self, sql_ledger: SqlCreditLedger) -> None:
        with pytest.raises(AccountNotFoundError):
            await sql_ledger.credit("ghost", 1, "x")
        assert await sql_ledger.list_transactions("ghost") == []

    async def test_non_positive_amount(self, sql_ledger: SqlCreditLedger) -> None:
        await sql_ledger.get_balance("acct-1")
        with pytest.raises(InvalidCreditAmountError):
            await sql_ledger.debit("acct-1", 0, "x")
        with pytest.raises(InvalidCreditAmountError):
            await sql_ledger.credit("acct-1", -3, "x")


class TestConcurrency:
    async def test_two_concurrent_debits_on_one_credit(
        self, sql_ledger: SqlCreditLedger
    ) -> None:
        await sql_ledger.get_balance("acct-1")
        await sql_ledger.debit("acct-1", 2, "drain to one")

        results = await asyncio.gather(
            sql_ledger.debit("acct-1", 1, "race a"),
            sql_ledger.debit("acct-1", 1, "race b"),
            return_exceptions=True,
        )

        assert sum(isinstance(r, InsufficientCreditsError) for r in results) == 1
        assert sum(not isinstance(r, Exception) for r in results) == 1
        assert await sql_ledger.get_balance("acct-1") == CreditBalance(0, 3)
        assert len(await sql_ledger.list_transactions("acct-1")) == 2

    async def test_concurrent_first_access_grants_once(
        self, sql_ledger: SqlCreditLedger
    ) -> None:
        balances = await asyncio.gather(*(sql_ledger.get_balance("acct-1") for _ in range(5)))
        assert all(b == CreditBalance(3, 0) for b in balances)
