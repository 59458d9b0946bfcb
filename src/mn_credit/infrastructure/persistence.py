"""SqlCreditLedger — relational implementation of CreditLedgerProtocol.

Balance mutations are single conditional UPDATE ... RETURNING statements.
A result of 0 rows means the account is missing or, for debit, the balance is
too small. The balance update and its transaction row are written in the same
DB transaction: both commit or both roll back.

Each public call opens its own session on the injected engine, so one ledger
instance is safe to share across concurrent request tasks. Persistence
errors (SQLAlchemyError) are never caught here beyond the rollback.
"""

import logging

from sqlalchemy import insert, select, text, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.mn_common.database import build_session_factory
from src.mn_common.datetime_utils import utc_now
from src.mn_common.enums import TransactionKind
from src.mn_common.errors import (
    AccountNotFoundError,
    InsufficientCreditsError,
    InternalError,
    InvalidCreditAmountError,
)
from src.mn_credit.domain.models import Account, CreditBalance, CreditTransaction
from src.mn_credit.infrastructure.db_models import CreditAccountORM, CreditTransactionORM

logger = logging.getLogger("mn.credit")

_accounts = CreditAccountORM.__table__
_transactions = CreditTransactionORM.__table__

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

# Concurrent first requests race here; the PK makes the grant happen once.
_PROVISION_SQL = text("""
    INSERT INTO accounts (id, credits, total_credits_used)
    VALUES (:account_id, :credits, 0)
    ON CONFLICT (id) DO NOTHING
""")


def _debit_stmt(account_id: str, amount: int):  # type: ignore[no-untyped-def]
    return (
        update(_accounts)
        .where(_accounts.c.id == account_id, _accounts.c.credits >= amount)
        .values(
            credits=_accounts.c.credits - amount,
            total_credits_used=_accounts.c.total_credits_used + amount,
        )
        .returning(*_accounts.c)
    )


def _credit_stmt(account_id: str, amount: int):  # type: ignore[no-untyped-def]
    return (
        update(_accounts)
        .where(_accounts.c.id == account_id)
        .values(credits=_accounts.c.credits + amount, last_purchase_at=utc_now())
        .returning(*_accounts.c)
    )


def _row_to_account(row: object) -> Account:
    return Account(
        id=row.id,  # type: ignore[attr-defined]
        credits=row.credits,  # type: ignore[attr-defined]
        total_credits_used=row.total_credits_used,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        last_purchase_at=row.last_purchase_at,  # type: ignore[attr-defined]
    )


def _row_to_transaction(row: object) -> CreditTransaction:
    return CreditTransaction(
        id=row.id,  # type: ignore[attr-defined]
        account_id=row.account_id,  # type: ignore[attr-defined]
        kind=row.kind,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class SqlCreditLedger:
    """Concrete ledger — all balance checks atomic at the SQL level."""

    def __init__(self, engine: AsyncEngine, starting_credits: int = 3) -> None:
        self._engine = engine
        self._session_factory = build_session_factory(engine)
        self._starting_credits = starting_credits

    async def _fetch_account(self, db: AsyncSession, account_id: str) -> Account | None:
        result = await db.execute(select(_accounts).where(_accounts.c.id == account_id))
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def _insert_transaction(
        self,
        db: AsyncSession,
        account_id: str,
        kind: TransactionKind,
        amount: int,
        description: str,
    ) -> CreditTransaction:
        result = await db.execute(
            insert(_transactions)
            .values(
                account_id=account_id,
                kind=kind.value,
                amount=amount,
                description=description,
                created_at=utc_now(),
            )
            .returning(*_transactions.c)
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Transaction insert returned no rows — this should never happen")
        return _row_to_transaction(row)

    async def get_balance(self, account_id: str) -> CreditBalance:
        async with self._session_factory() as db:
            try:
                account = await self._fetch_account(db, account_id)
                if account is None:
                    await db.execute(
                        _PROVISION_SQL,
                        {"account_id": account_id, "credits": self._starting_credits},
                    )
                    account = await self._fetch_account(db, account_id)
                    logger.info("provisioned account=%s", account_id)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        if account is None:
            raise InternalError(f"Account provisioning failed for {account_id}")
        return CreditBalance(
            credits=account.credits, total_credits_used=account.total_credits_used
        )

    async def get_account(self, account_id: str) -> Account | None:
        async with self._session_factory() as db:
            return await self._fetch_account(db, account_id)

    async def debit(
        self, account_id: str, amount: int, description: str
    ) -> CreditTransaction:
        if amount <= 0:
            raise InvalidCreditAmountError(amount)
        async with self._session_factory() as db:
            try:
                result = await db.execute(_debit_stmt(account_id, amount))
                row = result.fetchone()
                if row is None:
                    account = await self._fetch_account(db, account_id)
                    if account is None:
                        raise AccountNotFoundError(account_id)
                    raise InsufficientCreditsError(amount, account.credits)
                entry = await self._insert_transaction(
                    db, account_id, TransactionKind.USAGE, -amount, description
                )
                await db.commit()
            except InsufficientCreditsError as exc:
                await db.rollback()
                logger.warning(
                    "debit refused account=%s required=%d available=%d",
                    account_id,
                    exc.required,
                    exc.available,
                )
                raise
            except Exception:
                await db.rollback()
                raise
        logger.info(
            "debit account=%s amount=%d balance=%d tx=%d",
            account_id,
            amount,
            row.credits,
            entry.id,
        )
        return entry

    async def credit(
        self, account_id: str, amount: int, description: str
    ) -> CreditTransaction:
        if amount <= 0:
            raise InvalidCreditAmountError(amount)
        async with self._session_factory() as db:
            try:
                result = await db.execute(_credit_stmt(account_id, amount))
                row = result.fetchone()
                if row is None:
                    raise AccountNotFoundError(account_id)
                entry = await self._insert_transaction(
                    db, account_id, TransactionKind.PURCHASE, amount, description
                )
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        logger.info(
            "credit account=%s amount=%d balance=%d tx=%d",
            account_id,
            amount,
            row.credits,
            entry.id,
        )
        return entry

    async def list_transactions(self, account_id: str) -> list[CreditTransaction]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(_transactions)
                .where(_transactions.c.account_id == account_id)
                .order_by(_transactions.c.created_at.asc(), _transactions.c.id.asc())
            )
            return [_row_to_transaction(row) for row in result.fetchall()]

    async def close(self) -> None:
        await self._engine.dispose()
