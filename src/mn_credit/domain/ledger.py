"""Ledger Protocol — dependency inversion for testability.

Two implementations live in the infrastructure layer: an in-process map
(InMemoryCreditLedger) and a relational store (SqlCreditLedger). Request
handlers only ever see this Protocol.

Contract shared by every implementation:
  - get_balance provisions a missing account with the starting grant, once.
  - debit checks and decrements as one atomic unit per account; a refused
    debit changes nothing and writes no transaction.
  - debit/credit on an unknown account raise AccountNotFoundError.
  - list_transactions is ordered by creation time, oldest first.
"""

from typing import Protocol

from src.mn_credit.domain.models import Account, CreditBalance, CreditTransaction


class CreditLedgerProtocol(Protocol):
    async def get_balance(self, account_id: str) -> CreditBalance: ...

    async def get_account(self, account_id: str) -> Account | None: ...

    async def debit(
        self, account_id: str, amount: int, description: str
    ) -> CreditTransaction: ...

    async def credit(
        self, account_id: str, amount: int, description: str
    ) -> CreditTransaction: ...

    async def list_transactions(self, account_id: str) -> list[CreditTransaction]: ...

    async def close(self) -> None: ...
