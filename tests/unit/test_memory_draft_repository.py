"""Unit tests for InMemoryDraftRepository — ownership, partial updates, ordering."""

import pytest

from src.mn_common.errors import DraftNotFoundError
from src.mn_draft.infrastructure.memory import InMemoryDraftRepository


class TestCreate:
    async def test_defaults_for_unset_fields(self, drafts: InMemoryDraftRepository) -> None:
        draft = await drafts.create("acct-1", {"title": "Follow-up visit"})

        assert draft.id == 1
        assert draft.account_id == "acct-1"
        assert draft.title == "Follow-up visit"
        assert draft.subjective is None
        assert draft.completed_sections == []
        assert draft.created_at == draft.updated_at

    async def test_unknown_keys_ignored(self, drafts: InMemoryDraftRepository) -> None:
        draft = await drafts.create("acct-1", {"title": "t", "account_id": "someone-else"})
        assert draft.account_id == "acct-1"

    async def test_caller_cannot_mutate_stored_copy(
        self, drafts: InMemoryDraftRepository
    ) -> None:
        fields = {"title": "t", "completed_sections": ["subjective"]}
        draft = await drafts.create("acct-1", fields)
        fields["completed_sections"].append("plan")
        draft.completed_sections.append("objective")

        stored = await drafts.get("acct-1", draft.id)
        assert stored is not None
        assert stored.completed_sections == ["subjective"]


class TestGetAndList:
    async def test_other_account_sees_nothing(self, drafts: InMemoryDraftRepository) -> None:
        draft = await drafts.create("acct-1", {"title": "t"})
        assert await drafts.get("acct-2", draft.id) is None
        assert await drafts.list_for_account("acct-2") == []

    async def test_most_recently_updated_first(self, drafts: InMemoryDraftRepository) -> None:
        first = await drafts.create("acct-1", {"title": "first"})
        await drafts.create("acct-1", {"title": "second"})
        await drafts.update("acct-1", first.id, {"plan": "rest"})

        titles = [d.title for d in await drafts.list_for_account("acct-1")]
        assert titles == ["first", "second"]


class TestUpdate:
    async def test_only_given_fields_change(self, drafts: InMemoryDraftRepository) -> None:
        draft = await drafts.create(
            "acct-1", {"title": "t", "subjective": "cough", "objective": "afebrile"}
        )

        updated = await drafts.update(
            "acct-1", draft.id, {"objective": "T 38.2", "completed_sections": ["subjective"]}
        )

        assert updated.subjective == "cough"
        assert updated.objective == "T 38.2"
        assert updated.completed_sections == ["subjective"]
        assert updated.updated_at is not None and draft.updated_at is not None
        assert updated.updated_at >= draft.updated_at
        assert updated.created_at == draft.created_at

    async def test_missing_raises(self, drafts: InMemoryDraftRepository) -> None:
        with pytest.raises(DraftNotFoundError):
            await drafts.update("acct-1", 99, {"title": "x"})

    async def test_other_account_raises(self, drafts: InMemoryDraftRepository) -> None:
        draft = await drafts.create("acct-1", {"title": "t"})
        with pytest.raises(DraftNotFoundError):
            await drafts.update("acct-2", draft.id, {"title": "stolen"})
        stored = await drafts.get("acct-1", draft.id)
        assert stored is not None
        assert stored.title == "t"


class TestDelete:
    async def test_delete_then_gone(self, drafts: InMemoryDraftRepository) -> None:
        draft = await drafts.create("acct-1", {"title": "t"})
        await drafts.delete("acct-1", draft.id)
        assert await drafts.get("acct-1", draft.id) is None

    async def test_delete_twice_raises(self, drafts: InMemoryDraftRepository) -> None:
        draft = await drafts.create("acct-1", {"title": "t"})
        await drafts.delete("acct-1", draft.id)
        with pytest.raises(DraftNotFoundError):
            await drafts.delete("acct-1", draft.id)

    async def test_ids_not_reused(self, drafts: InMemoryDraftRepository) -> None:
        first = await drafts.create("acct-1", {"title": "a"})
        await drafts.delete("acct-1", first.id)
        second = await drafts.create("acct-1", {"title": "b"})
        assert second.id > first.id
