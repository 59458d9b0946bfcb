"""Pydantic schemas for mn_draft API."""

from pydantic import BaseModel, Field, field_validator

from src.mn_common.datetime_utils import to_iso
from src.mn_common.enums import NoteSection
from src.mn_draft.domain.models import SoapDraft

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class SaveDraftRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    patient_info: dict[str, str] | None = None
    subjective: str | None = Field(None, max_length=5000)
    objective: str | None = Field(None, max_length=5000)
    assessment: str | None = Field(None, max_length=5000)
    plan: str | None = Field(None, max_length=5000)
    completed_sections: list[NoteSection] = Field(default_factory=list)


class UpdateDraftRequest(BaseModel):
    """Partial update: only fields present in the body are changed."""

    title: str | None = Field(None, min_length=1, max_length=200)
    patient_info: dict[str, str] | None = None
    subjective: str | None = Field(None, max_length=5000)
    objective: str | None = Field(None, max_length=5000)
    assessment: str | None = Field(None, max_length=5000)
    plan: str | None = Field(None, max_length=5000)
    completed_sections: list[NoteSection] | None = None

    @field_validator("title", "completed_sections")
    @classmethod
    def not_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class DraftResponse(BaseModel):
    id: int
    title: str
    patient_info: dict[str, str] | None
    subjective: str | None
    objective: str | None
    assessment: str | None
    plan: str | None
    completed_sections: list[str]
    created_at: str | None  # ISO8601 string
    updated_at: str | None  # ISO8601 string

    @classmethod
    def from_domain(cls, draft: SoapDraft) -> "DraftResponse":
        return cls(
            id=draft.id,
            title=draft.title,
            patient_info=draft.patient_info,
            subjective=draft.subjective,
            objective=draft.objective,
            assessment=draft.assessment,
            plan=draft.plan,
            completed_sections=draft.completed_sections,
            created_at=to_iso(draft.created_at),
            updated_at=to_iso(draft.updated_at),
        )


class DraftListResponse(BaseModel):
    items: list[DraftResponse]
