"""Domain models for mn_draft — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime

# Columns a client may set on create or change on update
DRAFT_FIELDS = (
    "title",
    "patient_info",
    "subjective",
    "objective",
    "assessment",
    "plan",
    "completed_sections",
)


@dataclass
class SoapDraft:
    id: int                          # BIGSERIAL
    account_id: str                  # owner; drafts are never shared
    title: str
    patient_info: dict[str, str] | None = None
    subjective: str | None = None
    objective: str | None = None
    assessment: str | None = None
    plan: str | None = None
    completed_sections: list[str] = field(default_factory=list)  # NoteSection values
    created_at: datetime | None = None
    updated_at: datetime | None = None
