"""Domain models for mn_generation — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class GeneratedReport:
    id: int                          # BIGSERIAL
    account_id: str
    report_type: str                 # ReportType value
    patient_notes: str               # clinician input, as submitted
    generated_report: str            # provider output
    created_at: datetime | None = None
