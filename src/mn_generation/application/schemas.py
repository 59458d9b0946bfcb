"""Pydantic schemas for mn_generation API."""

from pydantic import BaseModel, Field

from src.mn_common.datetime_utils import to_iso
from src.mn_common.enums import NoteSection, ReportType
from src.mn_generation.domain.models import GeneratedReport


class GenerateSectionRequest(BaseModel):
    section: NoteSection
    content: str = Field(..., min_length=1, max_length=5000)
    patient_info: dict[str, str] | None = None
    report_type: ReportType = ReportType.SOAP


class ReviewReportRequest(BaseModel):
    subjective: str = Field(..., max_length=5000)
    objective: str = Field(..., max_length=5000)
    assessment: str = Field(..., max_length=5000)
    plan: str = Field(..., max_length=5000)


class GenerateSectionResponse(BaseModel):
    section: str
    content: str
    credits_used: int
    credits_remaining: int


class ReviewReportResponse(BaseModel):
    review: str
    credits_used: int
    credits_remaining: int


class GenerateReportRequest(BaseModel):
    report_type: ReportType
    patient_notes: str = Field(..., min_length=1, max_length=2000)


class GenerateReportResponse(BaseModel):
    report_id: int
    report_type: str
    report: str
    credits_used: int
    credits_remaining: int


class ReportItem(BaseModel):
    id: int
    report_type: str
    patient_notes: str
    generated_report: str
    created_at: str | None  # ISO8601 string

    @classmethod
    def from_domain(cls, report: GeneratedReport) -> "ReportItem":
        return cls(
            id=report.id,
            report_type=report.report_type,
            patient_notes=report.patient_notes,
            generated_report=report.generated_report,
            created_at=to_iso(report.created_at),
        )


class ReportListResponse(BaseModel):
    items: list[ReportItem]
