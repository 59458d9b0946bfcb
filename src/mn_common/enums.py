"""Global enums — values must match DB CHECK constraints exactly."""

from enum import Enum


class TransactionKind(str, Enum):
    USAGE = "usage"
    PURCHASE = "purchase"


class CreditPackageId(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class ReportType(str, Enum):
    SOAP = "soap"
    PROGRESS = "progress"
    DISCHARGE = "discharge"


class NoteSection(str, Enum):
    SUBJECTIVE = "subjective"
    OBJECTIVE = "objective"
    ASSESSMENT = "assessment"
    PLAN = "plan"
