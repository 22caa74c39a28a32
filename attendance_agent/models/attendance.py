# attendance_agent/models/attendance.py
import re
from enum import Enum

from pydantic import BaseModel, Field, model_validator

STUDENT_ID_PATTERN = re.compile(r"^\d{4}[A-Z]{3}\d{4}$", re.IGNORECASE)


class AttendanceRecord(BaseModel):
    subject: str
    attended: int = Field(ge=0)
    total: int = Field(ge=0)
    percentage: float = Field(ge=0, le=100)

    @model_validator(mode="after")
    def _attended_within_total(self) -> "AttendanceRecord":
        if self.attended > self.total:
            raise ValueError("attended classes cannot exceed total classes")
        return self


class FailureKind(str, Enum):
    INVALID_FORMAT = "invalid_format"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NOT_FOUND = "not_found"
    SUBJECT_NOT_FOUND = "subject_not_found"


class LookupFailure(BaseModel):
    """A lookup that could not produce records; returned, never raised"""
    kind: FailureKind
    error: str


def is_valid_student_id(student_id: str) -> bool:
    return bool(STUDENT_ID_PATTERN.fullmatch(student_id or ""))
