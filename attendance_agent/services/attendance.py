# attendance_agent/services/attendance.py
import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from attendance_agent.config import LOOKUP_LATENCY_S
from attendance_agent.models.attendance import (
    AttendanceRecord,
    FailureKind,
    LookupFailure,
    is_valid_student_id,
)

logger = logging.getLogger(__name__)

# Reserved ID that simulates a backend outage
OUTAGE_STUDENT_ID = "2021ERR0000"

LookupResult = Union[AttendanceRecord, List[AttendanceRecord], LookupFailure]


def _records(*rows) -> List[AttendanceRecord]:
    return [
        AttendanceRecord(subject=subject, attended=attended, total=total, percentage=percentage)
        for subject, attended, total, percentage in rows
    ]


# Mock IMS database
MOCK_ATTENDANCE: Dict[str, List[AttendanceRecord]] = {
    "2021UCA1234": _records(
        ("Data Structures", 35, 40, 87.5),
        ("Algorithms", 38, 42, 90.4),
        ("Database Management", 30, 40, 75.0),
        ("Operating Systems", 25, 38, 65.8),
        ("Discrete Mathematics", 40, 42, 95.2),
    ),
    "2021UIT5678": _records(
        ("Data Structures", 39, 40, 97.5),
        ("Algorithms", 41, 42, 97.6),
        ("Database Management", 38, 40, 95.0),
        ("Operating Systems", 37, 38, 97.3),
        ("Discrete Mathematics", 35, 42, 83.3),
    ),
}


class AttendanceService:
    """Simulates calls to the IMS attendance database"""

    def __init__(self,
                 records: Optional[Mapping[str, List[AttendanceRecord]]] = None,
                 latency_s: Optional[float] = None):
        self.records = MOCK_ATTENDANCE if records is None else records
        self.latency_s = LOOKUP_LATENCY_S if latency_s is None else latency_s

    async def get_attendance(self, student_id: str, subject: Optional[str] = None) -> LookupResult:
        """Fetch one subject's record, or every record when no subject is given"""
        # Simulate network latency
        await asyncio.sleep(self.latency_s)

        if not is_valid_student_id(student_id):
            return LookupFailure(
                kind=FailureKind.INVALID_FORMAT,
                error="Invalid Student ID format. Please use the format like '2021UCA1234'.",
            )

        normalized_id = student_id.upper()
        if normalized_id == OUTAGE_STUDENT_ID:
            logger.warning("Simulated database outage for %s", normalized_id)
            return LookupFailure(
                kind=FailureKind.SERVICE_UNAVAILABLE,
                error="A database connection error occurred. Please try again later.",
            )

        student_records = self.records.get(normalized_id)
        if not student_records:
            return LookupFailure(
                kind=FailureKind.NOT_FOUND,
                error=f"No attendance records found for student ID '{student_id}'. "
                      "Please check the ID and try again.",
            )

        if subject:
            wanted = subject.lower()
            for record in student_records:
                if record.subject.lower() == wanted:
                    return record
            return LookupFailure(
                kind=FailureKind.SUBJECT_NOT_FOUND,
                error=f"Subject '{subject}' not found for student '{student_id}'. "
                      "Make sure the subject name is correct.",
            )

        return list(student_records)


def to_tool_payload(result: LookupResult) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    """Convert a lookup result into JSON-ready data for the model"""
    if isinstance(result, LookupFailure):
        return {"error": result.error}
    if isinstance(result, list):
        return [record.model_dump() for record in result]
    return result.model_dump()
