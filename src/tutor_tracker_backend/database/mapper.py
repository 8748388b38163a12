'''
Record Mapper: converts between Airtable records and the typed API models.

An Airtable record looks like {"id": "rec...", "fields": {"Name": ..., ...}}.
Empty fields are simply absent from "fields", unchecked checkboxes included.
'''
import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel

from ..common.exceptions import MappingError
from ..models.lesson import LessonRead
from ..models.student import StudentRead


class StudentFields:
    """Airtable column names of the Students table."""
    NAME = "Name"
    EMAIL = "Email"
    PHONE = "Phone"
    GRADE = "Grade"
    GUARDIAN_NAME = "Guardian Name"
    GUARDIAN_PHONE = "Guardian Phone"


class LessonFields:
    """Airtable column names of the Lessons table."""
    STUDENT = "Student"
    DATE = "Date"
    DURATION = "Duration"
    SUBJECT = "Subject"
    NOTES = "Notes"
    IS_PAID = "Is Paid"
    AMOUNT_DUE = "Amount Due"
    AMOUNT_PAID = "Amount Paid"
    # Autonumber/formula column; read-only
    REFERENCE = "Reference"


# model attribute -> Airtable column, for writes
STUDENT_FIELD_MAP = {
    "name": StudentFields.NAME,
    "email": StudentFields.EMAIL,
    "phone": StudentFields.PHONE,
    "grade": StudentFields.GRADE,
    "guardian_name": StudentFields.GUARDIAN_NAME,
    "guardian_phone": StudentFields.GUARDIAN_PHONE,
}

LESSON_FIELD_MAP = {
    "student_id": LessonFields.STUDENT,
    "date": LessonFields.DATE,
    "duration": LessonFields.DURATION,
    "subject": LessonFields.SUBJECT,
    "notes": LessonFields.NOTES,
    "is_paid": LessonFields.IS_PAID,
    "amount_due": LessonFields.AMOUNT_DUE,
    "amount_paid": LessonFields.AMOUNT_PAID,
}

READ_ONLY_LESSON_KEYS = {"reference", LessonFields.REFERENCE}

# Never cleared on write: a record without them cannot be read back
REQUIRED_STUDENT_KEYS = {"name"}
REQUIRED_LESSON_KEYS = {"student_id", "date", "duration"}


# --- Coercion helpers ---

def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value)
    return text if text.strip() else None

def _optional_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None

def _parse_date(value: Any) -> Optional[datetime.date]:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.date.fromisoformat(text[:10])
    except ValueError:
        return None

def _parse_duration(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        minutes = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not minutes.is_finite() or minutes != minutes.to_integral_value():
        return None
    return int(minutes)

def _linked_id(value: Any) -> Optional[str]:
    """Linked-record columns come back as a list of record ids."""
    if isinstance(value, list):
        value = value[0] if value else None
    return value or None


# --- Read: Airtable -> models ---

def _split_record(record: dict) -> tuple[Optional[str], dict]:
    record_id = record.get("id")
    fields = record.get("fields") or {}
    return record_id, fields

def student_from_record(record: dict) -> StudentRead:
    """
    Builds a StudentRead from an Airtable record. Lessons are not attached here.
    Raises MappingError when the student has no name.
    """
    record_id, fields = _split_record(record)
    if not record_id:
        raise MappingError(None, "id", entity="Student")

    name = _optional_str(fields.get(StudentFields.NAME))
    if name is None:
        raise MappingError(record_id, StudentFields.NAME, entity="Student")

    return StudentRead(
        id=record_id,
        name=name,
        email=_optional_str(fields.get(StudentFields.EMAIL)),
        phone=_optional_str(fields.get(StudentFields.PHONE)),
        grade=_optional_str(fields.get(StudentFields.GRADE)),
        guardian_name=_optional_str(fields.get(StudentFields.GUARDIAN_NAME)),
        guardian_phone=_optional_str(fields.get(StudentFields.GUARDIAN_PHONE)),
    )

def lesson_from_record(record: dict) -> LessonRead:
    """
    Builds a LessonRead from an Airtable record.
    Raises MappingError when the student link, date or duration is missing or unusable.
    Unparseable amounts are read as absent.
    """
    record_id, fields = _split_record(record)
    if not record_id:
        raise MappingError(None, "id", entity="Lesson")

    student_id = _linked_id(fields.get(LessonFields.STUDENT))
    if student_id is None:
        raise MappingError(record_id, LessonFields.STUDENT, entity="Lesson")

    raw_date = fields.get(LessonFields.DATE)
    if raw_date is None:
        raise MappingError(record_id, LessonFields.DATE, entity="Lesson")
    lesson_date = _parse_date(raw_date)
    if lesson_date is None:
        raise MappingError(record_id, LessonFields.DATE, f"has an invalid date {raw_date!r}", entity="Lesson")

    raw_duration = fields.get(LessonFields.DURATION)
    if raw_duration is None:
        raise MappingError(record_id, LessonFields.DURATION, entity="Lesson")
    duration = _parse_duration(raw_duration)
    if duration is None or duration <= 0:
        raise MappingError(record_id, LessonFields.DURATION, f"is not a positive whole number ({raw_duration!r})", entity="Lesson")

    return LessonRead(
        id=record_id,
        student_id=student_id,
        date=lesson_date,
        duration=duration,
        subject=_optional_str(fields.get(LessonFields.SUBJECT)),
        notes=_optional_str(fields.get(LessonFields.NOTES)),
        amount_due=_optional_decimal(fields.get(LessonFields.AMOUNT_DUE)),
        amount_paid=_optional_decimal(fields.get(LessonFields.AMOUNT_PAID)),
        is_paid=bool(fields.get(LessonFields.IS_PAID, False)),
        reference=_optional_str(fields.get(LessonFields.REFERENCE)),
    )


# --- Write: models -> Airtable ---

def _payload_dict(data: BaseModel | dict) -> dict:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True)
    return dict(data)

def _drop_blank_required(payload: dict, required: set[str]) -> dict:
    for key in required:
        value = payload.get(key)
        if key in payload and (value is None or (isinstance(value, str) and not value.strip())):
            payload.pop(key)
    return payload

def student_to_fields(data: BaseModel | dict) -> dict:
    """
    Airtable `fields` for a student create/update. Only keys present in the
    payload are written; unknown keys are ignored. A null or blank name is
    dropped rather than sent.
    """
    payload = _drop_blank_required(_payload_dict(data), REQUIRED_STUDENT_KEYS)
    fields = {}
    for key, column in STUDENT_FIELD_MAP.items():
        if key in payload:
            value = payload[key]
            fields[column] = "" if value is None else str(value)
    return fields

def _wire_value(key: str, value: Any) -> Any:
    if key == "is_paid":
        return bool(value)
    if value is None:
        return None
    if key == "student_id":
        return [value]
    if key == "date":
        return value.isoformat() if isinstance(value, datetime.date) else str(value)
    if key in ("amount_due", "amount_paid"):
        # JSON has no decimal type
        return float(value)
    if key == "duration":
        return int(value)
    return value

def lesson_to_fields(data: BaseModel | dict) -> dict:
    """
    Airtable `fields` for a lesson create/update. The read-only reference is
    dropped silently; a None amount clears the cell. Null student, date or
    duration values are dropped, never sent.
    """
    payload = _drop_blank_required(_payload_dict(data), REQUIRED_LESSON_KEYS)
    for key in READ_ONLY_LESSON_KEYS:
        payload.pop(key, None)
    fields = {}
    for key, column in LESSON_FIELD_MAP.items():
        if key in payload:
            fields[column] = _wire_value(key, payload[key])
    return fields
