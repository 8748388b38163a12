'''
API models for lessons.
'''
import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from ..core.finance import classify_payment
from .finance import PaymentSummary

# --- 1. API Input Models (for POST/PATCH) ---

class LessonCreate(BaseModel):
    """
    Validates the request body for creating a lesson.
    The display reference is assigned by Airtable and is not accepted here.
    """
    student_id: str = Field(..., min_length=1)
    date: datetime.date
    duration: int = Field(..., gt=0, description="Duration in minutes")
    subject: Optional[str] = None
    notes: Optional[str] = None
    amount_due: Optional[Decimal] = Field(None, ge=0)
    amount_paid: Optional[Decimal] = Field(None, ge=0)
    is_paid: bool = False

    model_config = ConfigDict(extra="ignore")

class LessonUpdate(BaseModel):
    """
    Partial update of a lesson. Only the fields sent are written.
    """
    student_id: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime.date] = None
    duration: Optional[int] = Field(None, gt=0)
    subject: Optional[str] = None
    notes: Optional[str] = None
    amount_due: Optional[Decimal] = Field(None, ge=0)
    amount_paid: Optional[Decimal] = Field(None, ge=0)
    is_paid: Optional[bool] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("student_id", "date", "duration")
    @classmethod
    def required_fields_not_null(cls, value):
        # Omit the field to leave it unchanged; null would clear a required cell
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


# --- 2. API Output Models (for GET) ---

class LessonStudent(BaseModel):
    """A lean representation of the student a lesson belongs to."""
    id: str
    name: str

class LessonRead(BaseModel):
    """
    The API model for a lesson. The payment summary is derived on every read.
    """
    id: str
    student_id: str
    date: datetime.date
    duration: int
    subject: Optional[str] = None
    notes: Optional[str] = None
    amount_due: Optional[Decimal] = None
    amount_paid: Optional[Decimal] = None
    is_paid: bool = False
    reference: Optional[str] = None

    # Attached by the lesson service when listing across students
    student: Optional[LessonStudent] = None

    @computed_field
    @property
    def payment(self) -> PaymentSummary:
        return classify_payment(self.amount_due, self.amount_paid, self.is_paid)
