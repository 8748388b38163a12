'''
API models for students.
'''
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from ..core.finance import summarize_lessons
from .finance import StudentFinancials
from .lesson import LessonRead

# --- 1. API Input Models (for POST/PATCH) ---

class StudentCreate(BaseModel):
    """
    Pydantic model for validating the JSON payload when CREATING a new student.
    """
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    grade: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

class StudentUpdate(BaseModel):
    """
    Pydantic model for a partial student update. All fields are optional.
    """
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    grade: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


# --- 2. API Output Models (for GET) ---

class StudentRead(BaseModel):
    """
    Pydantic model for reading a Student.
    `lessons` is attached by the student service and is never stored on the record.
    """
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    grade: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    lessons: list[LessonRead] = Field(default_factory=list)

    @computed_field
    @property
    def financials(self) -> StudentFinancials:
        return summarize_lessons(self.lessons)
