'''

'''
from collections import defaultdict
from typing import Optional, Annotated
from fastapi import Depends

from ..database.airtable import AirtableClient, get_airtable_client
from ..database.mapper import student_from_record, student_to_fields
from ..common.exceptions import AirtableError, MappingError
from ..common.config import settings
from ..common.logger import log
from ..models import student as student_models
from .base_service import AirtableTableService
from .lesson_service import LessonService


class StudentService(AirtableTableService):
    """
    Service for managing students. Reads attach each student's lessons,
    which are fetched from the Lessons table rather than stored on the student.
    """
    table = settings.STUDENTS_TABLE
    entity_name = "Student"

    def __init__(
        self,
        client: Annotated[AirtableClient, Depends(get_airtable_client)],
        lesson_service: Annotated[LessonService, Depends(LessonService)]
    ):
        super().__init__(client)
        self.lesson_service = lesson_service

    # --- 1. Internal Data-Fetching (raw errors) ---

    async def _list_students_internal(self) -> list[student_models.StudentRead]:
        records = await self.client.list_records(self.table)
        students = [student_from_record(record) for record in records]
        return sorted(students, key=lambda student: student.name.lower())

    # --- 2. API-Facing Methods ---

    async def list_students(self, search: Optional[str] = None) -> list[student_models.StudentRead]:
        """
        All students sorted by name, each with its lessons (newest first).
        `search` matches the name or the email, case-insensitively.
        """
        log.info(f"Listing students (search={search!r})")
        try:
            students = await self._list_students_internal()
            lessons = await self.lesson_service._list_lessons_internal()
        except (AirtableError, MappingError) as e:
            raise self._http_error(e)

        lessons_by_student = defaultdict(list)
        for lesson in lessons:
            lessons_by_student[lesson.student_id].append(lesson)
        for student in students:
            student.lessons = lessons_by_student.get(student.id, [])

        if search:
            term = search.lower()
            students = [
                student for student in students
                if term in student.name.lower()
                or (student.email and term in student.email.lower())
            ]
        log.info(f"Returning {len(students)} students with {len(lessons)} lessons in total.")
        return students

    async def get_student(self, student_id: str) -> student_models.StudentRead:
        """One student with its lessons attached."""
        log.info(f"Fetching student {student_id}")
        try:
            record = await self.client.get_record(self.table, student_id)
            student = student_from_record(record)
        except (AirtableError, MappingError) as e:
            raise self._http_error(e, record_id=student_id)

        student.lessons = await self.lesson_service.list_lessons_for_student(student_id)
        return student

    async def create_student(self, student_data: student_models.StudentCreate) -> student_models.StudentRead:
        log.info(f"Creating student '{student_data.name}'")
        fields = student_to_fields(student_data.model_dump())
        try:
            record = await self.client.create_record(self.table, fields)
            student = student_from_record(record)
        except (AirtableError, MappingError) as e:
            raise self._http_error(e)
        log.info(f"Created student {student.id}")
        return student

    async def update_student(
        self,
        student_id: str,
        student_data: student_models.StudentUpdate
    ) -> student_models.StudentRead:
        fields = student_to_fields(student_data)
        if not fields:
            log.info(f"Update for student {student_id} carried no fields; returning it unchanged.")
            return await self.get_student(student_id)

        log.info(f"Updating student {student_id}: {sorted(fields)}")
        try:
            record = await self.client.update_record(self.table, student_id, fields)
            student = student_from_record(record)
        except (AirtableError, MappingError) as e:
            raise self._http_error(e, record_id=student_id)

        student.lessons = await self.lesson_service.list_lessons_for_student(student_id)
        return student

    async def delete_student(self, student_id: str) -> None:
        """
        Deletes the student record only. Lessons linked to it are left in place.
        """
        log.info(f"Deleting student {student_id}")
        try:
            await self.client.delete_record(self.table, student_id)
        except AirtableError as e:
            raise self._http_error(e, record_id=student_id)
