'''

'''
from typing import Optional

from ..database.mapper import (
    LessonFields,
    lesson_from_record,
    lesson_to_fields,
    student_from_record,
)
from ..common.exceptions import AirtableError, MappingError
from ..common.config import settings
from ..common.logger import log
from ..models import lesson as lesson_models
from .base_service import AirtableTableService


def sort_newest_first(lessons: list[lesson_models.LessonRead]) -> list[lesson_models.LessonRead]:
    return sorted(lessons, key=lambda lesson: lesson.date, reverse=True)


class LessonService(AirtableTableService):
    """
    Service for creating, reading, updating and deleting lessons.
    """
    table = settings.LESSONS_TABLE
    entity_name = "Lesson"

    # --- 1. Internal Data-Fetching (raw errors) ---

    async def _list_lessons_internal(self) -> list[lesson_models.LessonRead]:
        """Every lesson, newest first, without the student attached."""
        records = await self.client.list_records(
            self.table,
            sort=[(LessonFields.DATE, "desc")]
        )
        return sort_newest_first([lesson_from_record(record) for record in records])

    async def _student_names_internal(self) -> dict[str, str]:
        records = await self.client.list_records(settings.STUDENTS_TABLE)
        students = [student_from_record(record) for record in records]
        return {student.id: student.name for student in students}

    # --- 2. API-Facing Methods ---

    async def list_lessons(
        self,
        search: Optional[str] = None,
        limit: Optional[int] = None
    ) -> list[lesson_models.LessonRead]:
        """
        All lessons, newest first, each with its student attached.
        `search` matches the student name or the subject; `limit` keeps the N most recent.
        """
        log.info(f"Listing lessons (search={search!r}, limit={limit})")
        try:
            lessons = await self._list_lessons_internal()
            names = await self._student_names_internal()
        except (AirtableError, MappingError) as e:
            raise self._http_error(e)

        for lesson in lessons:
            name = names.get(lesson.student_id)
            if name is not None:
                lesson.student = lesson_models.LessonStudent(id=lesson.student_id, name=name)

        if search:
            term = search.lower()
            lessons = [
                lesson for lesson in lessons
                if (lesson.student and term in lesson.student.name.lower())
                or (lesson.subject and term in lesson.subject.lower())
            ]
        if limit is not None:
            lessons = lessons[:limit]
        return lessons

    async def list_lessons_for_student(self, student_id: str) -> list[lesson_models.LessonRead]:
        """Lessons linked to one student, newest first."""
        log.info(f"Listing lessons for student {student_id}")
        try:
            lessons = await self._list_lessons_internal()
        except (AirtableError, MappingError) as e:
            raise self._http_error(e)
        return [lesson for lesson in lessons if lesson.student_id == student_id]

    async def get_lesson(self, lesson_id: str) -> lesson_models.LessonRead:
        log.info(f"Fetching lesson {lesson_id}")
        try:
            record = await self.client.get_record(self.table, lesson_id)
            return lesson_from_record(record)
        except (AirtableError, MappingError) as e:
            raise self._http_error(e, record_id=lesson_id)

    async def create_lesson(self, lesson_data: lesson_models.LessonCreate) -> lesson_models.LessonRead:
        log.info(f"Creating lesson for student {lesson_data.student_id} on {lesson_data.date}")
        fields = lesson_to_fields(lesson_data.model_dump())
        try:
            record = await self.client.create_record(self.table, fields)
            lesson = lesson_from_record(record)
        except (AirtableError, MappingError) as e:
            raise self._http_error(e)
        log.info(f"Created lesson {lesson.id} (reference {lesson.reference})")
        return lesson

    async def update_lesson(
        self,
        lesson_id: str,
        lesson_data: lesson_models.LessonUpdate
    ) -> lesson_models.LessonRead:
        fields = lesson_to_fields(lesson_data)
        if not fields:
            log.info(f"Update for lesson {lesson_id} carried no fields; returning it unchanged.")
            return await self.get_lesson(lesson_id)

        log.info(f"Updating lesson {lesson_id}: {sorted(fields)}")
        try:
            record = await self.client.update_record(self.table, lesson_id, fields)
            return lesson_from_record(record)
        except (AirtableError, MappingError) as e:
            raise self._http_error(e, record_id=lesson_id)

    async def delete_lesson(self, lesson_id: str) -> None:
        log.info(f"Deleting lesson {lesson_id}")
        try:
            await self.client.delete_record(self.table, lesson_id)
        except AirtableError as e:
            raise self._http_error(e, record_id=lesson_id)
