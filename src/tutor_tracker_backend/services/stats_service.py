'''

'''
from typing import Annotated
from fastapi import Depends

from ..database.airtable import AirtableClient, get_airtable_client
from ..common.exceptions import AirtableError, MappingError
from ..common.logger import log
from ..core.finance import compute_dashboard_stats
from ..models import finance as finance_models
from .base_service import AirtableTableService
from .lesson_service import LessonService
from .student_service import StudentService


class StatsService(AirtableTableService):
    """
    Service for the dashboard totals.
    """
    entity_name = "Statistics"

    def __init__(
        self,
        client: Annotated[AirtableClient, Depends(get_airtable_client)],
        student_service: Annotated[StudentService, Depends(StudentService)],
        lesson_service: Annotated[LessonService, Depends(LessonService)]
    ):
        super().__init__(client)
        self.student_service = student_service
        self.lesson_service = lesson_service

    async def get_stats(self) -> finance_models.DashboardStats:
        """
        Fetches students, then lessons, and aggregates them.
        The two reads are separate calls, so the totals are not a consistent snapshot.
        """
        log.info("Computing dashboard statistics")
        try:
            students = await self.student_service._list_students_internal()
            lessons = await self.lesson_service._list_lessons_internal()
        except (AirtableError, MappingError) as e:
            raise self._http_error(e)

        stats = compute_dashboard_stats(students, lessons)
        log.info(f"Dashboard statistics: {stats.model_dump()}")
        return stats
