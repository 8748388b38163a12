'''
API endpoints for managing Students.
'''
from typing import Annotated, Any, Optional
from fastapi import APIRouter, Depends, Query, status

from ..models import student as student_models
from ..models import lesson as lesson_models
from ..models.token import SessionUser
from ..services.security import verify_token_and_get_session
from ..services.student_service import StudentService
from ..services.lesson_service import LessonService

class StudentsAPI:
    """
    A class to encapsulate endpoints for Students.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/students",
            tags=["Students"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/",
                self.list_students,
                methods=["GET"],
                response_model=list[student_models.StudentRead])
        self.router.add_api_route(
                "/",
                self.create_student,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=student_models.StudentRead)
        self.router.add_api_route(
                "/{student_id}",
                self.get_student,
                methods=["GET"],
                response_model=student_models.StudentRead)
        self.router.add_api_route(
                "/{student_id}",
                self.update_student,
                methods=["PATCH"],
                response_model=student_models.StudentRead)
        self.router.add_api_route(
                "/{student_id}",
                self.delete_student,
                methods=["DELETE"],
                status_code=status.HTTP_204_NO_CONTENT)
        self.router.add_api_route(
                "/{student_id}/lessons",
                self.list_student_lessons,
                methods=["GET"],
                response_model=list[lesson_models.LessonRead])

    async def list_students(
        self,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        student_service: Annotated[StudentService, Depends(StudentService)],
        search: Annotated[Optional[str], Query(description="Filter by name or email")] = None
    ) -> list[Any]:
        """
        Retrieves every student with their lessons and financial totals.
        """
        return await student_service.list_students(search=search)

    async def get_student(
        self,
        student_id: str,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        """
        Retrieves a single student, its lessons, outstanding balance and revenue.
        """
        return await student_service.get_student(student_id)

    async def create_student(
        self,
        student_data: student_models.StudentCreate,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        return await student_service.create_student(student_data)

    async def update_student(
        self,
        student_id: str,
        student_data: student_models.StudentUpdate,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        """
        Updates only the fields present in the request body.
        """
        return await student_service.update_student(student_id, student_data)

    async def delete_student(
        self,
        student_id: str,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        student_service: Annotated[StudentService, Depends(StudentService)]
    ):
        await student_service.delete_student(student_id)

    async def list_student_lessons(
        self,
        student_id: str,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        lesson_service: Annotated[LessonService, Depends(LessonService)]
    ) -> list[Any]:
        return await lesson_service.list_lessons_for_student(student_id)

# Instantiate the class and export its router
students_api = StudentsAPI()
router = students_api.router
