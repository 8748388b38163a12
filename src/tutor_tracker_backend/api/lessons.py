'''
API endpoints for managing Lessons.
'''
from typing import Annotated, Any, Optional
from fastapi import APIRouter, Depends, Query, status

from ..models import lesson as lesson_models
from ..models.token import SessionUser
from ..services.security import verify_token_and_get_session
from ..services.lesson_service import LessonService

class LessonsAPI:
    """
    A class to encapsulate endpoints for Lessons.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/lessons",
            tags=["Lessons"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/",
                self.list_lessons,
                methods=["GET"],
                response_model=list[lesson_models.LessonRead])
        self.router.add_api_route(
                "/",
                self.create_lesson,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=lesson_models.LessonRead)
        self.router.add_api_route(
                "/{lesson_id}",
                self.get_lesson,
                methods=["GET"],
                response_model=lesson_models.LessonRead)
        self.router.add_api_route(
                "/{lesson_id}",
                self.update_lesson,
                methods=["PATCH"],
                response_model=lesson_models.LessonRead)
        self.router.add_api_route(
                "/{lesson_id}",
                self.delete_lesson,
                methods=["DELETE"],
                status_code=status.HTTP_204_NO_CONTENT)

    async def list_lessons(
        self,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        lesson_service: Annotated[LessonService, Depends(LessonService)],
        search: Annotated[Optional[str], Query(description="Filter by student name or subject")] = None,
        limit: Annotated[Optional[int], Query(ge=1, description="Only the N most recent lessons")] = None
    ) -> list[Any]:
        """
        Retrieves lessons newest first, each with its student and payment status.
        """
        return await lesson_service.list_lessons(search=search, limit=limit)

    async def get_lesson(
        self,
        lesson_id: str,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        lesson_service: Annotated[LessonService, Depends(LessonService)]
    ) -> Any:
        return await lesson_service.get_lesson(lesson_id)

    async def create_lesson(
        self,
        lesson_data: lesson_models.LessonCreate,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        lesson_service: Annotated[LessonService, Depends(LessonService)]
    ) -> Any:
        return await lesson_service.create_lesson(lesson_data)

    async def update_lesson(
        self,
        lesson_id: str,
        lesson_data: lesson_models.LessonUpdate,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        lesson_service: Annotated[LessonService, Depends(LessonService)]
    ) -> Any:
        """
        Updates only the fields present in the request body.
        """
        return await lesson_service.update_lesson(lesson_id, lesson_data)

    async def delete_lesson(
        self,
        lesson_id: str,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        lesson_service: Annotated[LessonService, Depends(LessonService)]
    ):
        await lesson_service.delete_lesson(lesson_id)

# Instantiate the class and export its router
lessons_api = LessonsAPI()
router = lessons_api.router
