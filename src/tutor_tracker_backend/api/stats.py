'''
API endpoint for the dashboard statistics.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Depends

from ..models import finance as finance_models
from ..models.token import SessionUser
from ..services.security import verify_token_and_get_session
from ..services.stats_service import StatsService

class StatsAPI:
    """
    A class to encapsulate the endpoint for dashboard statistics.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/stats",
            tags=["Statistics"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route("/", self.get_stats, methods=["GET"], response_model=finance_models.DashboardStats)

    async def get_stats(
        self,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        stats_service: Annotated[StatsService, Depends(StatsService)]
    ) -> Any:
        """
        Total students, total lessons, unpaid lessons and total revenue.
        """
        return await stats_service.get_stats()

# Instantiate the class and export its router
stats_api = StatsAPI()
router = stats_api.router
