'''
API endpoint reporting whether Airtable is configured and reachable.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Depends

from ..models.diagnostics import AirtableDiagnostics
from ..models.token import SessionUser
from ..services.security import verify_token_and_get_session
from ..services.diagnostics_service import DiagnosticsService

class DiagnosticsAPI:
    def __init__(self):
        self.router = APIRouter(
            prefix="/diagnostics",
            tags=["Diagnostics"]
        )
        self.router.add_api_route("/airtable", self.check_airtable, methods=["GET"], response_model=AirtableDiagnostics)

    async def check_airtable(
        self,
        current_user: Annotated[SessionUser, Depends(verify_token_and_get_session)],
        diagnostics_service: Annotated[DiagnosticsService, Depends(DiagnosticsService)]
    ) -> Any:
        return await diagnostics_service.check_airtable()

diagnostics_api = DiagnosticsAPI()
router = diagnostics_api.router
