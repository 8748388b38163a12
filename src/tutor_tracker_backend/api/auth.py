'''
API endpoints for Authentication: login, logout and the current session.
'''
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from ..services.auth_service import LoginService
from ..services.security import verify_token_and_get_session
from ..models import token as token_models
from ..common.logger import log

class AuthRoutes:
    """
    A class to encapsulate all authentication endpoints.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/auth",
            tags=["Authentication"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
            "/login",
            self.login_for_access_token,
            methods=["POST"],
            response_model=token_models.Token,
            summary="Login for Access Token"
        )
        self.router.add_api_route(
            "/logout",
            self.logout,
            methods=["POST"],
            summary="End the current session"
        )
        self.router.add_api_route(
            "/me",
            self.read_current_session,
            methods=["GET"],
            response_model=token_models.SessionUser,
            summary="Current session"
        )

    async def login_for_access_token(
        self,
        form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
        login_service: Annotated[LoginService, Depends(LoginService)]
    ):
        """
        Authenticates the admin and returns an access token.
        Uses OAuth2PasswordRequestForm (username & password fields).
        """
        try:
            token = await login_service.login_user(form_data)
            return token
        except HTTPException as e:
            raise e
        except Exception as e:
            log.error(f"Unexpected error during login: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal server error occurred during login.",
            )

    async def logout(
        self,
        current_user: Annotated[token_models.SessionUser, Depends(verify_token_and_get_session)],
        login_service: Annotated[LoginService, Depends(LoginService)]
    ):
        """
        Ends the shared session. Every token issued for it stops working.
        """
        await login_service.logout_user()
        return {"message": f"User '{current_user.username}' logged out successfully."}

    async def read_current_session(
        self,
        current_user: Annotated[token_models.SessionUser, Depends(verify_token_and_get_session)]
    ) -> token_models.SessionUser:
        return current_user

# Create an instance of the class and export its router
auth_routes = AuthRoutes()
router = auth_routes.router
