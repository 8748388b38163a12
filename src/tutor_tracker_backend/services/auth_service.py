'''

'''
from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from .security import JWTHandler
from .session_store import SessionStore, get_session_store
from ..models import token as token_models
from ..common.logger import log

class LoginService:
    """
    Service for handling the admin login and logout.
    Depends on the SessionStore holding the shared session.
    """
    def __init__(
        self,
        session_store: Annotated[SessionStore, Depends(get_session_store)]
    ):
        self.session_store = session_store

    async def login_user(self, form_data: OAuth2PasswordRequestForm) -> token_models.Token:
        log.info(f"Attempting login for user: {form_data.username}")

        if not self.session_store.login(form_data.username, form_data.password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect username or password",
                headers={"WWW-Authenticate": "Bearer"},
            )

        access_token = JWTHandler.create_access_token(self.session_store.current_user)
        return token_models.Token(access_token=access_token, token_type="bearer")

    async def logout_user(self) -> None:
        self.session_store.logout()
