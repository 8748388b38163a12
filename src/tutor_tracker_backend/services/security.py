'''

'''
from typing import Annotated
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from ..common.config import settings
from ..models.token import TokenPayload, SessionUser
from ..common.logger import log
from .session_store import SessionStore, get_session_store

# --- JWT Handling ---
class JWTHandler:
    @staticmethod
    def create_access_token(user: SessionUser) -> str:
        """
        Issues a token bound to one session. The token has no expiry of its own;
        it stops working when that session ends.
        """
        to_encode = {"sub": user.username, "sid": user.logged_in_at.isoformat()}
        encoded_jwt = jwt.encode(
            to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM
        )
        return encoded_jwt

    @staticmethod
    def decode_token(token: str) -> TokenPayload | None:
        try:
            payload = jwt.decode(
                token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
            )
            token_data = TokenPayload(**payload)
            return token_data
        except (JWTError, ValueError) as e: # Catch Pydantic validation errors too
            log.warning(f"JWT decode/validation error: {e}")
            return None

# --- JWT Verification Dependency Function ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

async def verify_token_and_get_session(
    token: Annotated[str, Depends(oauth2_scheme)],
    session_store: Annotated[SessionStore, Depends(get_session_store)]
    ) -> SessionUser:
    """
    Dependency to verify the JWT against the current persisted session.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_data = JWTHandler.decode_token(token)
    if not token_data or not token_data.sub:
        log.warning("JWT decode failed or invalid token structure.")
        raise credentials_exception

    current = session_store.current_user
    if current is None:
        log.warning(f"Token for '{token_data.sub}' presented while no session is active.")
        raise credentials_exception

    if token_data.sub != current.username or token_data.sid != current.logged_in_at:
        log.warning(f"Token for '{token_data.sub}' belongs to an earlier session.")
        raise credentials_exception

    return current
