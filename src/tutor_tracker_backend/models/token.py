'''

'''
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

class Token(BaseModel):
    access_token: str
    token_type: str

class TokenPayload(BaseModel):
    sub: str # 'sub' is standard JWT claim for subject (the admin username)
    sid: datetime # loggedInAt of the session the token was issued for

class SessionUser(BaseModel):
    """
    The single persisted login. Serialized with camelCase keys so the
    stored entry reads {"username": ..., "loggedInAt": ...}.
    """
    username: str
    logged_in_at: datetime = Field(alias="loggedInAt")

    model_config = ConfigDict(populate_by_name=True)
