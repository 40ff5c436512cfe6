from typing import Optional

from pydantic import BaseModel


class Credentials(BaseModel):
    email: str
    password: str


class User(BaseModel):
    id: str
    email: Optional[str] = None


class AuthSession(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    user: Optional[User] = None
