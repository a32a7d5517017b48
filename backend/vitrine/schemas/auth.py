"""Login / register schemas."""

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Body of POST /api/auth/login and POST /api/auth/register."""
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1, max_length=128)


class LoginResponse(BaseModel):
    """Successful login: `auth` is always true, `token` is the bearer token."""
    auth: bool = True
    token: str
