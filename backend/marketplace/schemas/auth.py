from marketplace.schemas.common import CamelModel, RequiredStr
from marketplace.schemas.user import UserResponse


class RegisterRequest(CamelModel):
    name: RequiredStr
    username: RequiredStr
    email: RequiredStr
    password: RequiredStr


class LoginRequest(CamelModel):
    email_or_username: RequiredStr
    password: RequiredStr


class RefreshRequest(CamelModel):
    refresh_token: RequiredStr


class AuthSession(CamelModel):
    user: UserResponse
    access_token: str
    refresh_token: str | None = None
