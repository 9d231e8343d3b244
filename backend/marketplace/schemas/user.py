from marketplace.schemas.business import BusinessResponse
from marketplace.schemas.common import CamelModel


class UserSummary(CamelModel):
    id: str
    name: str
    username: str
    email: str


class UserResponse(UserSummary):
    is_active: bool
    last_login_at: str | None
    roles: list[str] = []
    created_at: str


class AdminUserDetail(UserResponse):
    businesses: list[BusinessResponse] = []
    job_application_count: int = 0
    event_count: int = 0
    event_registration_count: int = 0


class UserStatusUpdate(CamelModel):
    is_active: bool
