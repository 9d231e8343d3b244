from marketplace.schemas.common import CamelModel


class ContributorApply(CamelModel):
    bio: str | None = None
    social_links: dict[str, str] | None = None


class ContributorResponse(CamelModel):
    id: str
    user_id: str
    status: str
    bio: str | None
    social_links: dict[str, str] | None
    created_at: str
