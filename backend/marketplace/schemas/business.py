from marketplace.schemas.common import CamelModel, RequiredStr


class BusinessCreate(CamelModel):
    name: RequiredStr
    logo_url: str | None = None
    website_url: str | None = None
    description: str | None = None


class BusinessResponse(CamelModel):
    id: str
    owner_id: str
    name: str
    logo_url: str | None
    website_url: str | None
    description: str | None
    status: str
    created_at: str
    updated_at: str
