from datetime import datetime

from marketplace.schemas.common import CamelModel, RequiredStr


class JobCreate(CamelModel):
    business_id: RequiredStr
    title: RequiredStr
    location_type: RequiredStr
    employment_type: RequiredStr
    description: RequiredStr
    location_text: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    currency: str | None = None
    requirements: str | None = None
    application_option_platform: bool = True
    application_option_external: bool = False
    external_apply_url: str | None = None
    external_apply_email: str | None = None
    expires_at: datetime | None = None


class JobUpdate(CamelModel):
    title: str | None = None
    location_type: str | None = None
    location_text: str | None = None
    employment_type: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    currency: str | None = None
    description: str | None = None
    requirements: str | None = None
    application_option_platform: bool | None = None
    application_option_external: bool | None = None
    external_apply_url: str | None = None
    external_apply_email: str | None = None
    expires_at: datetime | None = None


class JobResponse(CamelModel):
    id: str
    business_id: str
    business_name: str | None = None
    title: str
    slug: str
    status: str
    location_type: str
    location_text: str | None
    employment_type: str
    salary_min: int | None
    salary_max: int | None
    currency: str | None
    description: str
    requirements: str | None
    application_option_platform: bool
    application_option_external: bool
    external_apply_url: str | None
    external_apply_email: str | None
    published_at: str | None
    expires_at: str | None
    created_at: str
    updated_at: str
