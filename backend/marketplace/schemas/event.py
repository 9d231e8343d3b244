from datetime import datetime

from marketplace.schemas.common import CamelModel, RequiredStr
from marketplace.schemas.payment import PaymentResponse


class EventCreate(CamelModel):
    title: RequiredStr
    description: RequiredStr
    location: RequiredStr
    start_datetime: datetime
    end_datetime: datetime
    type: str | None = None
    price_per_person: int | None = None
    quota: int | None = None
    status: str | None = None


class EventUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    location: str | None = None
    start_datetime: datetime | None = None
    end_datetime: datetime | None = None
    price_per_person: int | None = None
    quota: int | None = None


class EventResponse(CamelModel):
    id: str
    creator_id: str
    title: str
    slug: str
    type: str
    description: str
    location: str
    start_datetime: str
    end_datetime: str
    is_paid: bool
    price_per_person: int | None
    admin_fee: int
    quota: int | None
    status: str
    published_at: str | None
    created_at: str
    updated_at: str


class RegistrationResponse(CamelModel):
    id: str
    event_id: str
    user_id: str
    status: str
    total_amount: int
    created_at: str
    updated_at: str


class RegistrationResult(CamelModel):
    event: EventResponse
    registration: RegistrationResponse
    payment: PaymentResponse | None


class RegistrationStats(CamelModel):
    event_id: str
    total_registrations: int
    by_status: dict[str, int]
