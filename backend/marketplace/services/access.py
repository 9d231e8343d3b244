"""Who may see or touch what.

Two styles coexist. Owner-scoped lookups put the owner into the
query itself, so an entity owned by someone else is indistinguishable from a
missing one (NotFound). Detail checks load first and authorize second, so an
existing entity the caller may not touch yields Forbidden.
"""
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from marketplace.errors import ForbiddenError, NotFoundError
from marketplace.models import Business, Event, EventRegistration, JobApplication, JobPost, Payment

ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class Principal:
    id: str
    email: str | None = None
    roles: list[str] = field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles


def owned_business(db: Session, business_id: str, owner_id: str) -> Business:
    business = (
        db.query(Business)
        .filter(Business.id == business_id, Business.owner_id == owner_id)
        .first()
    )
    if not business:
        raise NotFoundError("BUSINESS_NOT_FOUND")
    return business


def owned_job(db: Session, job_id: str, owner_id: str) -> JobPost:
    job = (
        db.query(JobPost)
        .join(JobPost.business)
        .filter(JobPost.id == job_id, Business.owner_id == owner_id)
        .first()
    )
    if not job:
        raise NotFoundError("JOB_NOT_FOUND")
    return job


def owned_event(db: Session, event_id: str, creator_id: str) -> Event:
    event = db.query(Event).filter(Event.id == event_id, Event.creator_id == creator_id).first()
    if not event:
        raise NotFoundError("EVENT_NOT_FOUND")
    return event


def ensure_application_access(principal: Principal, application: JobApplication) -> None:
    is_applicant = application.user_id is not None and application.user_id == principal.id
    is_business_owner = application.job_post.business.owner_id == principal.id
    if not (is_applicant or is_business_owner):
        raise ForbiddenError()


def ensure_registration_access(principal: Principal, registration: EventRegistration) -> None:
    if registration.user_id != principal.id and registration.event.creator_id != principal.id:
        raise ForbiddenError()


def ensure_payment_owner(principal: Principal, payment: Payment) -> None:
    if payment.user_id != principal.id:
        raise ForbiddenError()
