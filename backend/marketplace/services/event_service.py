from datetime import datetime, timezone

from sqlalchemy.orm import Session

from marketplace.config import settings
from marketplace.errors import NotFoundError, ValidationError, field_error
from marketplace.models import Event
from marketplace.schemas.event import EventCreate, EventUpdate
from marketplace.services import status_machine
from marketplace.services.access import owned_event
from marketplace.services.pagination import Page, paginate, text_search
from marketplace.utils.text import new_id, to_timestamp, unique_slug, utc_now

DEFAULT_EVENT_TYPE = "GENERAL"
CREATABLE_STATUSES = ("PUBLISHED", "DRAFT")


def _pricing(price_per_person: int | None) -> dict:
    is_paid = bool(price_per_person and price_per_person > 0)
    return {
        "is_paid": is_paid,
        "price_per_person": price_per_person if is_paid else None,
        "admin_fee": settings.event_admin_fee if is_paid else 0,
    }


def _check_schedule(start: str, end: str) -> None:
    # Stored timestamps share one fixed-width UTC format, so text order is time order.
    if end < start:
        raise ValidationError(
            "End datetime is before start datetime",
            details=[field_error("endDatetime", "End datetime must not be before start datetime")],
        )


def list_events(db: Session, page: Page, q: str | None = None, upcoming: bool = False):
    query = db.query(Event).filter(Event.status == "PUBLISHED")
    search = text_search(q, Event.title, Event.description, Event.location)
    if search is not None:
        query = query.filter(search)
    if upcoming:
        query = query.filter(Event.start_datetime >= to_timestamp(datetime.now(timezone.utc)))
    return paginate(query, page, Event.start_datetime.asc())


def list_my_events(db: Session, creator_id: str, page: Page):
    query = db.query(Event).filter(Event.creator_id == creator_id)
    return paginate(query, page, Event.created_at.desc())


def list_events_admin(db: Session, page: Page, q: str | None = None, status: str | None = None,
                      creator_id: str | None = None):
    query = db.query(Event)
    if status:
        query = query.filter(Event.status == status)
    if creator_id:
        query = query.filter(Event.creator_id == creator_id)
    search = text_search(q, Event.title, Event.description, Event.location)
    if search is not None:
        query = query.filter(search)
    return paginate(query, page, Event.created_at.desc())


def create_event(db: Session, creator_id: str, req: EventCreate) -> Event:
    status = req.status or "PUBLISHED"
    if status not in CREATABLE_STATUSES:
        raise ValidationError(
            "Invalid status value",
            details=[field_error("status", f"Status must be one of {', '.join(CREATABLE_STATUSES)}")],
        )
    _check_schedule(to_timestamp(req.start_datetime), to_timestamp(req.end_datetime))

    now = utc_now()
    event = Event(
        id=new_id(),
        creator_id=creator_id,
        title=req.title,
        slug=unique_slug(db, Event, req.title),
        type=req.type or DEFAULT_EVENT_TYPE,
        description=req.description,
        location=req.location,
        start_datetime=to_timestamp(req.start_datetime),
        end_datetime=to_timestamp(req.end_datetime),
        quota=req.quota if req.quota and req.quota > 0 else None,
        status=status,
        published_at=now if status == "PUBLISHED" else None,
        created_at=now,
        updated_at=now,
        **_pricing(req.price_per_person),
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def get_published_event(db: Session, id_or_slug: str) -> Event:
    event = db.query(Event).filter(Event.id == id_or_slug).first()
    if not event:
        event = db.query(Event).filter(Event.slug == id_or_slug).first()
    if not event or event.status != "PUBLISHED":
        raise NotFoundError("EVENT_NOT_FOUND")
    return event


def update_event(db: Session, creator_id: str, event_id: str, req: EventUpdate) -> Event:
    event = owned_event(db, event_id, creator_id)
    fields = req.model_fields_set

    for key in ("title", "description", "location"):
        value = getattr(req, key)
        if value is not None:
            setattr(event, key, value)
    if req.start_datetime is not None:
        event.start_datetime = to_timestamp(req.start_datetime)
    if req.end_datetime is not None:
        event.end_datetime = to_timestamp(req.end_datetime)
    _check_schedule(event.start_datetime, event.end_datetime)
    if "quota" in fields:
        event.quota = req.quota if req.quota and req.quota > 0 else None
    if "price_per_person" in fields:
        for key, value in _pricing(req.price_per_person).items():
            setattr(event, key, value)
    event.updated_at = utc_now()

    db.commit()
    db.refresh(event)
    return event


def change_event_status(db: Session, creator_id: str, event_id: str, status: str | None) -> Event:
    return status_machine.change_status(
        db, status_machine.EVENT, event_id, status, scope=[Event.creator_id == creator_id]
    )


def admin_change_event_status(db: Session, event_id: str, status: str | None) -> Event:
    return status_machine.change_status(db, status_machine.EVENT, event_id, status)

