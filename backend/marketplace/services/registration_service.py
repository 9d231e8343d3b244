"""Event registration with quota enforcement.

The event row is loaded with ``FOR UPDATE`` and the registration plus its
payment are committed together, so two concurrent registrations cannot both
take the last seat on a backend that honours row locks. SQLite serialises
writers instead and ignores the clause.
"""
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from marketplace.errors import NotFoundError, ValidationError, field_error
from marketplace.models import Event, EventRegistration, Payment
from marketplace.services.access import Principal, ensure_registration_access, owned_event
from marketplace.services.pagination import Page, paginate
from marketplace.services.payment_service import create_registration_payment
from marketplace.services.seats import ensure_not_registered, ensure_seat_available, lock_event
from marketplace.utils.text import new_id, utc_now

logger = logging.getLogger(__name__)


def register_for_event(db: Session, user_id: str, event_id: str) -> tuple[Event, EventRegistration, Payment | None]:
    event = lock_event(db, event_id)
    ensure_seat_available(db, event)

    if event.status != "PUBLISHED":
        raise ValidationError(
            "Event is not open for registration",
            details=[field_error("eventId", "Event is not open for registration")],
        )

    ensure_not_registered(db, event, user_id)

    total_amount = (event.price_per_person or 0) + event.admin_fee if event.is_paid else 0
    now = utc_now()
    registration = EventRegistration(
        id=new_id(),
        event_id=event.id,
        user_id=user_id,
        status="PENDING_PAYMENT" if event.is_paid else "CONFIRMED",
        total_amount=total_amount,
        created_at=now,
        updated_at=now,
    )
    db.add(registration)

    payment = None
    if event.is_paid:
        payment = create_registration_payment(db, user_id, event, registration)

    db.commit()
    db.refresh(event)
    db.refresh(registration)
    if payment is not None:
        db.refresh(payment)
    logger.info("User %s registered for event %s as %s", user_id, event.id, registration.status)
    return event, registration, payment


def list_event_registrations(db: Session, creator_id: str, event_id: str, page: Page):
    event = owned_event(db, event_id, creator_id)
    query = db.query(EventRegistration).filter(EventRegistration.event_id == event.id)
    return paginate(query, page, EventRegistration.created_at.desc())


def registration_stats(db: Session, creator_id: str, event_id: str) -> dict:
    event = owned_event(db, event_id, creator_id)
    rows = (
        db.query(EventRegistration.status, func.count(EventRegistration.id).label("n"))
        .filter(EventRegistration.event_id == event.id)
        .group_by(EventRegistration.status)
        .all()
    )
    by_status = {row.status: row.n for row in rows}
    return {
        "event_id": event.id,
        "total_registrations": sum(by_status.values()),
        "by_status": by_status,
    }


def list_my_registrations(db: Session, user_id: str, page: Page):
    query = db.query(EventRegistration).filter(EventRegistration.user_id == user_id)
    return paginate(query, page, EventRegistration.created_at.desc())


def get_registration(db: Session, principal: Principal, registration_id: str) -> EventRegistration:
    registration = db.query(EventRegistration).filter(EventRegistration.id == registration_id).first()
    if not registration:
        raise NotFoundError("EVENT_REGISTRATION_NOT_FOUND")
    ensure_registration_access(principal, registration)
    return registration
