"""Seat accounting shared by registration and payment decisions.

Callers hold the event row via ``lock_event`` for the whole transaction so
the count and the write that follows it cannot interleave with another
registration on a backend that honours row locks.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session

from marketplace.errors import ConflictError, NotFoundError, ValidationError, field_error
from marketplace.models import Event, EventRegistration

# Registrations that hold a seat.
SEAT_HOLDING_STATUSES = ("PENDING_PAYMENT", "CONFIRMED")


def lock_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.id == event_id).with_for_update().first()
    if not event:
        raise NotFoundError("EVENT_NOT_FOUND")
    return event


def ensure_seat_available(db: Session, event: Event, exclude_registration_id: str | None = None) -> None:
    if event.quota is None or event.quota <= 0:
        return
    query = db.query(func.count(EventRegistration.id)).filter(
        EventRegistration.event_id == event.id,
        EventRegistration.status.in_(SEAT_HOLDING_STATUSES),
    )
    if exclude_registration_id:
        query = query.filter(EventRegistration.id != exclude_registration_id)
    if query.scalar() >= event.quota:
        raise ValidationError(
            "Event quota is full",
            details=[field_error("eventId", "Event quota is full")],
        )


def ensure_not_registered(db: Session, event: Event, user_id: str,
                          exclude_registration_id: str | None = None) -> None:
    query = db.query(EventRegistration).filter(
        EventRegistration.event_id == event.id,
        EventRegistration.user_id == user_id,
        EventRegistration.status != "REJECTED",
    )
    if exclude_registration_id:
        query = query.filter(EventRegistration.id != exclude_registration_id)
    if query.first():
        raise ConflictError(error_code="ALREADY_REGISTERED")
