from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.dependencies import require_principal
from marketplace.schemas.common import StatusUpdate
from marketplace.schemas.event import (
    EventCreate,
    EventResponse,
    EventUpdate,
    RegistrationResponse,
    RegistrationResult,
    RegistrationStats,
)
from marketplace.schemas.payment import PaymentResponse
from marketplace.services import event_service, registration_service
from marketplace.services.access import Principal
from marketplace.services.calendar_service import generate_event_ics
from marketplace.services.pagination import Page
from marketplace.utils.response import success

router = APIRouter(prefix="/events", tags=["events"])


@router.get("")
async def list_events(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    q: str | None = None,
    upcoming: bool = False,
    db: Session = Depends(get_db),
):
    events, meta = event_service.list_events(db, Page.from_params(page, limit), q=q, upcoming=upcoming)
    return success([EventResponse.model_validate(e) for e in events], meta=meta)


@router.get("/me")
async def my_events(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    events, meta = event_service.list_my_events(db, principal.id, Page.from_params(page, limit))
    return success([EventResponse.model_validate(e) for e in events], meta=meta)


@router.post("", status_code=201)
async def create_event(
    req: EventCreate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    event = event_service.create_event(db, principal.id, req)
    return success(EventResponse.model_validate(event), "Event created", 201)


# Registration paths are declared ahead of /{id_or_slug} so "registrations"
# is never read as an event slug.
@router.get("/registrations/me")
async def my_registrations(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    registrations, meta = registration_service.list_my_registrations(
        db, principal.id, Page.from_params(page, limit)
    )
    return success([RegistrationResponse.model_validate(r) for r in registrations], meta=meta)


@router.get("/registrations/{registration_id}")
async def get_registration(
    registration_id: str,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    registration = registration_service.get_registration(db, principal, registration_id)
    return success(RegistrationResponse.model_validate(registration))


@router.post("/{event_id}/registrations", status_code=201)
async def register_for_event(
    event_id: str,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    event, registration, payment = registration_service.register_for_event(db, principal.id, event_id)
    result = RegistrationResult(
        event=EventResponse.model_validate(event),
        registration=RegistrationResponse.model_validate(registration),
        payment=PaymentResponse.model_validate(payment) if payment else None,
    )
    return success(result, "Registered for event", 201)


@router.get("/{event_id}/registrations")
async def list_event_registrations(
    event_id: str,
    page: str | None = Query(None),
    limit: str | None = Query(None),
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    registrations, meta = registration_service.list_event_registrations(
        db, principal.id, event_id, Page.from_params(page, limit)
    )
    return success([RegistrationResponse.model_validate(r) for r in registrations], meta=meta)


@router.get("/{event_id}/registrations/stats")
async def registration_stats(
    event_id: str,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    stats = registration_service.registration_stats(db, principal.id, event_id)
    return success(RegistrationStats(**stats))


@router.get("/{id_or_slug}/calendar")
async def event_calendar(id_or_slug: str, db: Session = Depends(get_db)):
    event = event_service.get_published_event(db, id_or_slug)
    return Response(
        content=generate_event_ics(event),
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="event_{event.id[:8]}.ics"'},
    )


@router.get("/{id_or_slug}")
async def get_event(id_or_slug: str, db: Session = Depends(get_db)):
    return success(EventResponse.model_validate(event_service.get_published_event(db, id_or_slug)))


@router.patch("/{event_id}")
async def update_event(
    event_id: str,
    req: EventUpdate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    event = event_service.update_event(db, principal.id, event_id, req)
    return success(EventResponse.model_validate(event), "Event updated")


@router.patch("/{event_id}/status")
async def change_event_status(
    event_id: str,
    req: StatusUpdate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    event = event_service.change_event_status(db, principal.id, event_id, req.status)
    return success(EventResponse.model_validate(event), "Event status updated")
