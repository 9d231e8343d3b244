import logging

from sqlalchemy.orm import Session

from marketplace.config import settings
from marketplace.errors import NotFoundError, ValidationError, field_error
from marketplace.models import Event, EventRegistration, Payment
from marketplace.schemas.payment import PaymentProof
from marketplace.services import status_machine
from marketplace.services.access import Principal, ensure_payment_owner, owned_event
from marketplace.services.pagination import Page, paginate
from marketplace.services.seats import ensure_not_registered, ensure_seat_available, lock_event
from marketplace.utils.text import new_id, utc_now

logger = logging.getLogger(__name__)

EVENT_REGISTRATION = "EVENT_REGISTRATION"

# Payment decision -> resulting registration status.
REGISTRATION_OUTCOME = {
    "VERIFIED": "CONFIRMED",
    "REJECTED": "REJECTED",
}


def create_registration_payment(db: Session, user_id: str, event: Event,
                                registration: EventRegistration) -> Payment:
    """Stage the PENDING payment for a paid registration. The caller commits."""
    now = utc_now()
    payment = Payment(
        id=new_id(),
        user_id=user_id,
        payment_type=EVENT_REGISTRATION,
        amount=registration.total_amount,
        status="PENDING",
        event_registration_id=registration.id,
        event_id=event.id,
        created_at=now,
        updated_at=now,
    )
    db.add(payment)
    return payment


def _get_payment(db: Session, payment_id: str) -> Payment:
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise NotFoundError("PAYMENT_NOT_FOUND")
    return payment


def attach_proof(db: Session, principal: Principal, payment_id: str, req: PaymentProof) -> Payment:
    if not req.reference_code and not req.screenshot_url:
        raise ValidationError(
            "Payment proof is required",
            details=[field_error("referenceCode", "referenceCode or screenshotUrl is required")],
        )
    payment = _get_payment(db, payment_id)
    ensure_payment_owner(principal, payment)
    if payment.status == "VERIFIED":
        raise ValidationError(
            "Payment already verified",
            details=[field_error("status", "Payment already verified")],
        )

    if req.reference_code:
        payment.reference_code = req.reference_code
    if req.screenshot_url:
        payment.screenshot_url = req.screenshot_url
    payment.updated_at = utc_now()
    db.commit()
    db.refresh(payment)
    return payment


def verify_payment(db: Session, admin_id: str, payment_id: str, requested: str | None) -> Payment:
    status = status_machine.PAYMENT.validate(requested)
    payment = _get_payment(db, payment_id)

    if not payment.event_registration_id:
        raise ValidationError(
            "Payment is not linked to an event registration",
            details=[field_error("paymentId", "Payment has no event registration")],
        )
    if payment.status == "VERIFIED" and not settings.allow_payment_reverification:
        raise ValidationError(
            "Payment already verified",
            details=[field_error("status", "Payment already verified")],
        )

    registration = payment.event_registration
    if registration is not None and registration.status == "REJECTED" and status == "VERIFIED":
        # The seat was released on rejection; reclaim it only if still free.
        event = lock_event(db, registration.event_id)
        ensure_seat_available(db, event, exclude_registration_id=registration.id)
        ensure_not_registered(db, event, registration.user_id, exclude_registration_id=registration.id)

    status_machine.transition(db, status_machine.PAYMENT, payment, status)
    now = utc_now()
    payment.verified_by_id = admin_id
    payment.verified_at = now
    if registration is not None:
        registration.status = REGISTRATION_OUTCOME[status]
        registration.updated_at = now

    # Payment and registration move together or not at all.
    db.commit()
    db.refresh(payment)
    logger.info("Payment %s %s by admin %s", payment.id, status.lower(), admin_id)
    return payment


def list_my_payments(db: Session, user_id: str, page: Page):
    query = db.query(Payment).filter(Payment.user_id == user_id)
    return paginate(query, page, Payment.created_at.desc())


def get_my_payment(db: Session, principal: Principal, payment_id: str) -> Payment:
    payment = _get_payment(db, payment_id)
    ensure_payment_owner(principal, payment)
    return payment


def list_event_payments(db: Session, creator_id: str, event_id: str, page: Page):
    event = owned_event(db, event_id, creator_id)
    query = db.query(Payment).filter(Payment.event_id == event.id)
    return paginate(query, page, Payment.created_at.desc())


def list_payments_admin(db: Session, page: Page, status: str | None = None,
                        payment_type: str | None = None, user_id: str | None = None,
                        event_id: str | None = None, business_id: str | None = None,
                        job_post_id: str | None = None):
    query = db.query(Payment)
    filters = [
        (Payment.status, status),
        (Payment.payment_type, payment_type),
        (Payment.user_id, user_id),
        (Payment.event_id, event_id),
        (Payment.business_id, business_id),
        (Payment.job_post_id, job_post_id),
    ]
    for column, value in filters:
        if value:
            query = query.filter(column == value)
    return paginate(query, page, Payment.created_at.desc())


def get_payment_admin(db: Session, payment_id: str) -> Payment:
    return _get_payment(db, payment_id)
