from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.dependencies import require_principal
from marketplace.schemas.payment import PaymentProof, PaymentResponse
from marketplace.services import payment_service
from marketplace.services.access import Principal
from marketplace.services.pagination import Page
from marketplace.utils.response import success

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("/me")
async def my_payments(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    payments, meta = payment_service.list_my_payments(db, principal.id, Page.from_params(page, limit))
    return success([PaymentResponse.model_validate(p) for p in payments], meta=meta)


@router.get("/events/{event_id}")
async def event_payments(
    event_id: str,
    page: str | None = Query(None),
    limit: str | None = Query(None),
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    payments, meta = payment_service.list_event_payments(
        db, principal.id, event_id, Page.from_params(page, limit)
    )
    return success([PaymentResponse.model_validate(p) for p in payments], meta=meta)


@router.get("/{payment_id}")
async def get_payment(
    payment_id: str,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    return success(PaymentResponse.model_validate(payment_service.get_my_payment(db, principal, payment_id)))


@router.patch("/{payment_id}/proof")
async def attach_proof(
    payment_id: str,
    req: PaymentProof,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    payment = payment_service.attach_proof(db, principal, payment_id, req)
    return success(PaymentResponse.model_validate(payment), "Payment proof submitted")
