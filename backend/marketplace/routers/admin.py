from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.dependencies import require_role
from marketplace.routers.auth import user_to_response
from marketplace.routers.jobs import job_to_response
from marketplace.schemas.article import ArticleResponse
from marketplace.schemas.business import BusinessResponse
from marketplace.schemas.common import StatusUpdate
from marketplace.schemas.event import EventResponse
from marketplace.schemas.payment import PaymentResponse, PaymentVerify
from marketplace.schemas.user import AdminUserDetail, UserStatusUpdate
from marketplace.services import (
    admin_service,
    article_service,
    event_service,
    job_service,
    payment_service,
)
from marketplace.services.access import ADMIN_ROLE, Principal
from marketplace.services.pagination import Page
from marketplace.utils.response import success

require_admin = require_role(ADMIN_ROLE)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


# --- Users ---

@router.get("/users")
async def list_users(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    q: str | None = None,
    is_active: bool | None = Query(None, alias="isActive"),
    db: Session = Depends(get_db),
):
    users, meta = admin_service.list_users(db, Page.from_params(page, limit), q=q, is_active=is_active)
    return success([user_to_response(u) for u in users], meta=meta)


@router.get("/users/{user_id}")
async def get_user(user_id: str, db: Session = Depends(get_db)):
    user = admin_service.get_user(db, user_id)
    detail = AdminUserDetail(
        **user_to_response(user).model_dump(),
        businesses=[BusinessResponse.model_validate(b) for b in user.businesses],
        **admin_service.user_activity_counts(db, user.id),
    )
    return success(detail)


@router.patch("/users/{user_id}/status")
async def change_user_status(user_id: str, req: UserStatusUpdate, db: Session = Depends(get_db)):
    user = admin_service.set_user_active(db, user_id, req.is_active)
    return success(user_to_response(user), "User status updated")


# --- Businesses ---

@router.get("/businesses")
async def list_businesses(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    q: str | None = None,
    status: str | None = None,
    db: Session = Depends(get_db),
):
    businesses, meta = admin_service.list_businesses(db, Page.from_params(page, limit), q=q, status=status)
    return success([BusinessResponse.model_validate(b) for b in businesses], meta=meta)


@router.patch("/businesses/{business_id}/status")
async def change_business_status(business_id: str, req: StatusUpdate, db: Session = Depends(get_db)):
    business = admin_service.change_business_status(db, business_id, req.status)
    return success(BusinessResponse.model_validate(business), "Business status updated")


# --- Jobs ---

@router.get("/jobs")
async def list_jobs(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    q: str | None = None,
    status: str | None = None,
    business_id: str | None = Query(None, alias="businessId"),
    db: Session = Depends(get_db),
):
    jobs, meta = job_service.list_jobs_admin(
        db, Page.from_params(page, limit), q=q, status=status, business_id=business_id
    )
    return success([job_to_response(j) for j in jobs], meta=meta)


@router.patch("/jobs/{job_id}/status")
async def change_job_status(job_id: str, req: StatusUpdate, db: Session = Depends(get_db)):
    job = job_service.admin_change_job_status(db, job_id, req.status)
    return success(job_to_response(job), "Job status updated")


# --- Articles ---

@router.get("/articles")
async def list_articles(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    q: str | None = None,
    status: str | None = None,
    author_id: str | None = Query(None, alias="authorId"),
    db: Session = Depends(get_db),
):
    articles, meta = article_service.list_articles_admin(
        db, Page.from_params(page, limit), q=q, status=status, author_id=author_id
    )
    return success([ArticleResponse.model_validate(a) for a in articles], meta=meta)


@router.patch("/articles/{article_id}/status")
async def change_article_status(article_id: str, req: StatusUpdate, db: Session = Depends(get_db)):
    article = article_service.change_article_status(db, article_id, req.status)
    return success(ArticleResponse.model_validate(article), "Article status updated")


# --- Events ---

@router.get("/events")
async def list_events(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    q: str | None = None,
    status: str | None = None,
    creator_id: str | None = Query(None, alias="creatorId"),
    db: Session = Depends(get_db),
):
    events, meta = event_service.list_events_admin(
        db, Page.from_params(page, limit), q=q, status=status, creator_id=creator_id
    )
    return success([EventResponse.model_validate(e) for e in events], meta=meta)


@router.patch("/events/{event_id}/status")
async def change_event_status(event_id: str, req: StatusUpdate, db: Session = Depends(get_db)):
    event = event_service.admin_change_event_status(db, event_id, req.status)
    return success(EventResponse.model_validate(event), "Event status updated")


# --- Payments ---

@router.get("/payments")
async def list_payments(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    status: str | None = None,
    payment_type: str | None = Query(None, alias="paymentType"),
    user_id: str | None = Query(None, alias="userId"),
    event_id: str | None = Query(None, alias="eventId"),
    business_id: str | None = Query(None, alias="businessId"),
    job_post_id: str | None = Query(None, alias="jobPostId"),
    db: Session = Depends(get_db),
):
    payments, meta = payment_service.list_payments_admin(
        db,
        Page.from_params(page, limit),
        status=status,
        payment_type=payment_type,
        user_id=user_id,
        event_id=event_id,
        business_id=business_id,
        job_post_id=job_post_id,
    )
    return success([PaymentResponse.model_validate(p) for p in payments], meta=meta)


@router.get("/payments/{payment_id}")
async def get_payment(payment_id: str, db: Session = Depends(get_db)):
    return success(PaymentResponse.model_validate(payment_service.get_payment_admin(db, payment_id)))


@router.patch("/payments/{payment_id}/verify")
async def verify_payment(
    payment_id: str,
    req: PaymentVerify,
    principal: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
):
    payment = payment_service.verify_payment(db, principal.id, payment_id, req.status)
    return success(PaymentResponse.model_validate(payment), f"Payment {payment.status.lower()}")
