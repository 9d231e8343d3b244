"""Admin-only reads and moderation for users and businesses.

Jobs, articles, events and payments keep their admin queries next to their
own services; the admin router calls those directly.
"""
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from marketplace.errors import NotFoundError
from marketplace.models import AuthToken, Business, Event, EventRegistration, JobApplication, User
from marketplace.services import status_machine
from marketplace.services.pagination import Page, paginate, text_search
from marketplace.utils.text import utc_now

logger = logging.getLogger(__name__)


def list_users(db: Session, page: Page, q: str | None = None, is_active: bool | None = None):
    query = db.query(User)
    search = text_search(q, User.name, User.email, User.username)
    if search is not None:
        query = query.filter(search)
    if is_active is not None:
        query = query.filter(User.is_active.is_(is_active))
    return paginate(query, page, User.created_at.desc())


def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("USER_NOT_FOUND")
    return user


def user_activity_counts(db: Session, user_id: str) -> dict:
    def count(column):
        return db.query(func.count()).select_from(column.class_).filter(column == user_id).scalar()

    return {
        "job_application_count": count(JobApplication.user_id),
        "event_count": count(Event.creator_id),
        "event_registration_count": count(EventRegistration.user_id),
    }


def set_user_active(db: Session, user_id: str, is_active: bool) -> User:
    user = get_user(db, user_id)
    user.is_active = is_active
    user.updated_at = utc_now()
    if not is_active:
        # A deactivated account keeps no live sessions.
        (
            db.query(AuthToken)
            .filter(AuthToken.user_id == user.id, AuthToken.is_revoked.is_(False))
            .update({AuthToken.is_revoked: True}, synchronize_session=False)
        )
    db.commit()
    db.refresh(user)
    logger.info("User %s %s", user.id, "activated" if is_active else "deactivated")
    return user


def list_businesses(db: Session, page: Page, q: str | None = None, status: str | None = None):
    query = db.query(Business)
    if status:
        query = query.filter(Business.status == status)
    search = text_search(q, Business.name, Business.website_url, Business.description)
    if search is not None:
        query = query.filter(search)
    return paginate(query, page, Business.created_at.desc())


def change_business_status(db: Session, business_id: str, status: str | None) -> Business:
    return status_machine.change_status(db, status_machine.BUSINESS, business_id, status)
