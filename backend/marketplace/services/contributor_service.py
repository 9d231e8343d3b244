import json

from sqlalchemy.orm import Session

from marketplace.errors import ConflictError, ForbiddenError, NotFoundError
from marketplace.models import ContributorProfile
from marketplace.schemas.contributor import ContributorApply
from marketplace.utils.text import new_id, utc_now


def apply_contributor(db: Session, user_id: str, req: ContributorApply) -> ContributorProfile:
    existing = db.query(ContributorProfile).filter(ContributorProfile.user_id == user_id).first()
    if existing:
        raise ConflictError("Contributor profile already exists")

    profile = ContributorProfile(
        id=new_id(),
        user_id=user_id,
        bio=req.bio or None,
        social_links=json.dumps(req.social_links) if req.social_links else None,
        # Contributors are active immediately; their articles auto-publish.
        status="ACTIVE",
        created_at=utc_now(),
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def get_my_profile(db: Session, user_id: str) -> ContributorProfile:
    profile = db.query(ContributorProfile).filter(ContributorProfile.user_id == user_id).first()
    if not profile:
        raise NotFoundError("CONTRIBUTOR_PROFILE_NOT_FOUND")
    return profile


def ensure_active_contributor(db: Session, user_id: str) -> ContributorProfile:
    profile = db.query(ContributorProfile).filter(ContributorProfile.user_id == user_id).first()
    if not profile or profile.status != "ACTIVE":
        raise ForbiddenError(error_code="CONTRIBUTOR_NOT_ACTIVE")
    return profile
