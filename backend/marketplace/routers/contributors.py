import json

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.dependencies import require_principal
from marketplace.models import ContributorProfile
from marketplace.schemas.contributor import ContributorApply, ContributorResponse
from marketplace.services import contributor_service
from marketplace.services.access import Principal
from marketplace.utils.response import success

router = APIRouter(prefix="/contributors", tags=["contributors"])


def _profile_to_response(profile: ContributorProfile) -> ContributorResponse:
    return ContributorResponse(
        id=profile.id,
        user_id=profile.user_id,
        status=profile.status,
        bio=profile.bio,
        social_links=json.loads(profile.social_links) if profile.social_links else None,
        created_at=profile.created_at,
    )


@router.post("/apply", status_code=201)
async def apply(
    req: ContributorApply,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    profile = contributor_service.apply_contributor(db, principal.id, req)
    return success(_profile_to_response(profile), "Contributor profile created", 201)


@router.get("/me")
async def my_profile(principal: Principal = Depends(require_principal), db: Session = Depends(get_db)):
    return success(_profile_to_response(contributor_service.get_my_profile(db, principal.id)))
