from sqlalchemy.orm import Session

from marketplace.models import Business
from marketplace.schemas.business import BusinessCreate
from marketplace.services.access import owned_business
from marketplace.utils.text import new_id, utc_now


def list_my_businesses(db: Session, owner_id: str) -> list[Business]:
    return (
        db.query(Business)
        .filter(Business.owner_id == owner_id)
        .order_by(Business.created_at.desc())
        .all()
    )


def create_business(db: Session, owner_id: str, req: BusinessCreate) -> Business:
    now = utc_now()
    business = Business(
        id=new_id(),
        owner_id=owner_id,
        name=req.name,
        logo_url=req.logo_url,
        website_url=req.website_url,
        description=req.description,
        status="PENDING",
        created_at=now,
        updated_at=now,
    )
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


def get_my_business(db: Session, business_id: str, owner_id: str) -> Business:
    return owned_business(db, business_id, owner_id)
