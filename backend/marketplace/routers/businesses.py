from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.dependencies import require_principal
from marketplace.schemas.business import BusinessCreate, BusinessResponse
from marketplace.services import business_service
from marketplace.services.access import Principal
from marketplace.utils.response import success

router = APIRouter(prefix="/businesses", tags=["businesses"])


@router.get("/me")
async def my_businesses(principal: Principal = Depends(require_principal), db: Session = Depends(get_db)):
    businesses = business_service.list_my_businesses(db, principal.id)
    return success([BusinessResponse.model_validate(b) for b in businesses])


@router.post("", status_code=201)
async def create_business(
    req: BusinessCreate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    business = business_service.create_business(db, principal.id, req)
    return success(BusinessResponse.model_validate(business), "Business created", 201)


@router.get("/{business_id}")
async def get_business(
    business_id: str,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    business = business_service.get_my_business(db, business_id, principal.id)
    return success(BusinessResponse.model_validate(business))
