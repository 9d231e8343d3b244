from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.dependencies import require_principal
from marketplace.routers.jobs import application_to_response
from marketplace.services import job_application_service
from marketplace.services.access import Principal
from marketplace.utils.response import success

router = APIRouter(prefix="/job-applications", tags=["job-applications"])


@router.get("/{application_id}")
async def get_application(
    application_id: str,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    application = job_application_service.get_application(db, principal, application_id)
    return success(application_to_response(application))
