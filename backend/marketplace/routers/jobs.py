from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.dependencies import optional_principal, require_principal
from marketplace.models import JobApplication, JobPost
from marketplace.schemas.common import StatusUpdate
from marketplace.schemas.job import JobCreate, JobResponse, JobUpdate
from marketplace.schemas.job_application import JobApplicationCreate, JobApplicationResponse
from marketplace.services import job_application_service, job_service
from marketplace.services.access import Principal
from marketplace.services.pagination import Page
from marketplace.utils.response import success

router = APIRouter(prefix="/jobs", tags=["jobs"])


def job_to_response(job: JobPost) -> JobResponse:
    response = JobResponse.model_validate(job)
    response.business_name = job.business.name if job.business else None
    return response


def application_to_response(application: JobApplication) -> JobApplicationResponse:
    return JobApplicationResponse.model_validate(application)


@router.get("")
async def list_jobs(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    q: str | None = None,
    location: str | None = None,
    employment_type: str | None = Query(None, alias="employmentType"),
    db: Session = Depends(get_db),
):
    jobs, meta = job_service.list_jobs(
        db, Page.from_params(page, limit), q=q, location=location, employment_type=employment_type
    )
    return success([job_to_response(j) for j in jobs], meta=meta)


@router.get("/me")
async def my_jobs(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    jobs, meta = job_service.list_my_jobs(db, principal.id, Page.from_params(page, limit))
    return success([job_to_response(j) for j in jobs], meta=meta)


@router.post("", status_code=201)
async def create_job(
    req: JobCreate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    job = job_service.create_job(db, principal.id, req)
    return success(job_to_response(job), "Job created", 201)


@router.get("/{id_or_slug}")
async def get_job(id_or_slug: str, db: Session = Depends(get_db)):
    return success(job_to_response(job_service.get_job(db, id_or_slug)))


@router.patch("/{job_id}")
async def update_job(
    job_id: str,
    req: JobUpdate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    job = job_service.update_job(db, principal.id, job_id, req)
    return success(job_to_response(job), "Job updated")


@router.patch("/{job_id}/status")
async def change_job_status(
    job_id: str,
    req: StatusUpdate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    job = job_service.change_job_status(db, principal.id, job_id, req.status)
    return success(job_to_response(job), "Job status updated")


@router.post("/{job_id}/applications", status_code=201)
async def apply_to_job(
    job_id: str,
    req: JobApplicationCreate,
    principal: Principal | None = Depends(optional_principal),
    db: Session = Depends(get_db),
):
    application = job_application_service.create_application(db, principal, job_id, req)
    return success(application_to_response(application), "Application submitted", 201)


@router.get("/{job_id}/applications")
async def list_job_applications(
    job_id: str,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    applications = job_application_service.list_applications_for_job(db, principal.id, job_id)
    return success([application_to_response(a) for a in applications])
