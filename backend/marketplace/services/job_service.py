from sqlalchemy.orm import Session

from marketplace.errors import ForbiddenError, InternalError, NotFoundError
from marketplace.models import Business, JobPost, JobStatus
from marketplace.schemas.job import JobCreate, JobUpdate
from marketplace.services import status_machine
from marketplace.services.access import owned_business, owned_job
from marketplace.services.pagination import Page, paginate, text_search
from marketplace.utils.text import new_id, to_timestamp, unique_slug, utc_now


def _active_jobs(db: Session):
    return db.query(JobPost).join(JobPost.job_status).filter(JobStatus.code == "ACTIVE")


def list_jobs(db: Session, page: Page, q: str | None = None, location: str | None = None,
              employment_type: str | None = None):
    query = _active_jobs(db)
    search = text_search(q, JobPost.title, JobPost.description)
    if search is not None:
        query = query.filter(search)
    if location:
        query = query.filter(JobPost.location_text.ilike(f"%{location}%"))
    if employment_type:
        query = query.filter(JobPost.employment_type == employment_type)
    return paginate(query, page, JobPost.created_at.desc())


def list_my_jobs(db: Session, owner_id: str, page: Page):
    query = db.query(JobPost).join(JobPost.business).filter(Business.owner_id == owner_id)
    return paginate(query, page, JobPost.created_at.desc())


def create_job(db: Session, owner_id: str, req: JobCreate) -> JobPost:
    business = owned_business(db, req.business_id, owner_id)
    if business.status != "APPROVED":
        raise ForbiddenError(error_code="BUSINESS_NOT_APPROVED")

    active = db.query(JobStatus).filter(JobStatus.code == "ACTIVE").first()
    if not active:
        raise InternalError("ACTIVE JobStatus not configured")

    now = utc_now()
    job = JobPost(
        id=new_id(),
        business_id=business.id,
        job_status_id=active.id,
        title=req.title,
        slug=unique_slug(db, JobPost, req.title),
        location_type=req.location_type,
        location_text=req.location_text,
        employment_type=req.employment_type,
        salary_min=req.salary_min,
        salary_max=req.salary_max,
        currency=req.currency,
        description=req.description,
        requirements=req.requirements,
        application_option_platform=req.application_option_platform,
        application_option_external=req.application_option_external,
        external_apply_url=req.external_apply_url,
        external_apply_email=req.external_apply_email,
        published_at=now,
        expires_at=to_timestamp(req.expires_at) if req.expires_at else None,
        created_at=now,
        updated_at=now,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def get_job(db: Session, id_or_slug: str) -> JobPost:
    job = db.query(JobPost).filter(JobPost.id == id_or_slug).first()
    if not job:
        job = db.query(JobPost).filter(JobPost.slug == id_or_slug).first()
    if not job:
        raise NotFoundError("JOB_NOT_FOUND")
    return job


def update_job(db: Session, owner_id: str, job_id: str, req: JobUpdate) -> JobPost:
    job = owned_job(db, job_id, owner_id)

    update_data = req.model_dump(exclude_unset=True, exclude_none=True)
    if "expires_at" in update_data:
        update_data["expires_at"] = to_timestamp(update_data["expires_at"])
    for key, value in update_data.items():
        setattr(job, key, value)
    job.updated_at = utc_now()

    db.commit()
    db.refresh(job)
    return job


def change_job_status(db: Session, owner_id: str, job_id: str, status: str | None) -> JobPost:
    scope = [JobPost.business.has(Business.owner_id == owner_id)]
    return status_machine.change_status(db, status_machine.JOB, job_id, status, scope=scope)


def admin_change_job_status(db: Session, job_id: str, status: str | None) -> JobPost:
    return status_machine.change_status(db, status_machine.JOB, job_id, status)


def list_jobs_admin(db: Session, page: Page, q: str | None = None, status: str | None = None,
                    business_id: str | None = None):
    query = db.query(JobPost).join(JobPost.job_status)
    if status:
        query = query.filter(JobStatus.code == status)
    if business_id:
        query = query.filter(JobPost.business_id == business_id)
    search = text_search(q, JobPost.title, JobPost.description)
    if search is not None:
        query = query.filter(search)
    return paginate(query, page, JobPost.created_at.desc())
