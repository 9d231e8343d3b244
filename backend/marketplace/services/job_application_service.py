import logging

from sqlalchemy.orm import Session

from marketplace.errors import NotFoundError, ValidationError, field_error
from marketplace.models import JobApplication, JobPost
from marketplace.schemas.job_application import JobApplicationCreate
from marketplace.services.access import Principal, ensure_application_access, owned_job
from marketplace.utils.text import new_id, utc_now

logger = logging.getLogger(__name__)

APPLICATION_METHODS = ("PLATFORM", "EXTERNAL")

# Wire field name -> request attribute, per method.
_REQUIRED_BY_METHOD = {
    "PLATFORM": (("cvUrl", "cv_url"), ("portfolioUrl", "portfolio_url")),
    "EXTERNAL": (("externalTarget", "external_target"), ("externalDestination", "external_destination")),
}
_GUEST_REQUIRED = (("applicantName", "applicant_name"), ("applicantEmail", "applicant_email"))


def _missing(req: JobApplicationCreate, fields) -> list[dict]:
    return [field_error(wire, f"{wire} is required") for wire, attr in fields if not getattr(req, attr)]


def validate_application(req: JobApplicationCreate, is_guest: bool) -> None:
    method = req.application_method
    if not method:
        raise ValidationError(
            "Application method is required",
            details=[field_error("applicationMethod", "Application method is required")],
        )
    if method not in APPLICATION_METHODS:
        raise ValidationError(
            "Invalid application method",
            details=[field_error("applicationMethod", f"Application method must be one of {', '.join(APPLICATION_METHODS)}")],
        )

    missing = _missing(req, _REQUIRED_BY_METHOD[method])
    if is_guest:
        missing += _missing(req, _GUEST_REQUIRED)
    if missing:
        raise ValidationError(f"Missing required fields for {method.lower()} application", details=missing)


def create_application(db: Session, principal: Principal | None, job_id: str,
                       req: JobApplicationCreate) -> JobApplication:
    job = db.query(JobPost).filter(JobPost.id == job_id).first()
    if not job or job.status != "ACTIVE":
        raise NotFoundError("JOB_NOT_FOUND")

    validate_application(req, is_guest=principal is None)

    now = utc_now()
    is_external = req.application_method == "EXTERNAL"
    application = JobApplication(
        id=new_id(),
        job_post_id=job.id,
        user_id=principal.id if principal else None,
        applicant_name=req.applicant_name,
        applicant_email=req.applicant_email,
        application_method=req.application_method,
        status="CLICKED" if is_external else "SUBMITTED",
        cv_url=req.cv_url,
        resume_url=req.resume_url,
        portfolio_url=req.portfolio_url,
        cover_letter=req.cover_letter,
        external_target=req.external_target,
        external_destination=req.external_destination,
        external_clicked_at=now if is_external else None,
        created_at=now,
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    logger.info("Application %s (%s) created for job %s", application.id, application.status, job.id)
    return application


def list_applications_for_job(db: Session, owner_id: str, job_id: str) -> list[JobApplication]:
    job = owned_job(db, job_id, owner_id)
    return (
        db.query(JobApplication)
        .filter(JobApplication.job_post_id == job.id)
        .order_by(JobApplication.created_at.desc())
        .all()
    )


def get_application(db: Session, principal: Principal, application_id: str) -> JobApplication:
    application = db.query(JobApplication).filter(JobApplication.id == application_id).first()
    if not application:
        raise NotFoundError("JOB_APPLICATION_NOT_FOUND")
    ensure_application_access(principal, application)
    return application
