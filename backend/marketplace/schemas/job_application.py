from marketplace.schemas.common import CamelModel


class JobApplicationCreate(CamelModel):
    # Method-specific requirements are checked by the service so the error
    # lists exactly the missing fields.
    application_method: str | None = None
    applicant_name: str | None = None
    applicant_email: str | None = None
    cv_url: str | None = None
    resume_url: str | None = None
    portfolio_url: str | None = None
    cover_letter: str | None = None
    external_target: str | None = None
    external_destination: str | None = None


class JobApplicationResponse(CamelModel):
    id: str
    job_post_id: str
    user_id: str | None
    applicant_name: str | None
    applicant_email: str | None
    application_method: str
    status: str
    cv_url: str | None
    resume_url: str | None
    portfolio_url: str | None
    cover_letter: str | None
    external_target: str | None
    external_destination: str | None
    external_clicked_at: str | None
    created_at: str
