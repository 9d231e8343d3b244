from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from marketplace.database import Base


class JobStatus(Base):
    __tablename__ = "job_statuses"

    id = Column(Text, primary_key=True)
    code = Column(Text, nullable=False, unique=True)
    label = Column(Text, nullable=False)
    description = Column(Text)


class JobPost(Base):
    __tablename__ = "job_posts"

    id = Column(Text, primary_key=True)
    business_id = Column(Text, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    job_status_id = Column(Text, ForeignKey("job_statuses.id"), nullable=False)
    title = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    location_type = Column(Text, nullable=False)
    location_text = Column(Text)
    employment_type = Column(Text, nullable=False)
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    currency = Column(Text)
    description = Column(Text, nullable=False)
    requirements = Column(Text)
    application_option_platform = Column(Boolean, nullable=False, default=True)
    application_option_external = Column(Boolean, nullable=False, default=False)
    external_apply_url = Column(Text)
    external_apply_email = Column(Text)
    published_at = Column(Text)
    expires_at = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    business = relationship("Business", back_populates="jobs")
    job_status = relationship("JobStatus")
    applications = relationship("JobApplication", back_populates="job_post", cascade="all, delete-orphan")

    @property
    def status(self) -> str:
        return self.job_status.code


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(Text, primary_key=True)
    job_post_id = Column(Text, ForeignKey("job_posts.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Text, ForeignKey("users.id", ondelete="SET NULL"))
    applicant_name = Column(Text)
    applicant_email = Column(Text)
    application_method = Column(Text, nullable=False)
    status = Column(Text, nullable=False)
    cv_url = Column(Text)
    resume_url = Column(Text)
    portfolio_url = Column(Text)
    cover_letter = Column(Text)
    external_target = Column(Text)
    external_destination = Column(Text)
    external_clicked_at = Column(Text)
    created_at = Column(Text, nullable=False)

    job_post = relationship("JobPost", back_populates="applications")
    user = relationship("User")
