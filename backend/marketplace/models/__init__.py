from marketplace.models.user import User, Role, AuthToken, user_roles
from marketplace.models.business import Business
from marketplace.models.job import JobStatus, JobPost, JobApplication
from marketplace.models.contributor import ContributorProfile
from marketplace.models.article import Article
from marketplace.models.event import Event, EventRegistration
from marketplace.models.payment import Payment

__all__ = [
    "User", "Role", "AuthToken", "user_roles", "Business", "JobStatus", "JobPost",
    "JobApplication", "ContributorProfile", "Article", "Event", "EventRegistration", "Payment",
]
