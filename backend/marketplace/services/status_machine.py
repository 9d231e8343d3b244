"""Allowed statuses and the shared status-change routine for every entity.

Each entity kind is described once by a ``StatusMachine``. ``change_status``
validates the requested value against that table, loads the entity (optionally
scoped to an owner so a foreign entity reads as missing), applies the status
and any side effect, and commits. Transitions are not gated by the current
status: any allowed value may follow any other.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy.orm import Session

from marketplace.errors import InternalError, NotFoundError, ValidationError, field_error
from marketplace.models import Article, Business, Event, JobPost, JobStatus, Payment
from marketplace.utils.text import utc_now

logger = logging.getLogger(__name__)


def _set_status(db: Session, entity, status: str) -> None:
    entity.status = status


def _set_job_status(db: Session, job: JobPost, status: str) -> None:
    record = db.query(JobStatus).filter(JobStatus.code == status).first()
    if not record:
        raise InternalError("JobStatus not configured")
    job.job_status_id = record.id
    job.job_status = record


@dataclass(frozen=True)
class StatusMachine:
    kind: str
    model: Any
    allowed: tuple[str, ...]
    not_found_code: str
    stamps_published_at: bool = False
    apply: Callable[[Session, Any, str], None] = _set_status

    def validate(self, requested: str | None) -> str:
        if requested not in self.allowed:
            raise ValidationError(
                "Invalid status value",
                details=[field_error("status", f"Status must be one of {', '.join(self.allowed)}")],
            )
        return requested


BUSINESS = StatusMachine("business", Business, ("PENDING", "APPROVED", "REJECTED"), "BUSINESS_NOT_FOUND")
JOB = StatusMachine("job", JobPost, ("ACTIVE", "SUSPENDED", "ARCHIVED"), "JOB_NOT_FOUND", apply=_set_job_status)
ARTICLE = StatusMachine(
    "article", Article, ("PUBLISHED", "SUSPENDED", "ARCHIVED"), "ARTICLE_NOT_FOUND",
    stamps_published_at=True,
)
EVENT = StatusMachine(
    "event", Event, ("PUBLISHED", "CANCELLED", "ARCHIVED", "DRAFT"), "EVENT_NOT_FOUND",
    stamps_published_at=True,
)
# Admin-settable subset; PENDING is only ever the initial value.
PAYMENT = StatusMachine("payment", Payment, ("VERIFIED", "REJECTED"), "PAYMENT_NOT_FOUND")


def transition(db: Session, machine: StatusMachine, entity, status: str) -> None:
    """Apply an already-validated status to a loaded entity without committing."""
    previous = entity.status
    machine.apply(db, entity, status)
    if machine.stamps_published_at and status == "PUBLISHED" and not entity.published_at:
        entity.published_at = utc_now()
    if hasattr(entity, "updated_at"):
        entity.updated_at = utc_now()
    logger.info("%s %s status %s -> %s", machine.kind, entity.id, previous, status)


def change_status(db: Session, machine: StatusMachine, entity_id: str, requested: str | None,
                  scope: list | None = None):
    status = machine.validate(requested)

    query = db.query(machine.model).filter(machine.model.id == entity_id)
    for clause in scope or []:
        query = query.filter(clause)
    entity = query.first()
    if not entity:
        raise NotFoundError(machine.not_found_code)

    transition(db, machine, entity, status)
    db.commit()
    db.refresh(entity)
    return entity
