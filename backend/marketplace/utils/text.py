import re
import time
import uuid
from datetime import datetime, timezone

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> str:
    return datetime.now(timezone.utc).strftime(_TIMESTAMP_FORMAT)


def to_timestamp(value: datetime) -> str:
    """Normalise an aware or naive (assumed UTC) datetime to the stored text form."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(_TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value, _TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def slugify(title: str, millis: int | None = None) -> str:
    """Lowercase, non-alphanumerics collapsed to '-', suffixed with epoch millis."""
    base = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    if millis is None:
        millis = int(time.time() * 1000)
    return f"{base}-{millis}"


def unique_slug(db, model, title: str) -> str:
    """``slugify`` that bumps the millisecond suffix past slugs already taken."""
    millis = int(time.time() * 1000)
    slug = slugify(title, millis)
    while db.query(model.id).filter(model.slug == slug).first():
        millis += 1
        slug = slugify(title, millis)
    return slug
