import math
from dataclasses import dataclass

from sqlalchemy import or_

from marketplace.config import settings


def _positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass(frozen=True)
class Page:
    page: int = 1
    limit: int = 10

    @classmethod
    def from_params(cls, page=None, limit=None) -> "Page":
        size = min(_positive_int(limit, settings.default_page_limit), settings.max_page_limit)
        return cls(page=_positive_int(page, 1), limit=size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total_items: int) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "totalItems": total_items,
            "totalPages": math.ceil(total_items / self.limit),
        }


def text_search(q: str | None, *columns):
    """Case-insensitive substring match of ``q`` OR-ed over ``columns``."""
    if not q:
        return None
    pattern = f"%{q}%"
    return or_(*(column.ilike(pattern) for column in columns))


def paginate(query, page: Page, *order_by) -> tuple[list, dict]:
    # Count over the full filtered set, independent of the slice.
    total = query.order_by(None).count()
    items = query.order_by(*order_by).offset(page.offset).limit(page.limit).all()
    return items, page.meta(total)
