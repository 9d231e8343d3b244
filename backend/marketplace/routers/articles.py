from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.dependencies import require_principal, require_role
from marketplace.schemas.article import ArticleCreate, ArticleResponse, ArticleUpdate
from marketplace.schemas.common import StatusUpdate
from marketplace.services import article_service
from marketplace.services.access import ADMIN_ROLE, Principal
from marketplace.services.pagination import Page
from marketplace.utils.response import success

router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("")
async def list_articles(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    q: str | None = None,
    db: Session = Depends(get_db),
):
    articles, meta = article_service.list_articles(db, Page.from_params(page, limit), q=q)
    return success([ArticleResponse.model_validate(a) for a in articles], meta=meta)


@router.get("/me")
async def my_articles(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    articles, meta = article_service.list_my_articles(db, principal.id, Page.from_params(page, limit))
    return success([ArticleResponse.model_validate(a) for a in articles], meta=meta)


@router.post("", status_code=201)
async def create_article(
    req: ArticleCreate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    article = article_service.create_article(db, principal.id, req)
    return success(ArticleResponse.model_validate(article), "Article published", 201)


@router.get("/{id_or_slug}")
async def get_article(id_or_slug: str, db: Session = Depends(get_db)):
    article = article_service.get_published_article(db, id_or_slug)
    return success(ArticleResponse.model_validate(article))


@router.patch("/{article_id}")
async def update_article(
    article_id: str,
    req: ArticleUpdate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
):
    article = article_service.update_article(db, principal.id, article_id, req)
    return success(ArticleResponse.model_validate(article), "Article updated")


@router.patch("/{article_id}/status", dependencies=[Depends(require_role(ADMIN_ROLE))])
async def change_article_status(article_id: str, req: StatusUpdate, db: Session = Depends(get_db)):
    article = article_service.change_article_status(db, article_id, req.status)
    return success(ArticleResponse.model_validate(article), "Article status updated")
