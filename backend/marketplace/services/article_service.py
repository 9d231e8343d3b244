from sqlalchemy.orm import Session

from marketplace.errors import NotFoundError
from marketplace.models import Article
from marketplace.schemas.article import ArticleCreate, ArticleUpdate
from marketplace.services import status_machine
from marketplace.services.contributor_service import ensure_active_contributor
from marketplace.services.pagination import Page, paginate, text_search
from marketplace.utils.text import new_id, unique_slug, utc_now


def list_articles(db: Session, page: Page, q: str | None = None):
    query = db.query(Article).filter(Article.status == "PUBLISHED")
    search = text_search(q, Article.title, Article.content)
    if search is not None:
        query = query.filter(search)
    return paginate(query, page, Article.published_at.desc())


def list_my_articles(db: Session, author_id: str, page: Page):
    query = db.query(Article).filter(Article.author_id == author_id)
    return paginate(query, page, Article.created_at.desc())


def list_articles_admin(db: Session, page: Page, q: str | None = None, status: str | None = None,
                        author_id: str | None = None):
    query = db.query(Article)
    if status:
        query = query.filter(Article.status == status)
    if author_id:
        query = query.filter(Article.author_id == author_id)
    search = text_search(q, Article.title, Article.content)
    if search is not None:
        query = query.filter(search)
    return paginate(query, page, Article.created_at.desc())


def create_article(db: Session, author_id: str, req: ArticleCreate) -> Article:
    ensure_active_contributor(db, author_id)

    now = utc_now()
    article = Article(
        id=new_id(),
        author_id=author_id,
        title=req.title,
        slug=unique_slug(db, Article, req.title),
        excerpt=req.excerpt or None,
        content=req.content,
        cover_image_url=req.cover_image_url or None,
        status="PUBLISHED",
        published_at=now,
        created_at=now,
        updated_at=now,
    )
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


def get_published_article(db: Session, id_or_slug: str) -> Article:
    article = db.query(Article).filter(Article.id == id_or_slug).first()
    if not article:
        article = db.query(Article).filter(Article.slug == id_or_slug).first()
    if not article or article.status != "PUBLISHED":
        raise NotFoundError("ARTICLE_NOT_FOUND")
    return article


def update_article(db: Session, author_id: str, article_id: str, req: ArticleUpdate) -> Article:
    article = (
        db.query(Article)
        .filter(Article.id == article_id, Article.author_id == author_id)
        .first()
    )
    if not article:
        raise NotFoundError("ARTICLE_NOT_FOUND")

    for key, value in req.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(article, key, value)
    article.updated_at = utc_now()
    db.commit()
    db.refresh(article)
    return article


def change_article_status(db: Session, article_id: str, status: str | None) -> Article:
    return status_machine.change_status(db, status_machine.ARTICLE, article_id, status)
