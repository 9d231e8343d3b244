from marketplace.schemas.common import CamelModel, RequiredStr


class ArticleCreate(CamelModel):
    title: RequiredStr
    content: RequiredStr
    excerpt: str | None = None
    cover_image_url: str | None = None


class ArticleUpdate(CamelModel):
    title: str | None = None
    excerpt: str | None = None
    content: str | None = None
    cover_image_url: str | None = None


class ArticleResponse(CamelModel):
    id: str
    author_id: str
    title: str
    slug: str
    excerpt: str | None
    content: str
    cover_image_url: str | None
    status: str
    published_at: str | None
    created_at: str
    updated_at: str
