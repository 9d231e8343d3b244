from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from marketplace.database import Base


class Article(Base):
    __tablename__ = "articles"

    id = Column(Text, primary_key=True)
    author_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    excerpt = Column(Text)
    content = Column(Text, nullable=False)
    cover_image_url = Column(Text)
    status = Column(Text, nullable=False)
    published_at = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    author = relationship("User")
