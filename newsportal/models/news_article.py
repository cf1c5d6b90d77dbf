import uuid

from sqlalchemy import Column, String, Text, DateTime, Boolean, Index
from sqlalchemy.sql import func

from ..core.database import Base


def generate_uuid():
    return str(uuid.uuid4())


class NewsArticle(Base):
    """
    A published or draft news article.
    The rich-text body is stored as HTML; inline images are externalized to the
    upload root before the article is saved.
    """
    __tablename__ = "news_articles"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    title = Column(String(200), nullable=False)
    short_description = Column(String(500))
    description = Column(Text, nullable=False)  # Rich text HTML
    # Category name, checked against categories on write only
    category = Column(String(50), nullable=False)
    # NULL for articles without a slug, so uniqueness only binds real slugs
    slug = Column(String(200), unique=True, nullable=True)

    # Media
    image_url = Column(String(500))
    video_url = Column(String(1000))  # External embed link
    video_file_url = Column(String(500))

    is_published = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_news_articles_category_published_created", "category", "is_published", "created_at"),
    )

    def __repr__(self):
        return f"<NewsArticle(id={self.id}, title='{self.title[:50]}', slug='{self.slug}')>"

    @property
    def stored_files(self) -> list[str]:
        """Upload-root paths owned by this article"""
        return [path for path in (self.image_url, self.video_file_url) if path]
