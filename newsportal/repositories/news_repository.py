from typing import List, Optional, Tuple

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session

from ..models.news_article import NewsArticle


class NewsRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, article: NewsArticle) -> NewsArticle:
        self.session.add(article)
        self.session.commit()
        self.session.refresh(article)
        return article

    def save(self, article: NewsArticle) -> NewsArticle:
        self.session.commit()
        self.session.refresh(article)
        return article

    def get(self, article_id: str, published_only: bool = False) -> Optional[NewsArticle]:
        query = self.session.query(NewsArticle).filter(NewsArticle.id == article_id)
        if published_only:
            query = query.filter(NewsArticle.is_published == True)  # noqa: E712
        return query.first()

    def get_by_slug(self, slug: str, published_only: bool = True) -> Optional[NewsArticle]:
        query = self.session.query(NewsArticle).filter(NewsArticle.slug == slug)
        if published_only:
            query = query.filter(NewsArticle.is_published == True)  # noqa: E712
        return query.first()

    def slug_taken(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        query = self.session.query(NewsArticle.id).filter(NewsArticle.slug == slug)
        if exclude_id:
            query = query.filter(NewsArticle.id != exclude_id)
        return query.first() is not None

    def list(
        self,
        published_only: bool,
        category: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[NewsArticle], int]:
        query = self.session.query(NewsArticle)

        if published_only:
            query = query.filter(NewsArticle.is_published == True)  # noqa: E712

        if category:
            query = query.filter(NewsArticle.category == category)

        if search:
            query = query.filter(
                or_(
                    NewsArticle.title.ilike(f"%{search}%"),
                    NewsArticle.description.ilike(f"%{search}%"),
                )
            )

        total = query.count()
        articles = (
            query.order_by(desc(NewsArticle.created_at))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return articles, total

    def delete(self, article: NewsArticle) -> None:
        self.session.delete(article)
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
