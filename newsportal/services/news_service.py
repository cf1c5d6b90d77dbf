"""
News article service.

Owns the write path for articles: form validation, category and slug checks,
inline-image extraction and media file lifecycle. Reads hide unpublished
articles from anonymous callers.
"""

from typing import List, Optional, Tuple, Type

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..models.news_article import NewsArticle
from ..repositories.category_repository import CategoryRepository
from ..repositories.news_repository import NewsRepository
from ..schemas.requests import MAX_DESCRIPTION_LENGTH, ArticleCreateFields, ArticleUpdateFields
from ..schemas.responses import NewsArticleResponse
from ..utils.slug import slugify
from .base64_images import Base64ImageExtractor
from .file_storage import FileStorageService
from .upload_policy import UploadBundle, UploadedPart

logger = structlog.get_logger(__name__)

NOT_FOUND_MESSAGE = "समाचार नहीं मिला"


def validation_errors(error: PydanticValidationError) -> List[dict]:
    """Flatten pydantic errors into ``{field, message}`` pairs."""
    errors = []
    for item in error.errors():
        location = [str(part) for part in item.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(location), "message": item.get("msg", "Invalid value")})
    return errors


def parse_fields(model: Type[BaseModel], fields: dict) -> BaseModel:
    try:
        return model.model_validate(fields)
    except PydanticValidationError as e:
        raise ValidationError("मान्यकरण त्रुटि", errors=validation_errors(e)) from e


class NewsService:
    def __init__(self, db: Session, storage: FileStorageService):
        self.db = db
        self.storage = storage
        self.repository = NewsRepository(db)
        self.categories = CategoryRepository(db)
        self.extractor = Base64ImageExtractor(storage)

    def to_response(self, article: NewsArticle) -> NewsArticleResponse:
        response = NewsArticleResponse.model_validate(article)
        # Files can vanish from disk; do not hand out dead links
        if response.image_url and not self.storage.exists(response.image_url):
            logger.warning("Featured image missing on disk", article_id=article.id, path=response.image_url)
            response.image_url = None
        return response

    def list_articles(
        self,
        include_unpublished: bool,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[NewsArticleResponse], int]:
        articles, total = self.repository.list(
            published_only=not include_unpublished,
            category=category or None,
            search=search.strip() if search and search.strip() else None,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return [self.to_response(article) for article in articles], total

    def get_article(self, article_id: str, include_unpublished: bool = False) -> NewsArticle:
        article = self.repository.get(article_id, published_only=not include_unpublished)
        if not article:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return article

    def get_by_slug(self, slug: str) -> NewsArticle:
        article = self.repository.get_by_slug(slug, published_only=True)
        if not article:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return article

    def _ensure_category(self, name: str) -> None:
        if not self.categories.exists(name):
            raise ValidationError(
                "अमान्य श्रेणी",
                errors=[{"field": "category", "message": f"Unknown category: {name}"}],
            )

    def _resolve_slug(self, requested: Optional[str], title: str, exclude_id: Optional[str] = None) -> Optional[str]:
        slug = slugify(requested or title) or None
        if slug and self.repository.slug_taken(slug, exclude_id=exclude_id):
            raise ConflictError("यह स्लग पहले से उपयोग में है", details={"slug": slug})
        return slug

    def _store(self, part: Optional[UploadedPart]) -> Optional[str]:
        if part is None:
            return None
        return self.storage.save_stream(part.file, part.filename)

    def _commit(self, article: NewsArticle, create: bool) -> NewsArticle:
        try:
            if create:
                return self.repository.create(article)
            return self.repository.save(article)
        except IntegrityError as e:
            self.repository.rollback()
            logger.warning("Article write rejected by store", slug=article.slug, error=str(e.orig))
            raise ConflictError("यह स्लग पहले से उपयोग में है", details={"slug": article.slug}) from e

    def _externalize_images(self, description: str) -> str:
        html = self.extractor.extract(description)
        if len(html) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                "मान्यकरण त्रुटि",
                errors=[{
                    "field": "description",
                    "message": f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters",
                }],
            )
        return html

    def create_article(self, bundle: UploadBundle) -> NewsArticle:
        fields = parse_fields(ArticleCreateFields, bundle.fields)
        self._ensure_category(fields.category)
        slug = self._resolve_slug(fields.slug, fields.title)

        description = self._externalize_images(fields.description)

        article = NewsArticle(
            title=fields.title,
            short_description=fields.short_description,
            description=description,
            category=fields.category,
            slug=slug,
            video_url=fields.video_url,
            image_url=self._store(bundle.featured_image),
            video_file_url=self._store(bundle.video_file),
            is_published=fields.is_published,
        )
        article = self._commit(article, create=True)
        logger.info("Created article", article_id=article.id, slug=article.slug, published=article.is_published)
        return article

    def update_article(self, article_id: str, bundle: UploadBundle) -> NewsArticle:
        article = self.get_article(article_id, include_unpublished=True)
        fields = parse_fields(ArticleUpdateFields, bundle.fields)
        provided = fields.model_fields_set

        # Checks run before any attribute changes so a rejected update leaves the row untouched
        if fields.category is not None:
            self._ensure_category(fields.category)
        title = fields.title if fields.title is not None else article.title
        if "slug" in provided:
            slug = self._resolve_slug(fields.slug, title, exclude_id=article.id)
        description = None
        if fields.description is not None:
            description = self._externalize_images(fields.description)

        if fields.category is not None:
            article.category = fields.category
        article.title = title
        if "slug" in provided:
            article.slug = slug
        if "short_description" in provided:
            article.short_description = fields.short_description
        if description is not None:
            article.description = description
        if "video_url" in provided:
            article.video_url = fields.video_url or None
        if fields.is_published is not None:
            article.is_published = fields.is_published

        stale_files = []
        featured_image = bundle.featured_image
        if featured_image is not None or fields.remove_image:
            if article.image_url:
                stale_files.append(article.image_url)
            article.image_url = self._store(featured_image)

        video_file = bundle.video_file
        if video_file is not None or fields.remove_video_file:
            if article.video_file_url:
                stale_files.append(article.video_file_url)
            article.video_file_url = self._store(video_file)

        article = self._commit(article, create=False)
        for path in stale_files:
            self.storage.delete(path)

        logger.info("Updated article", article_id=article.id, replaced_files=len(stale_files))
        return article

    def delete_article(self, article_id: str) -> None:
        article = self.get_article(article_id, include_unpublished=True)
        files = article.stored_files
        for path in files:
            self.storage.delete(path)
        self.repository.delete(article)
        logger.info("Deleted article", article_id=article_id, files=len(files))

    def upload_editor_image(self, bundle: UploadBundle) -> Tuple[str, str]:
        part = bundle.first(*bundle.files.keys()) if bundle.files else None
        if part is None:
            raise ValidationError(
                "कोई छवि नहीं मिली",
                errors=[{"field": "image", "message": "An image file is required"}],
            )
        url = self._store(part)
        return url, url.rsplit("/", 1)[-1]
