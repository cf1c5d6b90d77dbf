from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Request

from ...core.rate_limit import admin_limiter, heavy_limiter, public_limiter
from ...models.admin import AdminAccount
from ...schemas.responses import (
    APIResponse,
    NewsArticleResponse,
    NewsListResponse,
    Pagination,
    UploadedImageResponse,
)
from ...services.news_service import NewsService
from ...services.upload_policy import article_upload_policy, editor_image_upload_policy
from ..dependencies import get_current_admin, get_current_admin_optional, get_news_service

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=APIResponse[NewsListResponse], dependencies=[Depends(public_limiter)])
async def list_news(
    category: Optional[str] = Query(None, description="Filter by category name"),
    search: Optional[str] = Query(None, description="Search in title and description"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    admin: Optional[AdminAccount] = Depends(get_current_admin_optional),
    news_service: NewsService = Depends(get_news_service),
):
    """List articles, newest first. Drafts are included only for admins."""
    articles, total = news_service.list_articles(
        include_unpublished=admin is not None,
        category=category,
        search=search,
        page=page,
        limit=limit,
    )
    return APIResponse.ok(
        NewsListResponse(news=articles, pagination=Pagination.build(page, limit, total))
    )


@router.get("/slug/{slug}", response_model=APIResponse[NewsArticleResponse], dependencies=[Depends(public_limiter)])
async def get_news_by_slug(slug: str, news_service: NewsService = Depends(get_news_service)):
    article = news_service.get_by_slug(slug)
    return APIResponse.ok(news_service.to_response(article))


@router.post(
    "/upload-image",
    response_model=APIResponse[UploadedImageResponse],
    dependencies=[Depends(heavy_limiter)],
)
async def upload_editor_image(
    request: Request,
    current_admin: AdminAccount = Depends(get_current_admin),
    news_service: NewsService = Depends(get_news_service),
):
    """Store one rich-text editor image and return its public path"""
    bundle = await editor_image_upload_policy().parse(request)
    url, filename = news_service.upload_editor_image(bundle)
    logger.info("Editor image uploaded", admin_id=current_admin.id, path=url)
    return APIResponse.ok(UploadedImageResponse(url=url, filename=filename), message="छवि अपलोड हुई")


@router.get("/{article_id}", response_model=APIResponse[NewsArticleResponse], dependencies=[Depends(public_limiter)])
async def get_news(
    article_id: str,
    admin: Optional[AdminAccount] = Depends(get_current_admin_optional),
    news_service: NewsService = Depends(get_news_service),
):
    article = news_service.get_article(article_id, include_unpublished=admin is not None)
    return APIResponse.ok(news_service.to_response(article))


@router.post(
    "",
    response_model=APIResponse[NewsArticleResponse],
    status_code=201,
    dependencies=[Depends(heavy_limiter)],
)
async def create_news(
    request: Request,
    current_admin: AdminAccount = Depends(get_current_admin),
    news_service: NewsService = Depends(get_news_service),
):
    bundle = await article_upload_policy().parse(request)
    article = news_service.create_article(bundle)
    return APIResponse.ok(news_service.to_response(article), message="समाचार सफलतापूर्वक बनाया गया")


@router.put("/{article_id}", response_model=APIResponse[NewsArticleResponse], dependencies=[Depends(heavy_limiter)])
async def update_news(
    article_id: str,
    request: Request,
    current_admin: AdminAccount = Depends(get_current_admin),
    news_service: NewsService = Depends(get_news_service),
):
    bundle = await article_upload_policy().parse(request)
    article = news_service.update_article(article_id, bundle)
    return APIResponse.ok(news_service.to_response(article), message="समाचार सफलतापूर्वक अपडेट किया गया")


@router.delete("/{article_id}", response_model=APIResponse[None], dependencies=[Depends(admin_limiter)])
async def delete_news(
    article_id: str,
    current_admin: AdminAccount = Depends(get_current_admin),
    news_service: NewsService = Depends(get_news_service),
):
    news_service.delete_article(article_id)
    return APIResponse.ok(message="समाचार सफलतापूर्वक हटाया गया")
