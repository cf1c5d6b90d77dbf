"""Link-preview pages served outside the /api prefix"""

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ...core.exceptions import NotFoundError
from ...core.rate_limit import public_limiter
from ...services.news_service import NewsService
from ...services.preview_renderer import SocialPreviewRenderer, is_social_crawler
from ..dependencies import get_news_service, get_preview_renderer

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/news/{slug}", response_class=HTMLResponse, dependencies=[Depends(public_limiter)])
async def news_preview(
    slug: str,
    request: Request,
    news_service: NewsService = Depends(get_news_service),
    renderer: SocialPreviewRenderer = Depends(get_preview_renderer),
):
    crawler = is_social_crawler(request.headers.get("user-agent"))
    try:
        article = news_service.get_by_slug(slug)
    except NotFoundError:
        logger.info("Preview requested for unknown slug", slug=slug, crawler=crawler)
        return HTMLResponse(renderer.render_not_found(slug), status_code=404)

    logger.info("Serving article preview", slug=slug, crawler=crawler)
    return HTMLResponse(renderer.render_article(article, redirect=not crawler))
