"""
Open Graph / Twitter Card documents for link-preview crawlers.

The SPA is client-rendered, so crawlers that do not execute JavaScript would
see an empty shell. ``GET /news/{slug}`` instead serves a small static page
carrying the article's meta tags, and sends human visitors on to the SPA's
hash route with a script redirect that crawlers ignore.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote

from jinja2 import Environment, PackageLoader, select_autoescape

from ..config import Settings, get_settings
from ..models.news_article import NewsArticle
from ..utils.html_text import strip_html, truncate_text

SOCIAL_CRAWLER_PATTERN = re.compile(
    r"(facebookexternalhit|Facebot|Twitterbot|WhatsApp|TelegramBot|Slackbot|vkShare|"
    r"Discordbot|LinkedInBot|Pinterest|SkypeUriPreview|redditbot|Applebot)",
    re.IGNORECASE,
)

_environment = Environment(
    loader=PackageLoader("newsportal", "templates"),
    autoescape=select_autoescape(["html"]),
)


def is_social_crawler(user_agent: Optional[str]) -> bool:
    if not user_agent:
        return False
    return SOCIAL_CRAWLER_PATTERN.search(user_agent) is not None


@dataclass
class PreviewMeta:
    title: str
    description: str
    url: str
    image: str
    section: str
    published_time: str


class SocialPreviewRenderer:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def absolute_url(self, path: Optional[str]) -> str:
        if not path:
            return ""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.settings.site_url}{path if path.startswith('/') else '/' + path}"

    def canonical_url(self, slug: str) -> str:
        return self.absolute_url(f"/news/{quote(slug)}")

    def spa_url(self, slug: str) -> str:
        return self.settings.spa_news_path.format(slug=quote(slug))

    @property
    def logo_url(self) -> str:
        return self.absolute_url(self.settings.site_logo_path)

    def describe(self, article: NewsArticle) -> str:
        source = article.short_description or article.description or ""
        return truncate_text(strip_html(source, separator=" "), self.settings.preview_description_length)

    @staticmethod
    def _published_time(created_at: Optional[datetime]) -> str:
        if not created_at:
            return ""
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return created_at.isoformat()

    def build_meta(self, article: NewsArticle) -> PreviewMeta:
        return PreviewMeta(
            title=strip_html(article.title or ""),
            description=self.describe(article),
            url=self.canonical_url(article.slug),
            image=self.absolute_url(article.image_url) or self.logo_url,
            section=article.category or "",
            published_time=self._published_time(article.created_at),
        )

    def render_article(self, article: NewsArticle, redirect: bool = True) -> str:
        template = _environment.get_template("preview_article.html")
        return template.render(
            meta=self.build_meta(article),
            site_name=self.settings.site_name,
            author=self.settings.site_author,
            twitter_handle=self.settings.twitter_handle,
            redirect_url=self.spa_url(article.slug) if redirect else None,
        )

    def render_not_found(self, slug: str) -> str:
        template = _environment.get_template("preview_not_found.html")
        return template.render(
            site_name=self.settings.site_name,
            logo_url=self.logo_url,
            url=self.canonical_url(slug),
        )
