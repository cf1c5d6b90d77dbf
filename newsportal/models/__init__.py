from .news_article import NewsArticle
from .category import Category
from .marquee import MarqueeContent, MarqueeType
from .admin import AdminAccount, AdminRole

__all__ = ["NewsArticle", "Category", "MarqueeContent", "MarqueeType", "AdminAccount", "AdminRole"]
