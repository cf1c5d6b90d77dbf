from .news_repository import NewsRepository
from .category_repository import CategoryRepository
from .marquee_repository import MarqueeRepository
from .admin_repository import AdminRepository

__all__ = ["NewsRepository", "CategoryRepository", "MarqueeRepository", "AdminRepository"]
