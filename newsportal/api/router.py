from fastapi import APIRouter

from .endpoints import auth, categories, health, marquee, news

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(news.router, prefix="/news", tags=["news"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(marquee.router, prefix="/marquee", tags=["marquee"])
