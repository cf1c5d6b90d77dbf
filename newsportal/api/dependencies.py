from typing import Optional

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.exceptions import AuthenticationError, ForbiddenError
from ..core.security import decode_access_token
from ..models.admin import AdminAccount
from ..services.auth_service import AuthService
from ..services.category_service import CategoryService
from ..services.file_storage import FileStorageService, create_file_storage
from ..services.marquee_service import MarqueeService
from ..services.news_service import NewsService
from ..services.preview_renderer import SocialPreviewRenderer

logger = structlog.get_logger(__name__)

security = HTTPBearer(auto_error=False)


def get_file_storage() -> FileStorageService:
    return create_file_storage()


def get_news_service(
    db: Session = Depends(get_db),
    storage: FileStorageService = Depends(get_file_storage),
) -> NewsService:
    return NewsService(db, storage)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_marquee_service(db: Session = Depends(get_db)) -> MarqueeService:
    return MarqueeService(db)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_preview_renderer() -> SocialPreviewRenderer:
    return SocialPreviewRenderer()


def _admin_from_token(token: str, db: Session) -> Optional[AdminAccount]:
    payload = decode_access_token(token)
    if payload is None or not payload.get("sub"):
        raise ForbiddenError("अमान्य टोकन")

    return AuthService(db).get_active_admin(payload["sub"])


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> AdminAccount:
    """Bearer-token guard for admin endpoints"""
    if not credentials or not credentials.credentials:
        raise AuthenticationError("पहुंच अस्वीकृत। टोकन नहीं मिला")
    return _admin_from_token(credentials.credentials, db)


async def get_current_admin_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[AdminAccount]:
    """Admin behind the token if it is valid; anonymous otherwise"""
    if not credentials or not credentials.credentials:
        return None
    try:
        return _admin_from_token(credentials.credentials, db)
    except (AuthenticationError, ForbiddenError):
        logger.debug("Ignoring invalid token on public route")
        return None
