"""
Startup data: the default Hindi categories and the bootstrap admin account.
Both are ensure-exists, so restarts never duplicate or overwrite rows.
"""

import structlog
from sqlalchemy.orm import Session

from ..config import Settings
from ..core.security import hash_password
from ..models.admin import AdminAccount, AdminRole
from ..repositories.admin_repository import AdminRepository
from ..repositories.category_repository import CategoryRepository

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORIES = [
    ("ग्राम समाचार", "गांव और ग्रामीण क्षेत्रों से जुड़ी खबरें"),
    ("राजनीति", "राजनीतिक घटनाओं और समाचार"),
    ("शिक्षा", "शिक्षा से जुड़ी खबरें और घटनाएं"),
    ("मौसम", "मौसम और जलवायु से जुड़ी जानकारी"),
    ("स्वास्थ्य", "स्वास्थ्य और चिकित्सा से जुड़ी खबरें"),
    ("कृषि", "कृषि और किसानों से जुड़ी जानकारी"),
    ("मनोरंजन", "मनोरंजन और सांस्कृतिक समाचार"),
    ("अन्य", "अन्य महत्वपूर्ण समाचार"),
]


def ensure_default_categories(db: Session) -> int:
    repository = CategoryRepository(db)
    created = 0
    for name, description in DEFAULT_CATEGORIES:
        if not repository.exists(name):
            repository.create(name, description)
            created += 1
    if created:
        logger.info("Seeded default categories", created=created)
    return created


def ensure_admin_account(db: Session, settings: Settings) -> bool:
    if not settings.admin_password:
        logger.warning("Admin password not configured, skipping admin seed")
        return False

    repository = AdminRepository(db)
    if repository.get_by_email(settings.admin_email):
        return False

    repository.create(
        AdminAccount(
            email=settings.admin_email.strip().lower(),
            password_hash=hash_password(settings.admin_password),
            name=settings.admin_name,
            role=AdminRole.ADMIN.value,
        )
    )
    logger.info("Created admin account", email=settings.admin_email)
    return True
