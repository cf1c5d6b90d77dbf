import structlog
from sqlalchemy.orm import Session

from ..core.exceptions import AuthenticationError
from ..core.security import create_access_token, verify_password
from ..models.admin import AdminAccount
from ..repositories.admin_repository import AdminRepository

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "अमान्य ईमेल या पासवर्ड"


class AuthService:
    def __init__(self, db: Session):
        self.repository = AdminRepository(db)

    def login(self, email: str, password: str) -> tuple[str, AdminAccount]:
        """Check credentials and issue a bearer token for the admin."""
        admin = self.repository.get_by_email(email)
        if not admin or not verify_password(password, admin.password_hash):
            logger.warning("Failed admin login", email=email)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not admin.is_active:
            logger.warning("Login attempt on inactive admin", admin_id=admin.id)
            raise AuthenticationError("खाता निष्क्रिय है")

        logger.info("Admin logged in", admin_id=admin.id)
        return create_access_token(admin.id), admin

    def get_active_admin(self, admin_id: str) -> AdminAccount:
        admin = self.repository.get(admin_id)
        if not admin or not admin.is_active:
            raise AuthenticationError("उपयोगकर्ता नहीं मिला या निष्क्रिय है")
        return admin
