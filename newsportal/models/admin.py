import uuid
from enum import Enum

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func

from ..core.database import Base


class AdminRole(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"


class AdminAccount(Base):
    __tablename__ = "admin_accounts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(254), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False)
    role = Column(String(20), default=AdminRole.ADMIN.value, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<AdminAccount(id={self.id}, email='{self.email}', role='{self.role}')>"
