import uuid
from enum import Enum

from sqlalchemy import Column, String, Integer, Boolean, DateTime
from sqlalchemy.sql import func

from ..core.database import Base


class MarqueeType(str, Enum):
    BREAKING = "breaking"
    ANNOUNCEMENT = "announcement"


class MarqueeContent(Base):
    """Scrolling banner item shown on the public site"""
    __tablename__ = "marquee_contents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    content = Column(String(300), nullable=False)
    type = Column(String(20), nullable=False)  # MarqueeType value
    is_active = Column(Boolean, default=True, nullable=False)
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
