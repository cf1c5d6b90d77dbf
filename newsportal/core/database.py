from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from ..config import get_settings

settings = get_settings()


def engine_options(database_url: str) -> Dict[str, Any]:
    # SQLite connections are shared with the threadpool; server databases get a pool
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }


engine = create_engine(settings.database_url, echo=settings.debug, **engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    """Create the article, category, marquee and admin tables if missing."""
    from ..models import admin, category, marquee, news_article  # noqa: F401
    Base.metadata.create_all(bind=engine)
