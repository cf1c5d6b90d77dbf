import os
import tempfile

import pytest

from .helpers import ADMIN_EMAIL, ADMIN_PASSWORD

# Settings are cached on first import, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="newsportal-uploads-"))
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("SITE_URL", "https://purvanchallive.in")


@pytest.fixture
def test_db():
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker
    from sqlalchemy.pool import StaticPool
    from newsportal.core.database import Base
    from newsportal.models import admin, category, marquee, news_article  # noqa: F401

    # Use in-memory SQLite for tests; StaticPool shares it across threads
    SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def storage(tmp_path):
    from newsportal.services.file_storage import FileStorageService
    return FileStorageService(str(tmp_path / "uploads"))


@pytest.fixture
def seeded_categories(test_db):
    from newsportal.services.seed import ensure_default_categories
    ensure_default_categories(test_db)
    return test_db


@pytest.fixture
def admin_account(test_db):
    from newsportal.core.security import hash_password
    from newsportal.models.admin import AdminAccount

    admin = AdminAccount(
        email=ADMIN_EMAIL,
        password_hash=hash_password(ADMIN_PASSWORD),
        name="परीक्षण व्यवस्थापक",
    )
    test_db.add(admin)
    test_db.commit()
    test_db.refresh(admin)
    return admin


@pytest.fixture
def auth_headers(admin_account):
    from newsportal.core.security import create_access_token
    return {"Authorization": f"Bearer {create_access_token(admin_account.id)}"}


@pytest.fixture
async def async_client(test_db, storage):
    from httpx import AsyncClient, ASGITransport
    from newsportal.main import app
    from newsportal.core.database import get_db
    from newsportal.core.rate_limit import counter
    from newsportal.api.dependencies import get_file_storage

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: storage
    counter.reset()

    # Use ASGITransport for direct app interaction
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
    counter.reset()


@pytest.fixture
def make_article(test_db):
    from newsportal.models.news_article import NewsArticle

    def _make(**overrides):
        values = {
            "title": "Village fair draws crowds",
            "short_description": "Annual fair opens",
            "description": "<p>The annual village fair opened today.</p>",
            "category": "ग्राम समाचार",
            "slug": "village-fair-draws-crowds",
            "is_published": True,
        }
        values.update(overrides)
        article = NewsArticle(**values)
        test_db.add(article)
        test_db.commit()
        test_db.refresh(article)
        return article

    return _make
