from typing import List, Tuple

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import ConflictError, NotFoundError
from ..models.category import Category
from ..repositories.category_repository import CategoryRepository
from ..schemas.requests import CategoryRequest

logger = structlog.get_logger(__name__)


class CategoryService:
    """Category CRUD; names are unique"""

    def __init__(self, db: Session):
        self.repository = CategoryRepository(db)

    def list_categories(self, page: int = 1, limit: int = 10) -> Tuple[List[Category], int]:
        return self.repository.list(offset=(page - 1) * limit, limit=limit)

    def get_category(self, category_id: str) -> Category:
        category = self.repository.get(category_id)
        if not category:
            raise NotFoundError("श्रेणी नहीं मिली")
        return category

    def _check_name_free(self, name: str, exclude_id: str = None) -> None:
        existing = self.repository.get_by_name(name)
        if existing and existing.id != exclude_id:
            raise ConflictError("यह श्रेणी पहले से मौजूद है", details={"name": name})

    def create_category(self, request: CategoryRequest) -> Category:
        self._check_name_free(request.name)
        try:
            category = self.repository.create(request.name, request.description)
        except IntegrityError as e:
            self.repository.rollback()
            raise ConflictError("यह श्रेणी पहले से मौजूद है", details={"name": request.name}) from e
        logger.info("Created category", category_id=category.id, name=category.name)
        return category

    def update_category(self, category_id: str, request: CategoryRequest) -> Category:
        category = self.get_category(category_id)
        self._check_name_free(request.name, exclude_id=category.id)
        category.name = request.name
        category.description = request.description
        try:
            category = self.repository.save(category)
        except IntegrityError as e:
            self.repository.rollback()
            raise ConflictError("यह श्रेणी पहले से मौजूद है", details={"name": request.name}) from e
        logger.info("Updated category", category_id=category.id)
        return category

    def delete_category(self, category_id: str) -> None:
        # Articles keep their category name; it is only checked on write
        category = self.get_category(category_id)
        self.repository.delete(category)
        logger.info("Deleted category", category_id=category_id)
