from typing import List, Optional, Tuple

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..models.category import Category


class CategoryRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, name: str, description: Optional[str] = None) -> Category:
        category = Category(name=name, description=description)
        self.session.add(category)
        self.session.commit()
        self.session.refresh(category)
        return category

    def get(self, category_id: str) -> Optional[Category]:
        return self.session.query(Category).filter(Category.id == category_id).first()

    def get_by_name(self, name: str) -> Optional[Category]:
        return self.session.query(Category).filter(Category.name == name).first()

    def exists(self, name: str) -> bool:
        return self.get_by_name(name) is not None

    def list(self, offset: int = 0, limit: int = 10) -> Tuple[List[Category], int]:
        query = self.session.query(Category)
        total = query.count()
        categories = query.order_by(desc(Category.created_at)).offset(offset).limit(limit).all()
        return categories, total

    def save(self, category: Category) -> Category:
        self.session.commit()
        self.session.refresh(category)
        return category

    def delete(self, category: Category) -> None:
        self.session.delete(category)
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
