from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..models.marquee import MarqueeContent, MarqueeType
from ..repositories.marquee_repository import MarqueeRepository
from ..schemas.requests import MarqueeCreateRequest, MarqueeUpdateRequest

logger = structlog.get_logger(__name__)


class MarqueeService:
    def __init__(self, db: Session):
        self.repository = MarqueeRepository(db)

    def list_items(self, include_inactive: bool, item_type: Optional[MarqueeType] = None) -> List[MarqueeContent]:
        return self.repository.list(
            active_only=not include_inactive,
            item_type=item_type.value if item_type else None,
        )

    def get_item(self, item_id: str) -> MarqueeContent:
        item = self.repository.get(item_id)
        if not item:
            raise NotFoundError("मार्की सामग्री नहीं मिली")
        return item

    def create_item(self, request: MarqueeCreateRequest) -> MarqueeContent:
        item = self.repository.create(
            MarqueeContent(
                content=request.content,
                type=request.type.value,
                is_active=request.is_active,
                order=request.order,
            )
        )
        logger.info("Created marquee item", item_id=item.id, type=item.type)
        return item

    def update_item(self, item_id: str, request: MarqueeUpdateRequest) -> MarqueeContent:
        item = self.get_item(item_id)
        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        if "type" in changes:
            changes["type"] = changes["type"].value
        for attribute, value in changes.items():
            setattr(item, attribute, value)
        item = self.repository.save(item)
        logger.info("Updated marquee item", item_id=item.id, fields=sorted(changes))
        return item

    def delete_item(self, item_id: str) -> None:
        item = self.get_item(item_id)
        self.repository.delete(item)
        logger.info("Deleted marquee item", item_id=item_id)
