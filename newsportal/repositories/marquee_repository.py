from typing import List, Optional

from sqlalchemy import asc, desc
from sqlalchemy.orm import Session

from ..models.marquee import MarqueeContent


class MarqueeRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, item: MarqueeContent) -> MarqueeContent:
        self.session.add(item)
        self.session.commit()
        self.session.refresh(item)
        return item

    def get(self, item_id: str) -> Optional[MarqueeContent]:
        return self.session.query(MarqueeContent).filter(MarqueeContent.id == item_id).first()

    def list(self, active_only: bool = True, item_type: Optional[str] = None) -> List[MarqueeContent]:
        query = self.session.query(MarqueeContent)
        if active_only:
            query = query.filter(MarqueeContent.is_active == True)  # noqa: E712
        if item_type:
            query = query.filter(MarqueeContent.type == item_type)
        return query.order_by(asc(MarqueeContent.order), desc(MarqueeContent.created_at)).all()

    def save(self, item: MarqueeContent) -> MarqueeContent:
        self.session.commit()
        self.session.refresh(item)
        return item

    def delete(self, item: MarqueeContent) -> None:
        self.session.delete(item)
        self.session.commit()
