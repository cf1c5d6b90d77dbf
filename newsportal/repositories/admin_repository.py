from typing import Optional

from sqlalchemy.orm import Session

from ..models.admin import AdminAccount


class AdminRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, admin: AdminAccount) -> AdminAccount:
        self.session.add(admin)
        self.session.commit()
        self.session.refresh(admin)
        return admin

    def get(self, admin_id: str) -> Optional[AdminAccount]:
        return self.session.query(AdminAccount).filter(AdminAccount.id == admin_id).first()

    def get_by_email(self, email: str) -> Optional[AdminAccount]:
        return self.session.query(AdminAccount).filter(AdminAccount.email == email.strip().lower()).first()
