from typing import Optional

from .base import SQLAlchemyRepository
from ..models.admin import Admin


class AdminRepository(SQLAlchemyRepository):

    def get_by_username(self, username: str) -> Optional[Admin]:
        return self.db.query(Admin).filter(Admin.username == username).first()

    def add(self, admin: Admin) -> Admin:
        self.db.add(admin)
        self.db.commit()
        self.db.refresh(admin)
        return admin
