from sqlalchemy import Column, Integer, String
from hotel_api.database import BaseModel

ROLE_USER = "user"
ROLE_PUBLISHER = "publisher"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_PUBLISHER, ROLE_ADMIN)


class User(BaseModel):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_USER)  # user | publisher | admin

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
