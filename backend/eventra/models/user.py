"""
User model: identity, profile fields and role.
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from eventra.db.base import Base, utcnow
from eventra.models.enums import UserRole, enum_type


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(256), unique=True, index=True, nullable=False)
    username = Column(String(256), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False, default="")
    second_name = Column(String(100), nullable=False, default="")
    profile_image_base64 = Column(Text, nullable=True)
    role = Column(enum_type(UserRole, "user_role"), nullable=False, default=UserRole.USER)
    is_active = Column(Boolean, default=True, nullable=False)
    date_registered = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
