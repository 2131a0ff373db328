"""User model definitions."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from storefront.database import Base, utcnow
from storefront.models.role import Role, user_roles


class User(Base):
    """Represents an application user."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String)
    phone = Column(String)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    roles = relationship(Role, secondary=user_roles, back_populates="users", lazy="selectin")

    @property
    def role_names(self) -> set[str]:
        return {role.name for role in self.roles}
