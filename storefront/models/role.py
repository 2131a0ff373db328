"""Role model definitions."""

import uuid

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import relationship

from storefront.database import Base


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", String(36), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """Reference role assigned to users (admin, owner, user)."""
    __tablename__ = "roles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, unique=True, nullable=False, index=True)

    users = relationship("User", secondary=user_roles, back_populates="roles")
