"""User model for registered members."""
from sqlalchemy import Boolean, Column, DateTime, String, Uuid, func
import uuid
from pictureteam.database import Base


class User(Base):
    """Registered user; never hard-deleted."""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)  # Normalized lowercase
    password_hash = Column(String, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
