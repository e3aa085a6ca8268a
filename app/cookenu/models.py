from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


ID_MAX_LENGTH = 64
EMAIL_MAX_LENGTH = 320
NAME_MAX_LENGTH = 255


class UserRole:
    NORMAL = "NORMAL"
    ADMIN = "ADMIN"

    ALL = (NORMAL, ADMIN)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(ID_MAX_LENGTH), primary_key=True)
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=UserRole.NORMAL)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom to avoid circular imports.)
from app.cookenu.modules.recipes.models import Recipe  # noqa: E402,F401
from app.cookenu.modules.followers.models import Follower  # noqa: E402,F401
