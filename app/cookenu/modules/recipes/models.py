from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.cookenu.models import ID_MAX_LENGTH, Base

TITLE_MAX_LENGTH = 255


class Recipe(Base):
    __tablename__ = "recipes"
    __table_args__ = (
        Index("idx_recipes_user_id", "user_id"),
        Index("idx_recipes_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(ID_MAX_LENGTH), primary_key=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "createdAt": self.created_at.isoformat(),
            "userId": self.user_id,
        }
