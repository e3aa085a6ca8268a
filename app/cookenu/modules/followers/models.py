from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.cookenu.models import Base


class Follower(Base):
    """
    Directed follow edge: `user_id` sees recipes authored by `followed_user_id`.
    The pair is not unique; duplicate edges and self-follows are accepted.
    """

    __tablename__ = "followers"
    __table_args__ = (
        Index("idx_followers_user_id", "user_id"),
        Index("idx_followers_followed_user_id", "followed_user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    followed_user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
