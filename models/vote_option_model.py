from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, ForeignKey, String, Text, DateTime, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.base import Base


class VoteOption(Base):
    __tablename__ = "vote_options"
    __table_args__ = (
        UniqueConstraint("name", "category_id", name="uq_vote_options_name_category"),
    )

    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    category: Mapped["Category"] = relationship(back_populates="vote_options")
