from decimal import Decimal
from typing import Optional

from sqlalchemy import Index, Integer, ForeignKey, String, Text, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from core.base import Base, TimestampMixin


class Property(TimestampMixin, Base):
    __tablename__ = "properties"
    __table_args__ = (
        Index("idx_properties_category_id", "category_id"),
        Index("idx_properties_user_id", "user_id"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    current_worth: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2), nullable=True)
    year_of_construction: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
