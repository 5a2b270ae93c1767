from sqlalchemy import Index, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from core.base import Base, TimestampMixin

VOTE_UNIQUE_CONSTRAINT = "uq_votes_property_user"


class Vote(TimestampMixin, Base):
    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("property_id", "user_id", name=VOTE_UNIQUE_CONSTRAINT),
        Index("idx_votes_property_id", "property_id"),
        Index("idx_votes_user_id", "user_id"),
        Index("idx_votes_vote_option_id", "vote_option_id"),
    )

    property_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    vote_option_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("vote_options.id", ondelete="CASCADE"), nullable=False
    )
