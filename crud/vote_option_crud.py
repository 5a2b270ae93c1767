from typing import Optional, Sequence

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Category, Vote, VoteOption


class VoteOptionCrud:
    def __init__(self):
        self.table = VoteOption

    async def get_option_by_id(self, session: AsyncSession, option_id: int) -> Optional[VoteOption]:
        stmt = select(VoteOption).where(VoteOption.id == option_id)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_options_by_category(self, session: AsyncSession, category_id: int):
        """Options of one category, ordered by name, each with its category_name."""
        stmt = (
            select(
                VoteOption.id,
                VoteOption.name,
                VoteOption.category_id,
                VoteOption.description,
                VoteOption.created_at,
                Category.name.label("category_name"),
            )
            .join(Category, VoteOption.category_id == Category.id)
            .where(VoteOption.category_id == category_id)
            .order_by(VoteOption.name)
        )
        result = await session.execute(stmt)
        return result.fetchall()

    async def get_all_options(self, session: AsyncSession) -> Sequence:
        stmt = (
            select(
                VoteOption.id,
                VoteOption.name,
                VoteOption.category_id,
                VoteOption.description,
                VoteOption.created_at,
                Category.name.label("category_name"),
            )
            .join(Category, VoteOption.category_id == Category.id)
            .order_by(Category.name, VoteOption.name)
        )
        result = await session.execute(stmt)
        return result.fetchall()

    def _options_with_vote_count(self):
        return (
            select(
                VoteOption.id,
                VoteOption.name,
                VoteOption.category_id,
                VoteOption.description,
                VoteOption.created_at,
                Category.name.label("category_name"),
                func.count(Vote.id).label("vote_count"),
            )
            .select_from(VoteOption)
            .join(Category, VoteOption.category_id == Category.id)
            .outerjoin(Vote, Vote.vote_option_id == VoteOption.id)
            .group_by(VoteOption.id, Category.id)
        )

    async def get_options_with_vote_counts(self, session: AsyncSession, limit: int, offset: int) -> Sequence:
        stmt = (
            self._options_with_vote_count()
            .order_by(VoteOption.name, VoteOption.id)
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return result.fetchall()

    async def get_option_with_vote_count(self, session: AsyncSession, option_id: int):
        stmt = self._options_with_vote_count().where(VoteOption.id == option_id)
        result = await session.execute(stmt)
        return result.first()

    async def get_option_stats(self, session: AsyncSession) -> Sequence:
        """Votes, distinct voters and distinct properties per option, busiest first."""
        vote_count = func.count(Vote.id).label("vote_count")
        stmt = (
            select(
                VoteOption.id.label("vote_option_id"),
                VoteOption.name.label("option_name"),
                Category.name.label("category_name"),
                vote_count,
                func.count(distinct(Vote.user_id)).label("unique_voters"),
                func.count(distinct(Vote.property_id)).label("properties_voted_on"),
            )
            .select_from(VoteOption)
            .join(Category, VoteOption.category_id == Category.id)
            .outerjoin(Vote, Vote.vote_option_id == VoteOption.id)
            .group_by(VoteOption.id, Category.id)
            .order_by(vote_count.desc(), VoteOption.name, VoteOption.id)
        )
        result = await session.execute(stmt)
        return result.fetchall()


vote_option_crud = VoteOptionCrud()
