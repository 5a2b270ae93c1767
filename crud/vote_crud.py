from typing import Optional, Sequence

from sqlalchemy import select, delete, insert, update, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from models import Property, UserModel, Vote, VoteOption


class VoteCrud:

    def __init__(self):
        self.table = Vote

    async def create_vote(self, session: AsyncSession, property_id: int, user_id: int, vote_option_id: int) -> Vote:
        stmt = insert(Vote).values(
            property_id=property_id,
            user_id=user_id,
            vote_option_id=vote_option_id
        ).returning(Vote)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def update_vote_option(
        self,
        session: AsyncSession,
        property_id: int,
        user_id: int,
        vote_option_id: int
    ) -> Optional[Vote]:
        # Only vote_option_id and updated_at are ever written on a re-vote
        stmt = (
            update(Vote)
            .where(
                Vote.property_id == property_id,
                Vote.user_id == user_id
            )
            .values(vote_option_id=vote_option_id, updated_at=func.now())
            .returning(Vote)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def delete_vote(self, session: AsyncSession, property_id: int, user_id: int) -> bool:
        stmt = delete(Vote).where(
            Vote.property_id == property_id,
            Vote.user_id == user_id
        ).returning(Vote.id)
        result = await session.execute(stmt)
        return result.first() is not None

    async def get_vote(self, session: AsyncSession, property_id: int, user_id: int) -> Optional[Vote]:
        stmt = select(Vote).where(
            Vote.property_id == property_id,
            Vote.user_id == user_id
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_vote_counts_by_property(self, session: AsyncSession, property_id: int, category_id: int) -> Sequence:
        """Per-option counts for every option of the category, zero-vote options included."""
        vote_count = func.count(Vote.id).label("vote_count")
        stmt = (
            select(
                VoteOption.id.label("vote_option_id"),
                VoteOption.name.label("option_name"),
                vote_count,
            )
            .select_from(VoteOption)
            .outerjoin(
                Vote,
                and_(Vote.vote_option_id == VoteOption.id, Vote.property_id == property_id)
            )
            .where(VoteOption.category_id == category_id)
            .group_by(VoteOption.id, VoteOption.name)
            .order_by(VoteOption.name)
        )
        result = await session.execute(stmt)
        return result.fetchall()

    async def get_votes_by_user(self, session: AsyncSession, user_id: int) -> Sequence:
        stmt = (
            select(
                Vote.id,
                Vote.property_id,
                Vote.user_id,
                Vote.vote_option_id,
                Vote.created_at,
                Vote.updated_at,
                Property.title.label("property_title"),
                VoteOption.name.label("vote_option_name"),
            )
            .select_from(Vote)
            .join(Property, Vote.property_id == Property.id)
            .join(VoteOption, Vote.vote_option_id == VoteOption.id)
            .where(Vote.user_id == user_id)
            .order_by(Vote.created_at.desc(), Vote.id.desc())
        )
        result = await session.execute(stmt)
        return result.fetchall()

    async def get_votes_by_option(self, session: AsyncSession, vote_option_id: int) -> Sequence:
        stmt = (
            select(
                Vote.id,
                Vote.property_id,
                Vote.user_id,
                Vote.vote_option_id,
                Vote.created_at,
                Vote.updated_at,
                UserModel.first_name,
                UserModel.last_name,
                UserModel.email,
                Property.title.label("property_title"),
            )
            .select_from(Vote)
            .outerjoin(UserModel, Vote.user_id == UserModel.id)
            .outerjoin(Property, Vote.property_id == Property.id)
            .where(Vote.vote_option_id == vote_option_id)
            .order_by(Vote.created_at.desc(), Vote.id.desc())
        )
        result = await session.execute(stmt)
        return result.fetchall()

    async def get_totals(self, session: AsyncSession):
        """total_votes, total_users and total_properties in one statement."""
        stmt = select(
            select(func.count(Vote.id)).scalar_subquery().label("total_votes"),
            select(func.count(UserModel.id)).scalar_subquery().label("total_users"),
            select(func.count(Property.id)).scalar_subquery().label("total_properties"),
        )
        result = await session.execute(stmt)
        return result.one()


vote_crud = VoteCrud()
