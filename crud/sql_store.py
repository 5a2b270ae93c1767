import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.errors import ConflictError, NotFoundError, UnavailableError
from crud.category_crud import category_crud as CategoryCrud
from crud.property_crud import property_crud as PropertyCrud
from crud.user_crud import user_crud as UserCrud
from crud.vote_crud import vote_crud as VoteCrud
from crud.vote_option_crud import vote_option_crud as VoteOptionCrud
from models.vote_model import VOTE_UNIQUE_CONSTRAINT

logger = logging.getLogger(__name__)


class SqlVoteTransaction:
    """VoteTransaction bound to one AsyncSession inside ``session.begin()``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_property(self, property_id: int):
        return await PropertyCrud.get_property_by_id(self.session, property_id)

    async def user_exists(self, user_id: int) -> bool:
        return await UserCrud.user_exists(self.session, user_id)

    async def get_vote_option(self, vote_option_id: int):
        return await VoteOptionCrud.get_option_by_id(self.session, vote_option_id)

    async def get_category(self, category_id: int):
        return await CategoryCrud.get_category_by_id(self.session, category_id)

    async def list_vote_options(self, category_id: Optional[int] = None):
        if category_id is None:
            return await VoteOptionCrud.get_all_options(self.session)
        return await VoteOptionCrud.get_options_by_category(self.session, category_id)

    async def get_vote(self, property_id: int, user_id: int):
        return await VoteCrud.get_vote(self.session, property_id, user_id)

    async def insert_vote(self, property_id: int, user_id: int, vote_option_id: int):
        try:
            return await VoteCrud.create_vote(self.session, property_id, user_id, vote_option_id)
        except IntegrityError as e:
            if VOTE_UNIQUE_CONSTRAINT in str(e.orig):
                raise ConflictError(
                    f"Vote for property {property_id} by user {user_id} was inserted concurrently"
                ) from e
            raise NotFoundError("Property, user or vote option no longer exists") from e

    async def update_vote_option(self, property_id: int, user_id: int, vote_option_id: int):
        try:
            return await VoteCrud.update_vote_option(self.session, property_id, user_id, vote_option_id)
        except IntegrityError as e:
            raise NotFoundError("Vote option no longer exists") from e

    async def delete_vote(self, property_id: int, user_id: int) -> bool:
        return await VoteCrud.delete_vote(self.session, property_id, user_id)

    async def count_votes_by_option(self, property_id: int, category_id: int):
        return await VoteCrud.get_vote_counts_by_property(self.session, property_id, category_id)

    async def list_votes_by_user(self, user_id: int):
        return await VoteCrud.get_votes_by_user(self.session, user_id)

    async def list_vote_options_with_counts(self, limit: int, offset: int):
        return await VoteOptionCrud.get_options_with_vote_counts(self.session, limit, offset)

    async def get_vote_option_with_count(self, vote_option_id: int):
        return await VoteOptionCrud.get_option_with_vote_count(self.session, vote_option_id)

    async def list_votes_by_option(self, vote_option_id: int):
        return await VoteCrud.get_votes_by_option(self.session, vote_option_id)

    async def vote_option_stats(self):
        return await VoteOptionCrud.get_option_stats(self.session)

    async def count_totals(self):
        return await VoteCrud.get_totals(self.session)


class SqlVoteStore:

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SqlVoteTransaction]:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield SqlVoteTransaction(session)
        except (OperationalError, InterfaceError, PoolTimeoutError, OSError) as e:
            logger.error(f"Database unavailable: {e}")
            raise UnavailableError("Database is unavailable, please retry") from e
