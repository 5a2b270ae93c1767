"""Vote casting, retraction and tallying.

Every operation runs in one short transaction opened through the injected
``VoteStore``. The unique constraint on ``(property_id, user_id)`` is what keeps
a user at one vote per property; a lost insert race surfaces from the store as
``ConflictError`` and the cast is retried, taking the update path the second
time round. A pair that keeps conflicting past the attempt limit is reported as
``UnavailableError`` so the caller can retry.
"""
import asyncio
import logging
from typing import Any, Iterable, List, Optional

from core.errors import ConflictError, InvalidArgumentError, NotFoundError, UnavailableError
from schemas.vote_schema import (
    CategoryVoteOptionsSchema,
    OptionStatsSchema,
    OptionTallySchema,
    OptionVoteSchema,
    OptionVotesSchema,
    UserVoteSchema,
    VoteOptionCountSchema,
    VoteOptionListSchema,
    VoteOptionSchema,
    VoteOptionSummarySchema,
    VoteSchema,
    VoteTallySchema,
    VoteTotalsSchema,
)
from services.repository import VoteStore, VoteTransaction

logger = logging.getLogger(__name__)


def build_tally(rows: Iterable[Any]) -> VoteTallySchema:
    """Turn per-option count rows into statistics with percentages.

    The total is summed from the same rows, so counts and total always agree.
    """
    rows = list(rows)
    total_votes = sum(int(row.vote_count) for row in rows)

    statistics = []
    for row in rows:
        vote_count = int(row.vote_count)
        if total_votes > 0:
            percentage = round(vote_count * 100 / total_votes, 2)
        else:
            percentage = 0.0
        statistics.append(
            OptionTallySchema(
                option_name=row.option_name,
                vote_option_id=row.vote_option_id,
                vote_count=vote_count,
                percentage=percentage,
            )
        )

    return VoteTallySchema(statistics=statistics, total_votes=total_votes)


class VoteService:

    def __init__(
        self,
        store: VoteStore,
        max_attempts: int = 5,
        retry_backoff: float = 0.02,
        attempt_timeout: Optional[float] = 10.0,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.max_attempts = max_attempts
        self.retry_backoff = retry_backoff
        self.attempt_timeout = attempt_timeout

    async def _require_property(self, tx: VoteTransaction, property_id: int):
        property_ = await tx.get_property(property_id)
        if property_ is None:
            raise NotFoundError("Property not found")
        return property_

    async def cast_or_update_vote(self, property_id: int, user_id: int, vote_option_id: int) -> VoteSchema:
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await asyncio.wait_for(
                    self._apply_vote(property_id, user_id, vote_option_id),
                    timeout=self.attempt_timeout,
                )
            except ConflictError as e:
                logger.warning(
                    f"Vote race on property {property_id} for user {user_id} "
                    f"(attempt {attempt}/{self.max_attempts}): {e.message}"
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.retry_backoff * attempt)
            except asyncio.TimeoutError:
                logger.error(f"Vote on property {property_id} for user {user_id} timed out before commit")
                raise UnavailableError("Vote could not be recorded in time, please retry")

        logger.error(f"Vote on property {property_id} for user {user_id} still conflicting after {self.max_attempts} attempts")
        raise UnavailableError("Vote could not be recorded due to concurrent updates, please retry")

    async def _apply_vote(self, property_id: int, user_id: int, vote_option_id: int) -> VoteSchema:
        async with self.store.transaction() as tx:
            property_ = await self._require_property(tx, property_id)

            if not await tx.user_exists(user_id):
                raise NotFoundError("User not found")

            option = await tx.get_vote_option(vote_option_id)
            if option is None:
                raise NotFoundError("Vote option not found")
            if option.category_id != property_.category_id:
                raise InvalidArgumentError("Vote option not valid for this property's category")

            existing = await tx.get_vote(property_id, user_id)
            if existing is not None:
                vote = await tx.update_vote_option(property_id, user_id, vote_option_id)
                if vote is None:
                    # Retracted between the read and the update
                    raise ConflictError("Vote disappeared while being updated")
                action = "updated"
            else:
                vote = await tx.insert_vote(property_id, user_id, vote_option_id)
                action = "created"

            result = VoteSchema.model_validate(vote).model_copy(update={"vote_option_name": option.name})

        logger.info(f"Vote {action}: property={property_id} user={user_id} option={vote_option_id}")
        return result

    async def retract_vote(self, property_id: int, user_id: int) -> None:
        async with self.store.transaction() as tx:
            await self._require_property(tx, property_id)
            deleted = await tx.delete_vote(property_id, user_id)

        if not deleted:
            raise NotFoundError("No vote found to delete")
        logger.info(f"Vote retracted: property={property_id} user={user_id}")

    async def tally(self, property_id: int) -> VoteTallySchema:
        async with self.store.transaction() as tx:
            property_ = await self._require_property(tx, property_id)
            rows = await tx.count_votes_by_option(property_id, property_.category_id)

        return build_tally(rows)

    async def get_user_vote(self, property_id: int, user_id: int) -> VoteSchema:
        async with self.store.transaction() as tx:
            await self._require_property(tx, property_id)
            vote = await tx.get_vote(property_id, user_id)
            if vote is None:
                raise NotFoundError("No vote found for this property")
            option = await tx.get_vote_option(vote.vote_option_id)
            result = VoteSchema.model_validate(vote)
            if option is not None:
                result = result.model_copy(update={"vote_option_name": option.name})

        return result

    async def list_vote_options(self) -> List[VoteOptionSchema]:
        async with self.store.transaction() as tx:
            options = await tx.list_vote_options()
            return [VoteOptionSchema.model_validate(opt) for opt in options]

    async def get_category_vote_options(self, category_id: int) -> CategoryVoteOptionsSchema:
        async with self.store.transaction() as tx:
            category = await tx.get_category(category_id)
            if category is None:
                raise NotFoundError("Category not found")
            options = await tx.list_vote_options(category_id)

            return CategoryVoteOptionsSchema(
                category_id=category.id,
                category_name=category.name,
                vote_options=[VoteOptionSchema.model_validate(opt) for opt in options],
            )

    async def list_user_votes(self, user_id: int) -> List[UserVoteSchema]:
        async with self.store.transaction() as tx:
            votes = await tx.list_votes_by_user(user_id)
            return [UserVoteSchema.model_validate(vote) for vote in votes]

    async def list_vote_options_with_counts(self, limit: int = 100, offset: int = 0) -> VoteOptionListSchema:
        if limit < 1 or offset < 0:
            raise InvalidArgumentError("limit must be at least 1 and offset must not be negative")

        async with self.store.transaction() as tx:
            rows = await tx.list_vote_options_with_counts(limit, offset)

        options = [VoteOptionCountSchema.model_validate(row) for row in rows]
        return VoteOptionListSchema(vote_options=options, count=len(options), limit=limit, offset=offset)

    async def get_vote_option(self, vote_option_id: int) -> VoteOptionCountSchema:
        async with self.store.transaction() as tx:
            row = await tx.get_vote_option_with_count(vote_option_id)

        if row is None:
            raise NotFoundError("Vote option not found")
        return VoteOptionCountSchema.model_validate(row)

    async def list_option_votes(self, vote_option_id: int) -> OptionVotesSchema:
        """Votes cast for one option across all properties, newest first."""
        async with self.store.transaction() as tx:
            option = await tx.get_vote_option(vote_option_id)
            if option is None:
                raise NotFoundError("Vote option not found")
            votes = await tx.list_votes_by_option(vote_option_id)

            return OptionVotesSchema(
                vote_option=VoteOptionSchema.model_validate(option),
                votes=[OptionVoteSchema.model_validate(vote) for vote in votes],
            )

    async def vote_option_summary(self) -> VoteOptionSummarySchema:
        async with self.store.transaction() as tx:
            rows = await tx.vote_option_stats()
            totals = await tx.count_totals()

        stats = [OptionStatsSchema.model_validate(row) for row in rows]
        summary = VoteTotalsSchema(
            total_votes=int(totals.total_votes),
            total_users=int(totals.total_users),
            total_properties=int(totals.total_properties),
            total_vote_options=len(stats),
        )
        return VoteOptionSummarySchema(vote_options_stats=stats, summary=summary)
