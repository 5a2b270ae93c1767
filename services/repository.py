"""Persistence interface consumed by the vote service.

Returned records only need the attributes listed on each method; the SQL
implementation hands back ORM instances and result rows, the tests use plain
objects.
"""
from typing import Any, AsyncContextManager, Optional, Protocol, Sequence


class VoteTransaction(Protocol):

    async def get_property(self, property_id: int) -> Optional[Any]:
        """Property with ``id``, ``category_id`` and ``title``."""

    async def user_exists(self, user_id: int) -> bool: ...

    async def get_vote_option(self, vote_option_id: int) -> Optional[Any]:
        """Vote option with ``id``, ``category_id`` and ``name``."""

    async def get_category(self, category_id: int) -> Optional[Any]:
        """Category with ``id`` and ``name``."""

    async def list_vote_options(self, category_id: Optional[int] = None) -> Sequence[Any]:
        """Options with their ``category_name``, ordered by category then option name."""

    async def get_vote(self, property_id: int, user_id: int) -> Optional[Any]: ...

    async def insert_vote(self, property_id: int, user_id: int, vote_option_id: int) -> Any:
        """Insert a vote. Raises ConflictError when the pair already has a row."""

    async def update_vote_option(self, property_id: int, user_id: int, vote_option_id: int) -> Optional[Any]:
        """Point the pair's vote at another option. None when the row is gone."""

    async def delete_vote(self, property_id: int, user_id: int) -> bool: ...

    async def count_votes_by_option(self, property_id: int, category_id: int) -> Sequence[Any]:
        """``vote_option_id``, ``option_name``, ``vote_count`` for every option of the category."""

    async def list_votes_by_user(self, user_id: int) -> Sequence[Any]:
        """Votes newest first, with ``property_title`` and ``vote_option_name``."""

    async def list_vote_options_with_counts(self, limit: int, offset: int) -> Sequence[Any]:
        """A page of options ordered by name, each with ``category_name`` and ``vote_count``."""

    async def get_vote_option_with_count(self, vote_option_id: int) -> Optional[Any]: ...

    async def list_votes_by_option(self, vote_option_id: int) -> Sequence[Any]:
        """Votes newest first, with the voter's ``first_name``, ``last_name``, ``email`` and ``property_title``."""

    async def vote_option_stats(self) -> Sequence[Any]:
        """``vote_count``, ``unique_voters``, ``properties_voted_on`` per option, highest ``vote_count`` first."""

    async def count_totals(self) -> Any:
        """``total_votes``, ``total_users`` and ``total_properties``."""


class VoteStore(Protocol):

    def transaction(self) -> AsyncContextManager[VoteTransaction]:
        """Commit on normal exit, roll back when the block raises."""
