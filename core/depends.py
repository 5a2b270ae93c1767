from functools import lru_cache
from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from typing_extensions import TypeAlias

from core.async_engine import AsyncSessionLocal
from core.auth import bearer_scheme, resolve_caller_identity
from core.settings import settings
from crud.sql_store import SqlVoteStore
from services.vote_service import VoteService


@lru_cache
def get_vote_service() -> VoteService:
    return VoteService(
        SqlVoteStore(AsyncSessionLocal),
        max_attempts=settings.VOTE_MAX_ATTEMPTS,
        retry_backoff=settings.VOTE_RETRY_BACKOFF_SECONDS,
        attempt_timeout=settings.VOTE_TRANSACTION_TIMEOUT_SECONDS,
    )

VoteServiceDep: TypeAlias = Annotated[VoteService, Depends(get_vote_service)]


async def get_current_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]
) -> int:
    token = credentials.credentials if credentials is not None else None
    return resolve_caller_identity(token)

CallerId: TypeAlias = Annotated[int, Depends(get_current_user_id)]
