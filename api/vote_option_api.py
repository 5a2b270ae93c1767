from fastapi import APIRouter, Depends, Query
from fastapi_pagination import Params, paginate

from core.depends import VoteServiceDep
from schemas.vote_schema import (
    ApiResponse,
    OptionVotesPageSchema,
    VoteOptionCountSchema,
    VoteOptionListSchema,
    VoteOptionSummarySchema,
)


router = APIRouter(
    prefix="/vote_options",
)


@router.get("", response_model=ApiResponse[VoteOptionListSchema])
async def get_vote_options_with_counts(
    service: VoteServiceDep,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0)
):
    options = await service.list_vote_options_with_counts(limit, offset)
    return ApiResponse[VoteOptionListSchema](data=options)


@router.get("/stats/summary", response_model=ApiResponse[VoteOptionSummarySchema])
async def get_vote_option_summary(service: VoteServiceDep):
    """Per-option vote, voter and property counts plus overall totals."""
    summary = await service.vote_option_summary()
    return ApiResponse[VoteOptionSummarySchema](data=summary)


@router.get("/{vote_option_id}", response_model=ApiResponse[VoteOptionCountSchema])
async def get_vote_option(vote_option_id: int, service: VoteServiceDep):
    option = await service.get_vote_option(vote_option_id)
    return ApiResponse[VoteOptionCountSchema](data=option)


@router.get("/{vote_option_id}/votes", response_model=ApiResponse[OptionVotesPageSchema])
async def get_vote_option_votes(
    vote_option_id: int,
    service: VoteServiceDep,
    params: Params = Depends()
):
    option_votes = await service.list_option_votes(vote_option_id)
    page = OptionVotesPageSchema(
        vote_option=option_votes.vote_option,
        votes=paginate(option_votes.votes, params).model_dump(),
    )
    return ApiResponse[OptionVotesPageSchema](data=page)
