from fastapi import APIRouter, Depends, status
from fastapi_pagination import Page, Params, paginate

from core.depends import CallerId, VoteServiceDep
from core.errors import InvalidArgumentError
from schemas.vote_schema import (
    ApiResponse,
    CategoryVoteOptionsSchema,
    MessageResponse,
    UserVoteSchema,
    VoteCastResponse,
    VoteOptionSchema,
    VoteRequestSchema,
    VoteSchema,
)


router = APIRouter(
    prefix="/votes",
)


@router.post("", response_model=VoteCastResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    vote_data: VoteRequestSchema,
    service: VoteServiceDep,
    caller_id: CallerId
):
    """Cast a vote, or move the caller's existing vote to another option."""
    if vote_data.user_id is not None and vote_data.user_id != caller_id:
        raise InvalidArgumentError("user_id does not match the authenticated user")

    vote = await service.cast_or_update_vote(vote_data.property_id, caller_id, vote_data.vote_option_id)
    return VoteCastResponse(data=vote)


@router.get("/options", response_model=ApiResponse[list[VoteOptionSchema]])
async def get_vote_options(service: VoteServiceDep):
    options = await service.list_vote_options()
    return ApiResponse[list[VoteOptionSchema]](data=options)


@router.get("/options/category/{category_id}", response_model=ApiResponse[CategoryVoteOptionsSchema])
async def get_category_vote_options(category_id: int, service: VoteServiceDep):
    category_options = await service.get_category_vote_options(category_id)
    return ApiResponse[CategoryVoteOptionsSchema](data=category_options)


@router.get("/mine", response_model=ApiResponse[Page[UserVoteSchema]])
async def get_my_votes(
    service: VoteServiceDep,
    caller_id: CallerId,
    params: Params = Depends()
):
    votes = await service.list_user_votes(caller_id)
    return ApiResponse[Page[UserVoteSchema]](data=paginate(votes, params).model_dump())


@router.get("/my-vote/{property_id}", response_model=ApiResponse[VoteSchema])
async def get_my_vote(property_id: int, service: VoteServiceDep, caller_id: CallerId):
    vote = await service.get_user_vote(property_id, caller_id)
    return ApiResponse[VoteSchema](data=vote)


@router.delete("/{property_id}", response_model=MessageResponse)
async def retract_vote(property_id: int, service: VoteServiceDep, caller_id: CallerId):
    await service.retract_vote(property_id, caller_id)
    return MessageResponse(message="Vote deleted successfully")
