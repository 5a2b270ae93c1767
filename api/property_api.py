from fastapi import APIRouter, status

from core.depends import CallerId, VoteServiceDep
from schemas.vote_schema import ApiResponse, PropertyVoteRequestSchema, VoteCastResponse, VoteTallySchema


router = APIRouter(
    prefix="/properties",
)


@router.post("/{property_id}/votes", response_model=VoteCastResponse, status_code=status.HTTP_201_CREATED)
async def vote_on_property(
    property_id: int,
    vote_data: PropertyVoteRequestSchema,
    service: VoteServiceDep,
    caller_id: CallerId
):
    vote = await service.cast_or_update_vote(property_id, caller_id, vote_data.vote_option_id)
    return VoteCastResponse(data=vote)


@router.get("/{property_id}/stats", response_model=ApiResponse[VoteTallySchema])
async def get_property_stats(property_id: int, service: VoteServiceDep):
    """Vote statistics for every option of the property's category."""
    tally = await service.tally(property_id)
    return ApiResponse[VoteTallySchema](data=tally)
