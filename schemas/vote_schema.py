from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from fastapi_pagination import Page
from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str


class VoteRequestSchema(BaseModel):
    property_id: int = Field(..., gt=0)
    vote_option_id: int = Field(..., gt=0)
    # Accepted for compatibility with older clients; must match the caller
    user_id: Optional[int] = Field(None, gt=0)


class PropertyVoteRequestSchema(BaseModel):
    vote_option_id: int = Field(..., gt=0)


class VoteSchema(BaseModel):
    id: int
    property_id: int
    user_id: int
    vote_option_id: int
    vote_option_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserVoteSchema(VoteSchema):
    property_title: str


class VoteOptionSchema(BaseModel):
    id: int
    name: str
    category_id: int
    category_name: Optional[str] = None
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class VoteOptionCountSchema(VoteOptionSchema):
    vote_count: int


class VoteOptionListSchema(BaseModel):
    vote_options: List[VoteOptionCountSchema]
    count: int
    limit: int
    offset: int


class OptionVoteSchema(BaseModel):
    """A vote cast for one option, with who cast it and on which property."""
    id: int
    property_id: int
    user_id: int
    vote_option_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    property_title: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OptionVotesSchema(BaseModel):
    vote_option: VoteOptionSchema
    votes: List[OptionVoteSchema]


class OptionVotesPageSchema(BaseModel):
    vote_option: VoteOptionSchema
    votes: Page[OptionVoteSchema]


class OptionStatsSchema(BaseModel):
    vote_option_id: int
    option_name: str
    category_name: str
    vote_count: int
    unique_voters: int
    properties_voted_on: int

    model_config = {"from_attributes": True}


class VoteTotalsSchema(BaseModel):
    total_votes: int
    total_users: int
    total_properties: int
    total_vote_options: int


class VoteOptionSummarySchema(BaseModel):
    vote_options_stats: List[OptionStatsSchema]
    summary: VoteTotalsSchema


class CategoryVoteOptionsSchema(BaseModel):
    category_id: int
    category_name: str
    vote_options: List[VoteOptionSchema] = Field(default_factory=list)


class OptionTallySchema(BaseModel):
    """Votes for one option of the property's category."""
    option_name: str
    vote_option_id: int
    vote_count: int
    percentage: float


class VoteTallySchema(BaseModel):
    statistics: List[OptionTallySchema]
    total_votes: int


class VoteCastResponse(ApiResponse[VoteSchema]):
    message: str = "Vote recorded successfully"
