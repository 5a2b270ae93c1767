from fastapi import APIRouter
from api.vote_api import router as vote_router
from api.property_api import router as property_router
from api.vote_option_api import router as vote_option_router


api_router = APIRouter()
api_router.include_router(vote_router, tags=["votes"])
api_router.include_router(property_router, tags=["properties"])
api_router.include_router(vote_option_router, tags=["vote options"])
