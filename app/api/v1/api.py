from fastapi import APIRouter
from app.api.v1.endpoints import auth
from app.api.v1.endpoints import user
from app.api.v1.endpoints import meeting
from app.api.v1.endpoints import participant

api_router = APIRouter()
api_router.include_router(auth.router, tags=["Auth"])
api_router.include_router(user.router, prefix="/users", tags=["Users"])
api_router.include_router(meeting.router, prefix="/meetings", tags=["Meetings"])
api_router.include_router(participant.router, prefix="/participants", tags=["Participants"])
