from fastapi import APIRouter

from ask_relay.api.routes import ask

api_router = APIRouter()
api_router.include_router(ask.router)
