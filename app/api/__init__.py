from fastapi import APIRouter
from app.api.health import router as health_router
from app.api.relays import router as relays_router

api_router = APIRouter()

# Include all the routers
api_router.include_router(health_router)
api_router.include_router(relays_router)
