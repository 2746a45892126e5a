from fastapi import APIRouter

from app.models.relays import BaseResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=BaseResponse)
async def health_check() -> BaseResponse:
    """Report basic service health."""
    return BaseResponse(message="OK")
