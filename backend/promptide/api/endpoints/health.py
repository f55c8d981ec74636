from datetime import datetime, timezone

from fastapi import APIRouter

from promptide.schemas.chat import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness probe"""
    return HealthResponse(
        status="Server is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
