import datetime

from fastapi import APIRouter

from formsapi.config import env_state

router = APIRouter()


@router.get("/health", status_code=200)
async def health():
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "environment": env_state,
    }
