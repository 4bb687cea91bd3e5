import logging

from fastapi import APIRouter

from formsapi import store
from formsapi.analytics import compute_analytics
from formsapi.models.api import ApiResponse, success

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=ApiResponse, response_model_exclude_none=True, status_code=200)
async def get_analytics():
    submissions = await store.fetch_all_submissions()
    snapshot = compute_analytics(submissions)
    logger.debug(f"Analytics computed over {snapshot.total_submissions} submissions")
    return success(snapshot, "Analytics data retrieved successfully")
