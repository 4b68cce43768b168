from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from shortlink_app.dependencies import get_analytics_service
from shortlink_app.exceptions import InvalidClickError, StorageError
from shortlink_app.models.click import Stats
from shortlink_app.schemas.click import TrackRequest, TrackResponse
from shortlink_app.services.analytics_service import AnalyticsService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analytics"])


@router.post("/track", response_model=TrackResponse)
async def track_click(
    track_data: TrackRequest,
    analytics_service: AnalyticsService = Depends(get_analytics_service)
):
    """Record one click (sent by the redirect path)"""
    try:
        await analytics_service.track_click(
            track_data.short_code,
            track_data.user_agent,
            track_data.referrer,
        )
    except InvalidClickError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        logger.error("Failed to track click: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to track click"
        )
    return TrackResponse()


@router.get("/stats", response_model=List[Stats], response_model_exclude_none=True)
async def get_all_stats(analytics_service: AnalyticsService = Depends(get_analytics_service)):
    """Click counts for every clicked code (events omitted)"""
    try:
        return await analytics_service.get_all_stats()
    except StorageError as e:
        logger.error("Failed to get stats: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get stats"
        )


@router.get("/stats/{short_code}", response_model=Stats)
async def get_stats(
    short_code: str,
    analytics_service: AnalyticsService = Depends(get_analytics_service)
):
    """Click count and ordered events for one code"""
    try:
        return await analytics_service.get_stats(short_code)
    except StorageError as e:
        logger.error("Failed to get stats for %s: %s", short_code, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get stats"
        )
