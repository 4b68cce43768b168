from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from shortlink_app.dependencies import get_url_service
from shortlink_app.exceptions import (
    InvalidURLError,
    ShortCodeGenerationError,
    StorageError,
    URLNotFoundError,
)
from shortlink_app.models.url import URLRecord
from shortlink_app.schemas.url import CreateURLRequest, CreateURLResponse
from shortlink_app.services.url_service import URLService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["urls"])


@router.post("/shorten", response_model=CreateURLResponse, status_code=status.HTTP_201_CREATED)
async def create_short_url(
    url_data: CreateURLRequest,
    request: Request,
    url_service: URLService = Depends(get_url_service)
):
    """Create a new short URL"""
    try:
        record = await url_service.create_short_url(url_data.url)
    except InvalidURLError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (StorageError, ShortCodeGenerationError) as e:
        logger.error("Failed to save URL: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save URL"
        )
    
    return CreateURLResponse(
        short_code=record.short_code,
        short_url=f"{request.url.scheme}://{request.url.netloc}/{record.short_code}",
        original_url=record.original_url,
    )


@router.get("/urls", response_model=List[URLRecord])
async def get_all_urls(url_service: URLService = Depends(get_url_service)):
    """List every short URL"""
    try:
        return await url_service.list_urls()
    except StorageError as e:
        logger.error("Failed to retrieve URLs: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve URLs"
        )


@router.get("/urls/{short_code}", response_model=URLRecord)
async def get_url_info(
    short_code: str,
    url_service: URLService = Depends(get_url_service)
):
    """Get information about a short URL"""
    try:
        return await url_service.get_url(short_code)
    except URLNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="URL not found"
        )
    except StorageError as e:
        logger.error("Failed to retrieve %s: %s", short_code, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve URL"
        )
