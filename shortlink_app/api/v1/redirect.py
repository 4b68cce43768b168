import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from shortlink_app.dependencies import get_url_service
from shortlink_app.exceptions import StorageError, URLNotFoundError
from shortlink_app.services.url_service import URLService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["redirect"])


@router.get("/{short_code}")
async def redirect_to_long_url(
    short_code: str,
    request: Request,
    background_tasks: BackgroundTasks,
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.
    
    Flow:
    1. Resolve the short code
    2. Schedule the click notification as a background task
    3. Redirect immediately
    
    The response never depends on the notification: it runs after the
    redirect is sent and only logs its failures.
    """
    try:
        long_url = await url_service.get_long_url_for_redirect(short_code)
    except URLNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="URL not found")
    except StorageError as e:
        logger.error("Failed to resolve %s: %s", short_code, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to resolve URL"
        )
    
    background_tasks.add_task(
        url_service.notify_click,
        short_code,
        request.headers.get("user-agent", ""),
        request.headers.get("referer", ""),
    )
    
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
