from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from shortlink_app.exceptions import ShortCodeCollisionError
from shortlink_app.schemas.url import URLCreate, ShortenResponse, URLInfo
from shortlink_app.services.url_service import URLService
from shortlink_app.dependencies import get_url_service

router = APIRouter(tags=["urls"])


@router.post("/send-url", response_model=ShortenResponse)
async def shorten_url(
    url_data: URLCreate,
    background_tasks: BackgroundTasks,
    url_service: URLService = Depends(get_url_service)
):
    """
    Shorten a URL, or count another hit if it was shortened before.
    
    The store is saved after the response is sent; a failed save
    does not fail this request.
    """
    try:
        entry = url_service.shorten(url_data.url)
    except ShortCodeCollisionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    
    background_tasks.add_task(url_service.persist)
    return entry


@router.get("/api/v1/urls/{short_code}", response_model=URLInfo)
async def get_url_info(
    short_code: str,
    url_service: URLService = Depends(get_url_service)
):
    """Get information about a short URL without counting a hit"""
    entry = url_service.get_url_info(short_code)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return entry
