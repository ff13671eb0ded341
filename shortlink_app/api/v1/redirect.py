from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from shortlink_app.services.url_service import URLService
from shortlink_app.dependencies import get_url_service

router = APIRouter(tags=["redirect"])


@router.get("/redirect/{short_url}")
async def redirect_to_original_url(
    short_url: str,
    background_tasks: BackgroundTasks,
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.
    
    Flow:
    1. Look up the code and count the hit (store lock only)
    2. Schedule a save of the new count
    3. Redirect with 307
    
    Unknown codes get a 404 and leave the store (and file) untouched.
    """
    entry = url_service.resolve(short_url)
    
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    
    background_tasks.add_task(url_service.persist)
    
    return RedirectResponse(url=entry.original_url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
