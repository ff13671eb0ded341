from typing import List

from fastapi import APIRouter, Depends
from shortlink_app.schemas.url import DomainCount, ShortenResponse
from shortlink_app.services.url_service import URLService
from shortlink_app.dependencies import get_url_service

router = APIRouter(tags=["metrics"])


@router.get("/metrics", response_model=List[DomainCount])
async def get_metrics(url_service: URLService = Depends(get_url_service)):
    """Top domains by total hits (read-only, nothing is saved)"""
    return [
        DomainCount(domain=domain, count=count)
        for domain, count in url_service.domain_report()
    ]


@router.get("/top-urls", response_model=List[ShortenResponse])
async def get_top_urls(url_service: URLService = Depends(get_url_service)):
    """Most requested URLs"""
    return url_service.url_report()
