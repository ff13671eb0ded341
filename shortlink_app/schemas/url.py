from pydantic import BaseModel, Field, computed_field, ConfigDict
from shortlink_app.config import settings


class URLCreate(BaseModel):
    url: str = Field(..., description="The original URL to be shortened")


class ShortenResponse(BaseModel):
    """Response for /send-url and /top-urls, built straight from a store Entry
    
    - validation_alias maps Entry attribute names onto the wire names
    - from_attributes=True lets the router return the Entry itself
    """
    original_url: str
    shortened_url: str = Field(..., validation_alias="short_code")
    request_count: int = Field(..., validation_alias="hit_count")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class URLInfo(BaseModel):
    original_url: str
    short_code: str
    hit_count: int

    @computed_field
    @property
    def short_url(self) -> str:
        """Computed field - redirect URL for this code"""
        return f"{settings.base_url}/redirect/{self.short_code}"

    model_config = ConfigDict(from_attributes=True)


class DomainCount(BaseModel):
    domain: str
    count: int
