"""
Data models for the shared store.
"""

from pydantic import BaseModel, ConfigDict, Field


class Entry(BaseModel):
    """
    One shortened URL and its cumulative hit count.
    
    Entries are immutable: the store replaces an entry with an
    incremented copy, so any Entry handed out is a safe snapshot.
    """
    
    original_url: str = Field(..., description="The caller-supplied URL")
    short_code: str = Field(..., description="Code derived from original_url")
    hit_count: int = Field(1, ge=0, description="Shorten and redirect requests seen")
    
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "original_url": "https://coderprog.com",
                "short_code": "4f0d3c5b8a21",
                "hit_count": 2
            }
        }
    )
    
    def incremented(self) -> "Entry":
        return self.model_copy(update={"hit_count": self.hit_count + 1})
