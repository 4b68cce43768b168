from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClickEvent(BaseModel):
    """
    One resolution of a short code.
    
    `short_code` is a plain string reference: the click store never checks
    whether a URL record exists for it. `id` and `timestamp` are assigned by
    the store on save when absent.
    """
    
    id: Optional[str] = Field(None, description="Event id")
    short_code: str = Field(..., description="The short code that was accessed")
    timestamp: Optional[datetime] = Field(None, description="When the click occurred")
    user_agent: str = Field("", description="User agent string")
    referrer: str = Field("", description="HTTP referrer")
    
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "3f1c2a9e-8a51-4a55-9d67-0e6f8f0f5b1d",
                "short_code": "abc123",
                "timestamp": "2025-10-29T10:30:00Z",
                "user_agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0",
                "referrer": "https://twitter.com"
            }
        }
    )


class Stats(BaseModel):
    """
    Click aggregation for one short code, computed on read.
    
    `clicks` carries the ordered events for a single-code query and is
    left as None in bulk listings so it drops out of the response.
    """
    
    short_code: str
    total_clicks: int = 0
    clicks: Optional[List[ClickEvent]] = None
