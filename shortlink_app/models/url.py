from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class URLRecord(BaseModel):
    """
    A shortened URL.
    
    The short code is the only key. Once saved a record is never updated;
    `created_at` is assigned by the store when the caller leaves it empty.
    """
    
    id: str = Field(..., description="Record id (same value as the short code)")
    short_code: str = Field(..., description="Unique short code")
    original_url: str = Field(..., description="Normalized destination URL")
    created_at: Optional[datetime] = Field(None, description="When the record was created")
    
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "aZ3kQ9",
                "short_code": "aZ3kQ9",
                "original_url": "https://example.com",
                "created_at": "2025-10-29T10:30:00Z"
            }
        }
    )
