from pydantic import BaseModel, Field


class CreateURLRequest(BaseModel):
    url: str = Field(..., description="The URL to shorten (scheme optional)")


class CreateURLResponse(BaseModel):
    short_code: str
    short_url: str
    original_url: str
