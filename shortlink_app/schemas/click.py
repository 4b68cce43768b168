from pydantic import BaseModel, Field


class TrackRequest(BaseModel):
    """Click notification body sent by the redirect path"""
    short_code: str = Field("", description="The short code that was resolved")
    user_agent: str = ""
    referrer: str = ""


class TrackResponse(BaseModel):
    status: str = "ok"
