from pydantic import BaseModel
from typing import Optional


class ChatRequest(BaseModel):
    prompt: Optional[str] = None


class ChatResponse(BaseModel):
    success: bool
    response: Optional[str] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
