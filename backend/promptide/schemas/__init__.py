# Pydantic schemas
from promptide.schemas.chat import ChatRequest, ChatResponse, HealthResponse
from promptide.schemas.files import FileCreateRequest, FileCreateResponse, FileListResponse, ListedFile

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "HealthResponse",
    "FileCreateRequest",
    "FileCreateResponse",
    "FileListResponse",
    "ListedFile",
]
