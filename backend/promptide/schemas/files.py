from pydantic import BaseModel, Field
from typing import Dict, Optional


class FileCreateRequest(BaseModel):
    """Body of POST /files/create. Fields are validated by the endpoint so
    missing values produce the 400 body clients expect."""
    fileName: Optional[str] = None
    content: Optional[str] = None
    language: Optional[str] = None


class FileCreateResponse(BaseModel):
    success: bool = True
    fileName: str
    path: str


class ListedFile(BaseModel):
    content: str
    type: str = "text"


class FileListResponse(BaseModel):
    files: Dict[str, ListedFile] = Field(default_factory=dict)
