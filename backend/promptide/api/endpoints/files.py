"""
File persistence endpoints - create and list only.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from promptide.core.exceptions import InvalidPathError
from promptide.core.logging_config import logger
from promptide.schemas.files import FileCreateRequest, FileCreateResponse, FileListResponse
from promptide.services.disk_file_store import DiskFileStore, disk_file_store

router = APIRouter(prefix="/files", tags=["Files"])


def get_file_store() -> DiskFileStore:
    return disk_file_store


@router.post("/create", response_model=FileCreateResponse)
async def create_file(request: FileCreateRequest, store: DiskFileStore = Depends(get_file_store)):
    """Write one file under the workspace root, creating parent folders"""
    if not request.fileName or request.content is None:
        return JSONResponse(status_code=400, content={"error": "fileName and content are required"})

    try:
        full_path = await store.write_file(request.fileName, request.content)
    except InvalidPathError as e:
        logger.warning(f"[Files API] Rejected path {request.fileName!r}: {e.message}")
        return JSONResponse(status_code=400, content={"error": e.message})
    except OSError as e:
        logger.error(f"[Files API] Error creating file {request.fileName}: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to create file"})

    logger.info(f"[Files API] Created file: {request.fileName}")
    return FileCreateResponse(success=True, fileName=request.fileName, path=str(full_path))


@router.get("/list", response_model=FileListResponse)
async def list_files(store: DiskFileStore = Depends(get_file_store)):
    """Every persisted file with its content and language type"""
    try:
        files = await store.list_files()
    except OSError as e:
        logger.error(f"[Files API] Error listing files: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to list files"})
    return {"files": files}
