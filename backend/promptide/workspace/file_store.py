"""
File Store Client - persistence boundary of the workspace.

Only create and list are part of the contract. Deletion is local to the
Project model; the store is never asked to delete anything.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from promptide.core.config import settings
from promptide.core.exceptions import InvalidPathError, PersistenceError
from promptide.core.logging_config import logger
from promptide.workspace.languages import language_for_path
from promptide.workspace.models import FileRecord, StoreAck
from promptide.workspace.paths import normalize_path


class FileStore(ABC):
    @abstractmethod
    async def create(self, path: str, content: str, language: str) -> StoreAck:
        """Persist one file. Raises PersistenceError on failure."""

    @abstractmethod
    async def list(self) -> Dict[str, FileRecord]:
        """Everything persisted so far. Raises PersistenceError on failure."""

    async def aclose(self) -> None:
        return None


def normalize_listing(files: Dict[str, Any]) -> Dict[str, FileRecord]:
    """Turn the service's {path: {content, type}} payload into FileRecords"""
    records: Dict[str, FileRecord] = {}
    for raw_path, entry in files.items():
        try:
            path = normalize_path(raw_path)
        except InvalidPathError as e:
            logger.warning(f"[FileStore] Ignoring listed file: {e.message}")
            continue
        if isinstance(entry, dict):
            content = entry.get("content", "")
            hint = entry.get("type") or entry.get("language")
        else:
            content, hint = str(entry), None
        records[path] = FileRecord(
            path=path,
            content=content if isinstance(content, str) else str(content),
            language=language_for_path(path, hint),
        )
    return records


class FileStoreClient(FileStore):
    """HTTP client for the /files endpoints of the workspace service"""

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url or settings.FILE_STORE_URL).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.HTTP_REQUEST_TIMEOUT, connect=settings.HTTP_CONNECT_TIMEOUT)
        )

    async def create(self, path: str, content: str, language: str) -> StoreAck:
        try:
            response = await self._client.post(
                f"{self.base_url}/files/create",
                json={"fileName": path, "content": content, "language": language},
            )
        except httpx.HTTPError as e:
            logger.warning(f"[FileStore] create {path} failed: {type(e).__name__}: {e}")
            raise PersistenceError(f"Cannot reach file store: {e}", path=path) from e

        data = self._json(response)
        if response.status_code >= 400 or not data.get("success"):
            error = data.get("error") or data.get("message") or f"HTTP {response.status_code}"
            raise PersistenceError(f"Failed to create {path}: {error}", path=path,
                                   status_code=response.status_code)

        logger.log_file_event("persist", path)
        return StoreAck(ok=True, path=path, location=data.get("path"))

    async def list(self) -> Dict[str, FileRecord]:
        try:
            response = await self._client.get(f"{self.base_url}/files/list")
        except httpx.HTTPError as e:
            raise PersistenceError(f"Cannot reach file store: {e}") from e

        data = self._json(response)
        if response.status_code >= 400:
            error = data.get("error") or f"HTTP {response.status_code}"
            raise PersistenceError(f"Failed to list files: {error}", status_code=response.status_code)

        files = data.get("files")
        if not isinstance(files, dict):
            raise PersistenceError("Malformed file listing", status_code=response.status_code)
        return normalize_listing(files)

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
