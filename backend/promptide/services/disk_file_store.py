"""
Disk File Store - server side of the persistence contract.

Files live under WORKSPACE_ROOT keyed by their project-relative path:

    store = DiskFileStore()
    await store.write_file("src/App.tsx", content)
    files = await store.list_files()   # {"src/App.tsx": {"content": ..., "type": "typescript"}}
"""

from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import aiofiles
import aiofiles.os

from promptide.core.config import settings
from promptide.core.exceptions import InvalidPathError
from promptide.core.logging_config import logger
from promptide.workspace.languages import language_for_path
from promptide.workspace.paths import normalize_path


class DiskFileStore:
    """Writes and lists project files on the local disk"""

    def __init__(self, root: Optional[Path] = None, skip_names: Optional[Iterable[str]] = None):
        self.root = Path(root) if root is not None else settings.WORKSPACE_DIR
        self.skip_names = set(skip_names if skip_names is not None else settings.LIST_SKIP_NAMES)

    def resolve(self, relative_path: str) -> Path:
        """Map a project path to a location inside the root. Raises InvalidPathError."""
        normalized = normalize_path(relative_path)
        root = self.root.resolve()
        full_path = (root / normalized).resolve()
        if full_path != root and root not in full_path.parents:
            raise InvalidPathError(relative_path, "path escapes the workspace root")
        return full_path

    def should_skip(self, name: str) -> bool:
        return name.startswith(".") or name in self.skip_names

    # ==================== Write ====================

    async def write_file(self, relative_path: str, content: str) -> Path:
        full_path = self.resolve(relative_path)

        if full_path.is_dir():
            raise IsADirectoryError(f"{relative_path} is a directory")
        await aiofiles.os.makedirs(full_path.parent, exist_ok=True)

        async with aiofiles.open(full_path, "w", encoding="utf-8") as f:
            await f.write(content)

        logger.log_file_event("write", relative_path, bytes=len(content.encode("utf-8")))
        return full_path

    # ==================== List ====================

    async def list_files(self) -> Dict[str, Dict[str, Any]]:
        """Every readable file under the root as {path: {content, type}}"""
        files: Dict[str, Dict[str, Any]] = {}
        if not self.root.exists():
            return files
        await self._scan(self.root, "", files)
        return files

    async def _scan(self, directory: Path, prefix: str, files: Dict[str, Dict[str, Any]]) -> None:
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if self.should_skip(entry.name):
                continue

            relative = f"{prefix}/{entry.name}" if prefix else entry.name
            if entry.is_dir():
                await self._scan(entry, relative, files)
            elif entry.is_file():
                try:
                    async with aiofiles.open(entry, "r", encoding="utf-8") as f:
                        content = await f.read()
                except (OSError, UnicodeDecodeError) as e:
                    logger.debug(f"[DiskFileStore] Skipping unreadable {relative}: {e}")
                    continue
                files[relative] = {"content": content, "type": language_for_path(relative)}


# Singleton used by the API endpoints
disk_file_store = DiskFileStore()
