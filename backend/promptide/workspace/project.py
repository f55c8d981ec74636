"""
Virtual File System - the Project model.

The Project is the only owner of FileRecords. Every mutation goes through
it; the tree view, the editor handle and the preview are derived from it.

Policies:
- create_file on an existing path overwrites it (last writer wins)
- a path may not be both a file and a folder (PathConflictError)
- failures are returned, never raised
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from promptide.core.exceptions import InvalidPathError, PathConflictError, PromptIDEError
from promptide.core.logging_config import logger
from promptide.workspace.console import ConsoleLog
from promptide.workspace.languages import language_for_path
from promptide.workspace.models import FileRecord, FileResult
from promptide.workspace.paths import normalize_path, parent_folders
from promptide.workspace.tree import FileTree, build_tree


class ProjectEventType(str, Enum):
    CREATED = "created"
    SAVED = "saved"
    DELETED = "deleted"
    CLEARED = "cleared"


@dataclass(frozen=True)
class ProjectEvent:
    type: ProjectEventType
    paths: Tuple[str, ...]


ProjectListener = Callable[[ProjectEvent], None]


class Project:
    """In-memory mapping of project-relative path -> FileRecord"""

    def __init__(
        self,
        name: str,
        project_id: Optional[str] = None,
        console: Optional[ConsoleLog] = None,
    ):
        self.id = project_id or str(uuid.uuid4())
        self.name = name
        self.console = console if console is not None else ConsoleLog()
        self._files: Dict[str, FileRecord] = {}
        self._tree: Optional[FileTree] = None
        self._listeners: List[ProjectListener] = []

    @classmethod
    def create_default(cls, name: str, console: Optional[ConsoleLog] = None) -> "Project":
        """Empty project used when there is nothing persisted yet"""
        return cls(name=name, console=console)

    # ==================== READ ====================

    @property
    def files(self) -> Mapping[str, FileRecord]:
        return MappingProxyType(self._files)

    def get(self, path: str) -> Optional[FileRecord]:
        try:
            return self._files.get(normalize_path(path))
        except InvalidPathError:
            return None

    def paths(self) -> List[str]:
        return list(self._files)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.get(path) is not None

    def __len__(self) -> int:
        return len(self._files)

    def is_folder(self, path: str) -> bool:
        prefix = path.rstrip("/") + "/"
        return any(existing.startswith(prefix) for existing in self._files)

    # ==================== VALIDATION ====================

    def check_path(self, path: str) -> Tuple[Optional[str], Optional[PromptIDEError]]:
        """
        Validate a path for creation without mutating anything.

        Returns (normalized_path, None) or (None, error).
        """
        try:
            normalized = normalize_path(path)
        except InvalidPathError as e:
            return None, e

        for folder in parent_folders(normalized):
            if folder in self._files:
                return None, PathConflictError(normalized, folder)

        if normalized not in self._files and self.is_folder(normalized):
            return None, PathConflictError(normalized, normalized + "/")

        return normalized, None

    # ==================== MUTATIONS ====================

    def create_file(self, path: str, content: str, language_hint: Optional[str] = None) -> FileResult:
        normalized, error = self.check_path(path)
        if error is not None:
            logger.log_file_event("create", path or "<empty>", success=False, reason=error.code)
            return FileResult.failure(path, error)

        record = FileRecord(
            path=normalized,
            content=content if content is not None else "",
            language=language_for_path(normalized, language_hint),
        )
        replaced = normalized in self._files
        self._files[normalized] = record
        self._invalidate_tree()

        logger.log_file_event("overwrite" if replaced else "create", normalized, project_id=self.id)
        self._emit(ProjectEventType.CREATED, normalized)
        return FileResult.success(record)

    def save_file(self, path: str, new_content: str) -> bool:
        """Replace the content of an existing file"""
        current = self.get(path)
        if current is None:
            self.console.error(f"Cannot save {path}: file does not exist")
            return False

        self._files[current.path] = FileRecord(
            path=current.path,
            content=new_content,
            language=current.language,
        )
        logger.log_file_event("save", current.path, project_id=self.id)
        self.console.success(f"Saved {current.path}")
        self._emit(ProjectEventType.SAVED, current.path)
        return True

    def delete_file(self, path: str) -> bool:
        """Remove a file. Deleting an absent path returns False and changes nothing."""
        current = self.get(path)
        if current is None:
            return False

        del self._files[current.path]
        self._invalidate_tree()

        logger.log_file_event("delete", current.path, project_id=self.id)
        self.console.info(f"Deleted {current.path}")
        self._emit(ProjectEventType.DELETED, current.path)
        return True

    def clear(self) -> int:
        """Remove every file"""
        removed = tuple(self._files)
        if not removed:
            return 0

        self._files.clear()
        self._invalidate_tree()

        logger.info(f"Cleared {len(removed)} files from project {self.id}")
        self.console.info("Cleared all files")
        self._emit(ProjectEventType.CLEARED, *removed)
        return len(removed)

    def load(self, records: Mapping[str, FileRecord]) -> int:
        """
        Seed the mapping from a persisted listing. Entries that would break
        the path invariants are skipped.
        """
        loaded = 0
        for path, record in records.items():
            result = self.create_file(path, record.content, record.language)
            if result.ok:
                loaded += 1
            else:
                logger.warning(f"Skipping persisted file {path!r}: {result.error.message}")
        return loaded

    # ==================== TREE ====================

    def build_tree(self) -> FileTree:
        if self._tree is None:
            self._tree = build_tree(self._files.keys(), self)
        return self._tree

    def _invalidate_tree(self) -> None:
        self._tree = None

    # ==================== EVENTS ====================

    def subscribe(self, listener: ProjectListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _emit(self, event_type: ProjectEventType, *paths: str) -> None:
        event = ProjectEvent(type=event_type, paths=tuple(paths))
        for listener in list(self._listeners):
            listener(event)

    def __repr__(self) -> str:
        return f"Project(id={self.id!r}, name={self.name!r}, files={len(self._files)})"
