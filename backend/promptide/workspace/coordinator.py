"""
Workspace UI Coordinator

Keeps the presentation state (expanded folders, open editor handle,
preview) in step with the Project. It listens to project events so a
deleted or cleared file can never stay open in the editor.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Set

from promptide.core.logging_config import logger
from promptide.workspace.models import OpenFileHandle
from promptide.workspace.project import Project, ProjectEvent, ProjectEventType
from promptide.workspace.tree import FileNode, FolderNode, TreeNode

ConfirmFn = Callable[[str], bool]

# Disabled skeleton shown while the project has no files yet
PLACEHOLDER_ENTRIES = (
    ("src", "folder"),
    ("public", "folder"),
    ("package.json", "file"),
    ("README.md", "file"),
)


@dataclass(frozen=True)
class TreeRow:
    """One rendered line of the file explorer"""
    depth: int
    name: str
    path: str
    kind: str  # "file" or "folder"
    expanded: bool = False
    child_count: int = 0
    disabled: bool = False
    is_open: bool = False


class WorkspaceCoordinator:
    def __init__(self, project: Project):
        self.project = project
        self.expanded_folders: Set[str] = set()
        self._open: Optional[OpenFileHandle] = None
        self._unsubscribe = project.subscribe(self._on_project_event)

    # ==================== EDITOR ====================

    @property
    def open_file_handle(self) -> Optional[OpenFileHandle]:
        return self._open

    @property
    def open_path(self) -> Optional[str]:
        return self._open.path if self._open else None

    def open_file(self, path: str) -> bool:
        """
        Open a file in the editor. Unknown paths are ignored. Any unsaved
        buffer of the previously open file is discarded without warning.
        """
        record = self.project.get(path)
        if record is None:
            return False

        if self._open and self.is_dirty():
            logger.debug(f"Discarding unsaved buffer of {self._open.path}")
        self._open = OpenFileHandle(path=record.path, buffer=record.content, language=record.language)
        return True

    def close_file(self) -> None:
        self._open = None

    def update_buffer(self, content: str) -> bool:
        if self._open is None:
            return False
        self._open.buffer = content
        return True

    def is_dirty(self) -> bool:
        if self._open is None:
            return False
        record = self.project.get(self._open.path)
        return record is None or record.content != self._open.buffer

    def save_open_file(self) -> bool:
        if self._open is None:
            return False
        return self.project.save_file(self._open.path, self._open.buffer)

    # ==================== EXPLORER ====================

    def toggle_folder(self, path: str) -> bool:
        """Flip a folder between expanded and collapsed; returns the new state"""
        if path in self.expanded_folders:
            self.expanded_folders.discard(path)
            return False
        self.expanded_folders.add(path)
        return True

    def is_expanded(self, path: str) -> bool:
        return path in self.expanded_folders

    def expand_all(self) -> None:
        self.expanded_folders.update(folder.path for folder in self.project.build_tree().folders())

    def collapse_all(self) -> None:
        self.expanded_folders.clear()

    def visible_rows(self) -> List[TreeRow]:
        if len(self.project) == 0:
            return [TreeRow(depth=0, name=name, path=name, kind=kind, disabled=True)
                    for name, kind in PLACEHOLDER_ENTRIES]

        rows: List[TreeRow] = []
        self._collect_rows(self.project.build_tree().roots, 0, rows)
        return rows

    def _collect_rows(self, nodes, depth: int, rows: List[TreeRow]) -> None:
        for node in nodes:
            if isinstance(node, FolderNode):
                expanded = self.is_expanded(node.path)
                rows.append(TreeRow(
                    depth=depth,
                    name=node.name,
                    path=node.path,
                    kind="folder",
                    expanded=expanded,
                    child_count=len(node.children),
                ))
                if expanded:
                    self._collect_rows(node.children, depth + 1, rows)
            else:
                rows.append(TreeRow(
                    depth=depth,
                    name=node.name,
                    path=node.path,
                    kind="file",
                    is_open=node.path == self.open_path,
                ))

    def activate(self, node: TreeNode) -> None:
        """Click on a tree row: folders toggle, files open"""
        if isinstance(node, FileNode):
            self.open_file(node.path)
        else:
            self.toggle_folder(node.path)

    # ==================== DESTRUCTIVE ACTIONS ====================

    def request_delete(self, path: str, confirm: ConfirmFn) -> bool:
        if self.project.get(path) is None:
            return False
        if not confirm(f"Are you sure you want to delete {path}?"):
            return False
        return self.project.delete_file(path)

    def request_clear(self, confirm: ConfirmFn) -> int:
        if len(self.project) == 0:
            return 0
        if not confirm("Delete all generated files?"):
            return 0
        return self.project.clear()

    # ==================== PREVIEW ====================

    def preview_content(self) -> Optional[str]:
        """HTML for the preview pane, preferring what is being edited"""
        if self._open is not None and self._open.language == "html":
            return self._open.buffer

        index = self.project.get("index.html")
        if index is not None:
            return index.content

        for record in self.project.files.values():
            if record.language == "html":
                return record.content
        return None

    # ==================== SYNC ====================

    def _on_project_event(self, event: ProjectEvent) -> None:
        if event.type in (ProjectEventType.DELETED, ProjectEventType.CLEARED):
            if self._open is not None and self._open.path in event.paths:
                logger.debug(f"Closing {self._open.path}: file was removed")
                self._open = None
            self._prune_expanded()

    def _prune_expanded(self) -> None:
        self.expanded_folders = {path for path in self.expanded_folders if self.project.is_folder(path)}

    def detach(self) -> None:
        self._unsubscribe()
