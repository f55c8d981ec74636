"""
Hierarchical view of the flat path -> FileRecord mapping.

The tree is always rebuilt from the mapping; nothing here is patched in
place after a build.
"""

import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from promptide.workspace.models import FileRecord
from promptide.workspace.paths import join_path

if TYPE_CHECKING:
    from promptide.workspace.project import Project


class FileNode:
    """Leaf of the tree. Looks its record up through the owning project."""

    kind = "file"

    def __init__(self, name: str, path: str, owner: "Project"):
        self.name = name
        self.path = path
        self._owner = weakref.ref(owner)

    @property
    def record(self) -> Optional[FileRecord]:
        owner = self._owner()
        if owner is None:
            return None
        return owner.get(self.path)

    def __repr__(self) -> str:
        return f"FileNode({self.path!r})"


@dataclass
class FolderNode:
    name: str
    path: str
    children: List["TreeNode"] = field(default_factory=list)
    kind = "folder"

    def child(self, name: str) -> Optional["TreeNode"]:
        for node in self.children:
            if node.name == name:
                return node
        return None

    def file_count(self) -> int:
        total = 0
        for node in self.children:
            total += node.file_count() if isinstance(node, FolderNode) else 1
        return total


TreeNode = Union[FileNode, FolderNode]


class FileTree:
    """
    Result of Project.build_tree().

    Iterating yields the top-level nodes; walk() yields (depth, node) in
    display order. Both can be restarted any number of times.
    """

    def __init__(self, roots: List[TreeNode]):
        self._roots = tuple(roots)

    @property
    def roots(self) -> Tuple[TreeNode, ...]:
        return self._roots

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self._roots)

    def __len__(self) -> int:
        return len(self._roots)

    def walk(self) -> Iterator[Tuple[int, TreeNode]]:
        stack: List[Tuple[int, TreeNode]] = [(0, node) for node in reversed(self._roots)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            if isinstance(node, FolderNode):
                stack.extend((depth + 1, child) for child in reversed(node.children))

    def files(self) -> Iterator[FileNode]:
        for _, node in self.walk():
            if isinstance(node, FileNode):
                yield node

    def folders(self) -> Iterator[FolderNode]:
        for _, node in self.walk():
            if isinstance(node, FolderNode):
                yield node

    def file_paths(self) -> List[str]:
        return [node.path for node in self.files()]

    def find(self, path: str) -> Optional[TreeNode]:
        for _, node in self.walk():
            if node.path == path:
                return node
        return None


def build_tree(paths: Iterable[str], owner: "Project") -> FileTree:
    """
    Split every path on '/' and insert folders as they are first seen.
    Equal-named folders at the same level merge into one node.
    """
    roots: List[TreeNode] = []
    folders: Dict[str, FolderNode] = {}

    for path in paths:
        parts = path.split("/")
        level = roots
        parent = ""
        for index, part in enumerate(parts):
            current = join_path(parent, part)
            if index == len(parts) - 1:
                level.append(FileNode(part, current, owner))
                break
            folder = folders.get(current)
            if folder is None:
                folder = FolderNode(name=part, path=current)
                folders[current] = folder
                level.append(folder)
            level = folder.children
            parent = current

    return FileTree(roots)
