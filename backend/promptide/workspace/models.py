"""
Workspace data model: file records, console entries, editor handle and
generation results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from promptide.core.exceptions import PromptIDEError


class LogSeverity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class ConsoleLogEntry:
    """Single user-facing console line"""
    message: str
    severity: LogSeverity
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "type": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class FileRecord:
    """Committed content of one file. Replaced wholesale, never patched."""
    path: str
    content: str
    language: str = "text"

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content, "type": self.language}


@dataclass
class OpenFileHandle:
    """The file currently in the editor plus its unsaved buffer"""
    path: str
    buffer: str
    language: str = "text"
    opened_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "user" or "assistant"
    content: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class FileResult:
    """Outcome of a virtual file system mutation"""
    ok: bool
    path: str
    record: Optional[FileRecord] = None
    error: Optional[PromptIDEError] = None

    @classmethod
    def success(cls, record: FileRecord) -> "FileResult":
        return cls(ok=True, path=record.path, record=record)

    @classmethod
    def failure(cls, path: str, error: PromptIDEError) -> "FileResult":
        return cls(ok=False, path=path, error=error)


@dataclass(frozen=True)
class StoreAck:
    """Acknowledgement returned by the file store for a create call"""
    ok: bool
    path: str
    location: Optional[str] = None


# ============================================
# Generation results
# ============================================

@dataclass(frozen=True)
class GeneratedFile:
    path: str
    content: str
    language: str = "text"


@dataclass(frozen=True)
class ConversationOnly:
    """Classifier answered with prose only"""
    text: str


@dataclass(frozen=True)
class GeneratedFiles:
    """Classifier answered with one or more files"""
    files: Tuple[GeneratedFile, ...]
    text: str = ""


GenerationResult = Union[ConversationOnly, GeneratedFiles]


@dataclass
class PromptOutcome:
    """What happened to the model while processing one prompt"""
    prompt: str
    created: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    message: Optional[str] = None
    error: Optional[str] = None
    opened: Optional[str] = None
    discarded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failed and not self.discarded


@dataclass
class RecentProject:
    """Entry of the recent projects list"""
    id: str
    name: str
    description: str = ""
    last_modified: datetime = field(default_factory=datetime.now)
    type: str = "web"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "lastModified": self.last_modified.isoformat(),
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecentProject":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            description=str(data.get("description", "")),
            last_modified=datetime.fromisoformat(data["lastModified"]),
            type=str(data.get("type", "web")),
        )
