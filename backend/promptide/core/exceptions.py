"""
Custom Exceptions for PromptIDE
===============================

Virtual file system operations never raise these: they hand them back inside
a result object so callers can show them to the user. The generation
orchestrator catches the persistence and classifier errors and turns them
into console log entries.

Usage:
    from promptide.core.exceptions import PersistenceError

    try:
        ack = await store.create(path, content, language)
    except PersistenceError as e:
        console.error(f"Failed to create file: {path}")
"""

from typing import Optional, Any, Dict


class PromptIDEError(Exception):
    """Base exception for all PromptIDE errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Virtual File System Errors
# ============================================

class InvalidPathError(PromptIDEError):
    """Path is empty or malformed (absolute, '..' segments, ...)"""

    def __init__(self, path: str, reason: str = "invalid path"):
        super().__init__(
            f"Invalid path '{path}': {reason}",
            code="INVALID_PATH",
            details={"path": path, "reason": reason}
        )
        self.path = path


class PathConflictError(PromptIDEError):
    """A file and a folder would share the same path"""

    def __init__(self, path: str, conflicting_path: str):
        super().__init__(
            f"Path '{path}' conflicts with existing '{conflicting_path}'",
            code="PATH_CONFLICT",
            details={"path": path, "conflicting_path": conflicting_path}
        )
        self.path = path
        self.conflicting_path = conflicting_path


# ============================================
# External Service Errors
# ============================================

class PersistenceError(PromptIDEError):
    """File store create/list call failed"""

    def __init__(self, message: str, path: Optional[str] = None, status_code: Optional[int] = None):
        details: Dict[str, Any] = {}
        if path is not None:
            details["path"] = path
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, code="PERSISTENCE_ERROR", details=details)
        self.path = path
        self.status_code = status_code


class ClassifierError(PromptIDEError):
    """Classifier service failed to produce a response"""

    def __init__(self, message: str = "Classifier request failed"):
        super().__init__(message, code="CLASSIFIER_ERROR")


class GenerationTimeoutError(ClassifierError):
    """Classifier did not answer within the configured timeout"""

    def __init__(self, timeout_seconds: float):
        super().__init__(f"Generation timed out after {timeout_seconds:g}s")
        self.code = "GENERATION_TIMEOUT"
        self.details["timeout_seconds"] = timeout_seconds


class ParseError(PromptIDEError):
    """Classifier response had code fences but no usable code block"""

    def __init__(self, message: str = "No usable code block in response", blocks_seen: int = 0):
        super().__init__(message, code="PARSE_ERROR", details={"blocks_seen": blocks_seen})
