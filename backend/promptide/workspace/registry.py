"""
Process-wide registry of live workspace sessions.

A response that settles after its workspace was closed must not touch the
model; components ask the registry before applying anything.
"""

from typing import Dict

from promptide.core.logging_config import logger


class SessionRegistry:
    def __init__(self):
        self._live: Dict[str, str] = {}

    def register(self, workspace_id: str, project_name: str = "") -> None:
        self._live[workspace_id] = project_name
        logger.debug(f"Workspace {workspace_id} registered ({project_name or 'unnamed'})")

    def unregister(self, workspace_id: str) -> bool:
        removed = self._live.pop(workspace_id, None) is not None
        if removed:
            logger.debug(f"Workspace {workspace_id} closed")
        return removed

    def is_live(self, workspace_id: str) -> bool:
        return workspace_id in self._live

    def __len__(self) -> int:
        return len(self._live)


# Default registry shared by every session of the process
session_registry = SessionRegistry()
