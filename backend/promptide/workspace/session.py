"""
Workspace session - wires one Project to its coordinator, orchestrator,
console and stores, and tracks whether it is still mounted.
"""

import uuid
from typing import List, Optional

from promptide.core.config import settings
from promptide.core.exceptions import PersistenceError
from promptide.core.logging_config import logger, set_workspace_id
from promptide.workspace.classifier import Classifier
from promptide.workspace.console import ConsoleLog
from promptide.workspace.coordinator import WorkspaceCoordinator
from promptide.workspace.file_store import FileStore
from promptide.workspace.models import ChatMessage, PromptOutcome
from promptide.workspace.orchestrator import GenerationOrchestrator
from promptide.workspace.project import Project
from promptide.workspace.recent import RecentProjects
from promptide.workspace.registry import SessionRegistry, session_registry


class WorkspaceSession:
    def __init__(
        self,
        store: FileStore,
        classifier: Classifier,
        registry: Optional[SessionRegistry] = None,
        project_name: Optional[str] = None,
        timeout: Optional[float] = None,
        workspace_id: Optional[str] = None,
        recent: Optional[RecentProjects] = None,
    ):
        self.workspace_id = workspace_id or str(uuid.uuid4())
        self.store = store
        self.classifier = classifier
        self.registry = registry if registry is not None else session_registry
        self.recent = recent

        self.console = ConsoleLog(self.workspace_id)
        self.project = Project.create_default(project_name or settings.DEFAULT_PROJECT_NAME, self.console)
        self.coordinator = WorkspaceCoordinator(self.project)
        self.orchestrator = GenerationOrchestrator(
            workspace_id=self.workspace_id,
            project=self.project,
            coordinator=self.coordinator,
            classifier=classifier,
            store=store,
            registry=self.registry,
            timeout=timeout,
        )
        self.registry.register(self.workspace_id, self.project.name)
        self.mounted = False

    @property
    def is_live(self) -> bool:
        return self.registry.is_live(self.workspace_id)

    @property
    def messages(self) -> List[ChatMessage]:
        return self.orchestrator.messages

    async def mount(self) -> int:
        """
        Load whatever the store already holds. A failed listing leaves the
        empty default project in place.
        """
        set_workspace_id(self.workspace_id)
        try:
            records = await self._list_store()
        except PersistenceError as e:
            if not self.is_live:
                return 0
            logger.warning(f"Workspace {self.workspace_id} mounted empty: {e.message}")
            self.console.error(f"Failed to load files: {e.message}")
            self.mounted = True
            return 0

        if not self.is_live:
            return 0

        loaded = self.project.load(records)
        self.mounted = True
        if loaded:
            self.console.info(f"Loaded {loaded} files")
        logger.info(f"Workspace {self.workspace_id} mounted with {loaded} files")
        return loaded

    async def _list_store(self):
        try:
            return await self.store.list()
        except PersistenceError:
            raise
        except Exception as e:
            logger.log_error_with_context(e, "WorkspaceSession.mount")
            raise PersistenceError(f"{type(e).__name__}: {e}") from e

    async def submit_prompt(self, text: str) -> PromptOutcome:
        outcome = await self.orchestrator.submit_prompt(text)
        if self.recent is not None and outcome.prompt and not outcome.discarded:
            self.recent.record(self.workspace_id, self.project.name, outcome.prompt)
        return outcome

    async def create_file(self, path: str, content: Optional[str] = None) -> Optional[str]:
        return await self.orchestrator.create_user_file(path, content)

    def close(self) -> None:
        """Unmount; responses still in flight are dropped when they settle"""
        if self.registry.unregister(self.workspace_id):
            self.coordinator.detach()
            self.mounted = False

    async def aclose(self) -> None:
        self.close()
        await self.store.aclose()
        await self.classifier.aclose()

    async def __aenter__(self) -> "WorkspaceSession":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
