"""
Generation Orchestrator

prompt -> classifier -> parsed files -> file store -> Project

Ordering rules:
- a file reaches the Project only after the store acknowledged it
- prompts are processed strictly FIFO; a prompt submitted while another is
  in flight waits for it, so console order follows submission order
- after every await the workspace must still be live, otherwise the rest of
  the response is dropped
"""

import asyncio
from typing import List, Optional

from promptide.core.config import settings
from promptide.core.exceptions import ClassifierError, GenerationTimeoutError, ParseError, PersistenceError, PromptIDEError
from promptide.core.logging_config import logger, set_workspace_id
from promptide.workspace.classifier import Classifier
from promptide.workspace.coordinator import WorkspaceCoordinator
from promptide.workspace.file_store import FileStore
from promptide.workspace.languages import language_for_path
from promptide.workspace.models import ChatMessage, ConversationOnly, GenerationResult, PromptOutcome
from promptide.workspace.project import Project
from promptide.workspace.registry import SessionRegistry, session_registry


class StaleWorkspaceError(Exception):
    """Raised internally when the workspace closed while a call was in flight"""


def default_file_content(path: str) -> str:
    """Starter content for a file created by hand"""
    language = language_for_path(path)
    name = path.rsplit("/", 1)[-1]
    if language in ("javascript", "typescript"):
        return (
            f"// {path}\n// Created by user\n\n"
            "export default function Component() {\n"
            "  return (\n    <div>\n      <h1>New Component</h1>\n    </div>\n  );\n}\n"
        )
    if language == "html":
        return (
            "<!DOCTYPE html>\n<html lang=\"en\">\n<head>\n    <meta charset=\"UTF-8\">\n"
            f"    <title>{name}</title>\n</head>\n<body>\n</body>\n</html>\n"
        )
    if language == "python":
        return f"# {path}\n# Created by user\n"
    if language == "css":
        return f"/* {path} */\n"
    if language == "json":
        return "{}\n"
    if language == "markdown":
        return f"# {name}\n"
    return ""


class GenerationOrchestrator:
    def __init__(
        self,
        workspace_id: str,
        project: Project,
        coordinator: WorkspaceCoordinator,
        classifier: Classifier,
        store: FileStore,
        registry: Optional[SessionRegistry] = None,
        timeout: Optional[float] = None,
    ):
        self.workspace_id = workspace_id
        self.project = project
        self.coordinator = coordinator
        self.classifier = classifier
        self.store = store
        self.registry = registry if registry is not None else session_registry
        self.timeout = timeout if timeout is not None else settings.GENERATION_TIMEOUT_SECONDS
        self.messages: List[ChatMessage] = []
        self._lock = asyncio.Lock()
        self._pending = 0

    @property
    def console(self):
        return self.project.console

    @property
    def pending(self) -> int:
        """Prompts submitted and not finished yet (running + queued)"""
        return self._pending

    def _ensure_live(self) -> None:
        if not self.registry.is_live(self.workspace_id):
            raise StaleWorkspaceError(self.workspace_id)

    # ==================== PROMPTS ====================

    async def submit_prompt(self, text: str) -> PromptOutcome:
        text = (text or "").strip()
        outcome = PromptOutcome(prompt=text)
        if not text:
            outcome.error = "Prompt is required"
            self.console.error(outcome.error)
            return outcome

        self._pending += 1
        try:
            async with self._lock:
                set_workspace_id(self.workspace_id)
                try:
                    self._ensure_live()
                    await self._process(text, outcome)
                except StaleWorkspaceError:
                    outcome.discarded = True
                    logger.warning(f"Workspace {self.workspace_id} closed, dropping response to prompt")
        finally:
            self._pending -= 1
        return outcome

    async def _process(self, text: str, outcome: PromptOutcome) -> None:
        self.messages.append(ChatMessage(role="user", content=text))
        had_open_file = self.coordinator.open_file_handle is not None
        logger.log_generation_event("started", prompt_length=len(text))

        try:
            result = await self._classify(text)
        except PromptIDEError as e:
            self._ensure_live()
            outcome.error = e.message
            self.console.error(f"Generation failed: {e.message}")
            return
        self._ensure_live()

        if isinstance(result, ConversationOnly):
            outcome.message = result.text
            self.messages.append(ChatMessage(role="assistant", content=result.text))
            self.console.info(result.text)
            logger.log_generation_event("conversation")
            return

        self.messages.append(ChatMessage(
            role="assistant",
            content=result.text or f"Generated {len(result.files)} files",
        ))
        outcome.message = result.text or None

        for generated in result.files:
            path = await self.persist_and_apply(generated.path, generated.content, generated.language)
            if path is None:
                outcome.failed.append(generated.path)
                continue
            outcome.created.append(path)
            if not had_open_file and outcome.opened is None:
                self.coordinator.open_file(path)
                outcome.opened = path

        logger.log_generation_event("completed", files=len(outcome.created), failed=len(outcome.failed))

    async def _classify(self, text: str) -> GenerationResult:
        try:
            return await asyncio.wait_for(self.classifier.classify(text), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise GenerationTimeoutError(self.timeout) from e
        except (ClassifierError, ParseError):
            raise
        except Exception as e:
            logger.log_error_with_context(e, "GenerationOrchestrator._classify")
            raise ClassifierError(f"{type(e).__name__}: {e}") from e

    # ==================== FILES ====================

    async def persist_and_apply(self, path: str, content: str, language: str) -> Optional[str]:
        """
        Persist one file, then add it to the Project. Returns the normalized
        path on success and None when the file was rejected.
        """
        normalized, error = self.project.check_path(path)
        if error is not None:
            self.console.error(f"Failed to create file: {path} ({error.message})")
            return None

        try:
            await self._persist(normalized, content, language)
        except PersistenceError as e:
            self._ensure_live()
            logger.warning(f"Persistence rejected {normalized}: {e.message}")
            self.console.error(f"Failed to create file: {normalized}")
            return None
        self._ensure_live()

        result = self.project.create_file(normalized, content, language)
        if not result.ok:
            # Something else claimed the path while the store call was in flight
            self.console.error(f"Failed to create file: {normalized} ({result.error.message})")
            return None

        self.console.success(f"Created file: {normalized}")
        return normalized

    async def _persist(self, path: str, content: str, language: str) -> None:
        try:
            await self.store.create(path, content, language)
        except PersistenceError:
            raise
        except Exception as e:
            logger.log_error_with_context(e, "GenerationOrchestrator._persist", file_path=path)
            raise PersistenceError(f"{type(e).__name__}: {e}", path=path) from e

    async def create_user_file(self, path: str, content: Optional[str] = None) -> Optional[str]:
        """Explicit "New File" action; opens the file when it was created"""
        normalized, error = self.project.check_path(path)
        if error is not None:
            self.console.error(f"Failed to create file: {path} ({error.message})")
            return None
        if content is None:
            content = default_file_content(normalized)
        try:
            created = await self.persist_and_apply(normalized, content, language_for_path(normalized))
        except StaleWorkspaceError:
            logger.warning(f"Workspace {self.workspace_id} closed, dropping new file {path}")
            return None
        if created is not None:
            self.coordinator.open_file(created)
        return created
