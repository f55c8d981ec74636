"""
PromptIDE - Test Configuration and Fixtures
"""
import os
import asyncio
import tempfile
from pathlib import Path
from typing import AsyncGenerator, Dict, Iterable, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['CLASSIFIER_MODE'] = 'template'
os.environ['ANTHROPIC_API_KEY'] = 'test-api-key'
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ['LOG_FILE'] = ''
os.environ['WORKSPACE_ROOT'] = str(Path(tempfile.gettempdir()) / 'promptide-test-workspace')

from promptide.main import app
from promptide.api.endpoints.files import get_file_store
from promptide.core.exceptions import PersistenceError
from promptide.services.disk_file_store import DiskFileStore
from promptide.utils.response_parser import parse_generation
from promptide.workspace.classifier import Classifier
from promptide.workspace.console import ConsoleLog
from promptide.workspace.coordinator import WorkspaceCoordinator
from promptide.workspace.file_store import FileStore
from promptide.workspace.models import FileRecord, GenerationResult, StoreAck
from promptide.workspace.project import Project
from promptide.workspace.registry import SessionRegistry
from promptide.workspace.session import WorkspaceSession


# ============================================
# In-memory fakes
# ============================================

class FakeFileStore(FileStore):
    """File store that keeps everything in a dict"""

    def __init__(self, files: Optional[Dict[str, str]] = None, fail_paths: Iterable[str] = (),
                 list_error: Optional[Exception] = None, delay: float = 0.0):
        self.persisted: Dict[str, FileRecord] = {
            path: FileRecord(path=path, content=content) for path, content in (files or {}).items()
        }
        self.created: List[str] = []
        self.fail_paths = set(fail_paths)
        self.list_error = list_error
        self.delay = delay
        self.closed = False

    async def create(self, path: str, content: str, language: str) -> StoreAck:
        if self.delay:
            await asyncio.sleep(self.delay)
        if path in self.fail_paths:
            raise PersistenceError(f"Failed to create {path}: disk full", path=path, status_code=500)
        self.created.append(path)
        self.persisted[path] = FileRecord(path=path, content=content, language=language)
        return StoreAck(ok=True, path=path)

    async def list(self) -> Dict[str, FileRecord]:
        if self.list_error is not None:
            raise self.list_error
        return dict(self.persisted)

    async def aclose(self) -> None:
        self.closed = True


class ScriptedClassifier(Classifier):
    """
    Answers prompts from a queue. Each answer is markdown (parsed like a
    real response), a ready GenerationResult, or an exception to raise.
    """

    name = "scripted"

    def __init__(self, *answers, delay: float = 0.0):
        self.answers = list(answers)
        self.prompts: List[str] = []
        self.delay = delay
        self.closed = False

    async def classify(self, text: str) -> GenerationResult:
        self.prompts.append(text)
        answer = self.answers.pop(0) if self.answers else "Nothing to build here."
        if self.delay:
            await asyncio.sleep(self.delay)
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, str):
            return parse_generation(answer)
        return answer

    async def aclose(self) -> None:
        self.closed = True


# ============================================
# Workspace fixtures
# ============================================

@pytest.fixture
def registry() -> SessionRegistry:
    """Fresh registry so sessions never leak between tests"""
    return SessionRegistry()


@pytest.fixture
def console() -> ConsoleLog:
    return ConsoleLog("test-workspace")


@pytest.fixture
def project(console: ConsoleLog) -> Project:
    return Project(name="Test Project", console=console)


@pytest.fixture
def coordinator(project: Project) -> WorkspaceCoordinator:
    return WorkspaceCoordinator(project)


@pytest.fixture
def make_store():
    def _make(**kwargs) -> FakeFileStore:
        return FakeFileStore(**kwargs)
    return _make


@pytest.fixture
def make_classifier():
    def _make(*answers, **kwargs) -> ScriptedClassifier:
        return ScriptedClassifier(*answers, **kwargs)
    return _make


@pytest.fixture
def make_session(registry: SessionRegistry):
    """Build a WorkspaceSession around fakes"""
    def _make(store: Optional[FileStore] = None, classifier: Optional[Classifier] = None,
              timeout: float = 5.0) -> WorkspaceSession:
        return WorkspaceSession(
            store=store or FakeFileStore(),
            classifier=classifier or ScriptedClassifier(),
            registry=registry,
            project_name="Test Project",
            timeout=timeout,
        )
    return _make


# ============================================
# HTTP fixtures
# ============================================

@pytest.fixture
def disk_store(tmp_path: Path) -> DiskFileStore:
    return DiskFileStore(root=tmp_path / "workspace", skip_names=["node_modules", "server", "temp-projects"])


@pytest_asyncio.fixture
async def client(disk_store: DiskFileStore) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the file store pointed at a temp directory"""
    app.dependency_overrides[get_file_store] = lambda: disk_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()
