"""
Unit Tests for WorkspaceSession mount/close lifecycle
"""
import pytest

from promptide.core.exceptions import PersistenceError
from promptide.workspace.models import LogSeverity


class TestMount:
    """Test loading persisted files"""

    @pytest.mark.asyncio
    async def test_mount_loads_files(self, make_session, make_store):
        store = make_store(files={"index.html": "<p/>", "src/app.js": "x"})
        session = make_session(store=store)

        loaded = await session.mount()

        assert loaded == 2
        assert session.mounted is True
        assert session.project.paths() == ["index.html", "src/app.js"]
        assert session.console.last().message == "Loaded 2 files"

    @pytest.mark.asyncio
    async def test_mount_empty_store_is_quiet(self, make_session):
        session = make_session()

        assert await session.mount() == 0
        assert len(session.console) == 0

    @pytest.mark.asyncio
    async def test_mount_failure_keeps_empty_project(self, make_session, make_store):
        """Test a failed listing leaves the default project in place"""
        store = make_store(list_error=PersistenceError("Cannot reach file store"))
        session = make_session(store=store)

        assert await session.mount() == 0

        assert len(session.project) == 0
        last = session.console.last()
        assert last.severity == LogSeverity.ERROR
        assert last.message == "Failed to load files: Cannot reach file store"

    @pytest.mark.asyncio
    async def test_mount_unexpected_store_error(self, make_session, make_store):
        """Test a store raising a non-persistence error still mounts empty"""
        store = make_store(list_error=OSError("disk went away"))
        session = make_session(store=store)

        assert await session.mount() == 0

        assert session.mounted is True
        assert session.console.last().message == "Failed to load files: OSError: disk went away"

    @pytest.mark.asyncio
    async def test_deleted_file_returns_on_next_mount(self, make_session, make_store, registry):
        """Test deletion is local to the session"""
        store = make_store(files={"a.txt": "x"})
        first = make_session(store=store)
        await first.mount()
        first.project.delete_file("a.txt")

        second = make_session(store=store)
        await second.mount()

        assert "a.txt" in second.project


class TestLifecycle:
    """Test registration and closing"""

    def test_session_registered_on_create(self, make_session, registry):
        session = make_session()

        assert session.is_live
        assert registry.is_live(session.workspace_id)

    def test_close_unregisters(self, make_session, registry):
        session = make_session()

        session.close()
        session.close()

        assert not session.is_live
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_context_manager_closes_resources(self, make_session, make_store, make_classifier):
        store = make_store(files={"a.txt": "x"})
        classifier = make_classifier()

        async with make_session(store=store, classifier=classifier) as session:
            assert "a.txt" in session.project

        assert store.closed is True
        assert classifier.closed is True
        assert not session.is_live

    def test_sessions_are_isolated(self, make_session):
        first = make_session()
        second = make_session()

        first.project.create_file("a.txt", "x")

        assert first.workspace_id != second.workspace_id
        assert len(second.project) == 0
