"""
Unit Tests for the Generation Orchestrator
Tests for: prompt flow, persistence ordering, FIFO, timeouts, stale workspaces
"""
import asyncio

import pytest

from promptide.core.exceptions import ClassifierError
from promptide.workspace.models import ConversationOnly, GeneratedFile, GeneratedFiles, LogSeverity
from promptide.workspace.orchestrator import default_file_content


LANDING_PAGE = """Here is your page:

```html
<!-- index.html -->
<h1>Welcome</h1>
```

```css
/* style.css */
h1 { color: teal; }
```
"""


def messages(session, severity=None):
    entries = session.console.entries if severity is None else session.console.by_severity(severity)
    return [e.message for e in entries]


class TestConversation:
    """Test prompts that produce no files"""

    @pytest.mark.asyncio
    async def test_conversation_only_logs_one_info_entry(self, make_session, make_store, make_classifier):
        """Test prose answers leave the project untouched"""
        store = make_store()
        session = make_session(store=store, classifier=make_classifier("Hello! What should we build?"))

        outcome = await session.submit_prompt("hi")

        assert outcome.ok
        assert outcome.message == "Hello! What should we build?"
        assert len(session.project) == 0
        assert store.created == []
        assert [(e.severity, e.message) for e in session.console] == [
            (LogSeverity.INFO, "Hello! What should we build?"),
        ]

    @pytest.mark.asyncio
    async def test_chat_history(self, make_session, make_classifier):
        session = make_session(classifier=make_classifier(ConversationOnly(text="Sure")))

        await session.submit_prompt("  hello  ")

        assert [(m.role, m.content) for m in session.messages] == [("user", "hello"), ("assistant", "Sure")]

    @pytest.mark.asyncio
    async def test_empty_prompt_rejected(self, make_session, make_classifier):
        classifier = make_classifier()
        session = make_session(classifier=classifier)

        outcome = await session.submit_prompt("   ")

        assert outcome.error == "Prompt is required"
        assert classifier.prompts == []
        assert messages(session, LogSeverity.ERROR) == ["Prompt is required"]


class TestGeneratedFiles:
    """Test prompts that produce files"""

    @pytest.mark.asyncio
    async def test_files_persisted_then_applied(self, make_session, make_store, make_classifier):
        store = make_store()
        session = make_session(store=store, classifier=make_classifier(LANDING_PAGE))

        outcome = await session.submit_prompt("build a landing page")

        assert outcome.ok
        assert outcome.created == ["index.html", "style.css"]
        assert store.created == ["index.html", "style.css"]
        assert session.project.get("index.html").content == "<h1>Welcome</h1>"
        assert session.project.get("style.css").language == "css"
        assert messages(session, LogSeverity.SUCCESS) == ["Created file: index.html", "Created file: style.css"]

    @pytest.mark.asyncio
    async def test_first_file_opened_when_editor_empty(self, make_session, make_classifier):
        session = make_session(classifier=make_classifier(LANDING_PAGE))

        outcome = await session.submit_prompt("page")

        assert outcome.opened == "index.html"
        assert session.coordinator.open_path == "index.html"

    @pytest.mark.asyncio
    async def test_open_file_kept_when_already_editing(self, make_session, make_classifier):
        """Test generation never steals the editor from an open file"""
        answer = GeneratedFiles(files=(GeneratedFile(path="notes.txt", content="n"),))
        session = make_session(classifier=make_classifier(answer, LANDING_PAGE))
        await session.submit_prompt("notes")
        assert session.coordinator.open_path == "notes.txt"

        outcome = await session.submit_prompt("page")

        assert outcome.opened is None
        assert session.coordinator.open_path == "notes.txt"

    @pytest.mark.asyncio
    async def test_persistence_failure_leaves_project_unchanged(self, make_session, make_store, make_classifier):
        """Test a rejected file is never added and logs one error naming it"""
        store = make_store(fail_paths=["style.css"])
        session = make_session(store=store, classifier=make_classifier(LANDING_PAGE))

        outcome = await session.submit_prompt("page")

        assert outcome.created == ["index.html"]
        assert outcome.failed == ["style.css"]
        assert outcome.ok is False
        assert session.project.paths() == ["index.html"]
        assert messages(session, LogSeverity.ERROR) == ["Failed to create file: style.css"]

    @pytest.mark.asyncio
    async def test_unexpected_store_error_becomes_console_error(self, make_session, make_store, make_classifier):
        """Test a store raising something other than PersistenceError keeps the batch going"""
        store = make_store()
        original_create = store.create

        async def flaky_create(path, content, language):
            if path == "index.html":
                raise OSError("disk went away")
            return await original_create(path, content, language)

        store.create = flaky_create
        session = make_session(store=store, classifier=make_classifier(LANDING_PAGE))

        outcome = await session.submit_prompt("build")

        assert outcome.failed == ["index.html"]
        assert outcome.created == ["style.css"]
        assert session.project.paths() == ["style.css"]
        assert messages(session, LogSeverity.ERROR) == ["Failed to create file: index.html"]

    @pytest.mark.asyncio
    async def test_conflicting_path_rejected_before_store(self, make_session, make_store, make_classifier):
        store = make_store()
        answer = GeneratedFiles(files=(
            GeneratedFile(path="src", content="file"),
            GeneratedFile(path="src/app.js", content="nested"),
        ))
        session = make_session(store=store, classifier=make_classifier(answer))

        outcome = await session.submit_prompt("conflict")

        assert outcome.created == ["src"]
        assert outcome.failed == ["src/app.js"]
        assert store.created == ["src"]
        errors = messages(session, LogSeverity.ERROR)
        assert len(errors) == 1
        assert errors[0].startswith("Failed to create file: src/app.js")


class TestFailures:
    """Test classifier failures surface as console errors"""

    @pytest.mark.asyncio
    async def test_classifier_error(self, make_session, make_classifier):
        session = make_session(classifier=make_classifier(ClassifierError("service down")))

        outcome = await session.submit_prompt("page")

        assert outcome.error == "service down"
        assert messages(session) == ["Generation failed: service down"]

    @pytest.mark.asyncio
    async def test_unexpected_exception_wrapped(self, make_session, make_classifier):
        session = make_session(classifier=make_classifier(RuntimeError("boom")))

        outcome = await session.submit_prompt("page")

        assert outcome.error == "RuntimeError: boom"
        assert len(session.project) == 0

    @pytest.mark.asyncio
    async def test_unusable_code_blocks(self, make_session, make_classifier):
        """Test fences with nothing inside are reported as a parse failure"""
        session = make_session(classifier=make_classifier("```html\n```"))

        outcome = await session.submit_prompt("page")

        assert outcome.error == "No usable code block in response"
        assert len(session.project) == 0

    @pytest.mark.asyncio
    async def test_timeout(self, make_session, make_classifier):
        session = make_session(classifier=make_classifier(LANDING_PAGE, delay=0.5), timeout=0.05)

        outcome = await session.submit_prompt("page")

        assert outcome.error == "Generation timed out after 0.05s"
        assert messages(session, LogSeverity.ERROR) == ["Generation failed: Generation timed out after 0.05s"]
        assert len(session.project) == 0


class TestOrdering:
    """Test FIFO processing and stale workspaces"""

    @pytest.mark.asyncio
    async def test_prompts_processed_in_submission_order(self, make_session, make_classifier):
        first = GeneratedFiles(files=(GeneratedFile(path="first.txt", content="1"),))
        second = GeneratedFiles(files=(GeneratedFile(path="second.txt", content="2"),))
        classifier = make_classifier(first, second, delay=0.02)
        session = make_session(classifier=classifier)

        outcomes = await asyncio.gather(session.submit_prompt("one"), session.submit_prompt("two"))

        assert classifier.prompts == ["one", "two"]
        assert [o.created for o in outcomes] == [["first.txt"], ["second.txt"]]
        assert messages(session, LogSeverity.SUCCESS) == ["Created file: first.txt", "Created file: second.txt"]
        assert session.orchestrator.pending == 0

    @pytest.mark.asyncio
    async def test_second_prompt_waits_for_first(self, make_session, make_classifier):
        session = make_session(classifier=make_classifier(delay=0.05))

        task = asyncio.ensure_future(session.submit_prompt("one"))
        await asyncio.sleep(0)
        second = asyncio.ensure_future(session.submit_prompt("two"))
        await asyncio.sleep(0.01)

        assert session.orchestrator.pending == 2
        await asyncio.gather(task, second)
        assert session.orchestrator.pending == 0

    @pytest.mark.asyncio
    async def test_response_dropped_after_close(self, make_session, make_store, make_classifier):
        """Test nothing reaches a workspace that closed mid-generation"""
        store = make_store()
        session = make_session(store=store, classifier=make_classifier(LANDING_PAGE, delay=0.05))

        task = asyncio.ensure_future(session.submit_prompt("page"))
        await asyncio.sleep(0.01)
        session.close()
        outcome = await task

        assert outcome.discarded is True
        assert store.created == []
        assert len(session.project) == 0
        assert len(session.console) == 0

    @pytest.mark.asyncio
    async def test_closed_before_submit(self, make_session, make_classifier):
        classifier = make_classifier(LANDING_PAGE)
        session = make_session(classifier=classifier)
        session.close()

        outcome = await session.submit_prompt("page")

        assert outcome.discarded is True
        assert classifier.prompts == []


class TestUserFiles:
    """Test the explicit new-file action"""

    @pytest.mark.asyncio
    async def test_create_user_file_opens_it(self, make_session, make_store):
        store = make_store()
        session = make_session(store=store)

        created = await session.create_file("/src/Button.tsx")

        assert created == "src/Button.tsx"
        assert store.created == ["src/Button.tsx"]
        assert session.coordinator.open_path == "src/Button.tsx"
        assert session.project.get("src/Button.tsx").content.startswith("// src/Button.tsx")

    @pytest.mark.asyncio
    async def test_create_user_file_with_content(self, make_session):
        session = make_session()

        await session.create_file("notes.txt", "hello")

        assert session.project.get("notes.txt").content == "hello"

    @pytest.mark.asyncio
    async def test_create_user_file_invalid_path(self, make_session, make_store):
        store = make_store()
        session = make_session(store=store)

        assert await session.create_file("../etc/passwd") is None

        assert store.created == []
        assert messages(session, LogSeverity.ERROR)[0].startswith("Failed to create file: ../etc/passwd")

    def test_default_content_by_language(self):
        assert default_file_content("main.py") == "# main.py\n# Created by user\n"
        assert default_file_content("style.css") == "/* style.css */\n"
        assert default_file_content("data.json") == "{}\n"
        assert default_file_content("docs/intro.md") == "# intro.md\n"
        assert "<title>about.html</title>" in default_file_content("about.html")
        assert default_file_content("notes.txt") == ""
