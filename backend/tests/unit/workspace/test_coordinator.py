"""
Unit Tests for the Workspace UI Coordinator
Tests for: editor handle, explorer state, confirmation gates, preview
"""
from promptide.workspace.coordinator import PLACEHOLDER_ENTRIES, WorkspaceCoordinator
from promptide.workspace.project import Project


def always(answer: bool):
    asked = []

    def confirm(message: str) -> bool:
        asked.append(message)
        return answer

    confirm.asked = asked
    return confirm


class TestOpenFile:
    """Test opening, editing and saving through the editor handle"""

    def test_open_missing_file_is_noop(self, project: Project, coordinator: WorkspaceCoordinator):
        """Test unknown paths leave the handle alone and log nothing"""
        project.create_file("a.txt", "x")
        coordinator.open_file("a.txt")
        handle = coordinator.open_file_handle

        assert coordinator.open_file("missing.txt") is False

        assert coordinator.open_file_handle is handle
        assert len(project.console) == 0

    def test_open_with_nothing_open(self, coordinator: WorkspaceCoordinator):
        assert coordinator.open_file("missing.txt") is False
        assert coordinator.open_file_handle is None

    def test_open_loads_committed_content(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("index.html", "<h1>Hi</h1>")

        assert coordinator.open_file("index.html") is True

        handle = coordinator.open_file_handle
        assert handle.path == "index.html"
        assert handle.buffer == "<h1>Hi</h1>"
        assert handle.language == "html"
        assert coordinator.is_dirty() is False

    def test_open_other_file_discards_buffer(self, project: Project, coordinator: WorkspaceCoordinator):
        """Test switching files drops unsaved edits"""
        project.create_file("a.txt", "x")
        project.create_file("b.txt", "y")
        coordinator.open_file("a.txt")
        coordinator.update_buffer("edited")

        coordinator.open_file("b.txt")
        coordinator.open_file("a.txt")

        assert coordinator.open_file_handle.buffer == "x"
        assert project.get("a.txt").content == "x"

    def test_edit_and_save(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("main.py", "print(1)")
        coordinator.open_file("main.py")

        coordinator.update_buffer("print(2)")
        assert coordinator.is_dirty() is True

        assert coordinator.save_open_file() is True
        assert project.get("main.py").content == "print(2)"
        assert coordinator.is_dirty() is False

    def test_update_buffer_without_open_file(self, coordinator: WorkspaceCoordinator):
        assert coordinator.update_buffer("x") is False
        assert coordinator.save_open_file() is False

    def test_close_file(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("a.txt", "x")
        coordinator.open_file("a.txt")

        coordinator.close_file()

        assert coordinator.open_path is None


class TestExplorer:
    """Test folder expansion and rendered rows"""

    def test_toggle_folder(self, coordinator: WorkspaceCoordinator):
        assert coordinator.toggle_folder("src") is True
        assert coordinator.is_expanded("src")
        assert coordinator.toggle_folder("src") is False
        assert not coordinator.is_expanded("src")

    def test_toggle_does_not_touch_project(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("src/a.js", "x")
        tree = project.build_tree()

        coordinator.toggle_folder("src")

        assert project.build_tree() is tree
        assert len(project.console) == 0

    def test_placeholder_rows_when_empty(self, coordinator: WorkspaceCoordinator):
        rows = coordinator.visible_rows()

        assert [(row.name, row.kind) for row in rows] == list(PLACEHOLDER_ENTRIES)
        assert all(row.disabled for row in rows)

    def test_collapsed_folder_hides_children(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("src/a.js", "x")
        project.create_file("index.html", "y")

        rows = coordinator.visible_rows()

        assert [row.path for row in rows] == ["src", "index.html"]
        assert rows[0].child_count == 1
        assert rows[0].expanded is False

    def test_expanded_folder_shows_children(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("src/a.js", "x")
        coordinator.toggle_folder("src")
        coordinator.open_file("src/a.js")

        rows = coordinator.visible_rows()

        assert [(row.depth, row.path) for row in rows] == [(0, "src"), (1, "src/a.js")]
        assert rows[1].is_open is True

    def test_expand_all_and_collapse_all(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("src/lib/util.ts", "x")

        coordinator.expand_all()
        assert coordinator.expanded_folders == {"src", "src/lib"}
        assert len(coordinator.visible_rows()) == 3

        coordinator.collapse_all()
        assert coordinator.expanded_folders == set()

    def test_activate_row_nodes(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("src/a.js", "x")
        tree = project.build_tree()

        coordinator.activate(tree.find("src"))
        coordinator.activate(tree.find("src/a.js"))

        assert coordinator.is_expanded("src")
        assert coordinator.open_path == "src/a.js"


class TestDestructiveActions:
    """Test confirmation gates and handle cleanup"""

    def test_delete_requires_confirmation(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("a.txt", "x")
        confirm = always(False)

        assert coordinator.request_delete("a.txt", confirm) is False

        assert "a.txt" in project
        assert confirm.asked == ["Are you sure you want to delete a.txt?"]

    def test_delete_open_file_clears_handle(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("a.txt", "x")
        coordinator.open_file("a.txt")

        assert coordinator.request_delete("a.txt", always(True)) is True

        assert coordinator.open_file_handle is None
        assert "a.txt" not in project

    def test_delete_other_file_keeps_handle(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("a.txt", "x")
        project.create_file("b.txt", "y")
        coordinator.open_file("a.txt")

        coordinator.request_delete("b.txt", always(True))

        assert coordinator.open_path == "a.txt"

    def test_delete_missing_file_does_not_ask(self, coordinator: WorkspaceCoordinator):
        confirm = always(True)

        assert coordinator.request_delete("nope.txt", confirm) is False
        assert confirm.asked == []

    def test_clear_prunes_state(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("src/a.js", "x")
        coordinator.toggle_folder("src")
        coordinator.open_file("src/a.js")
        confirm = always(True)

        assert coordinator.request_clear(confirm) == 1

        assert confirm.asked == ["Delete all generated files?"]
        assert coordinator.open_file_handle is None
        assert coordinator.expanded_folders == set()

    def test_clear_declined(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("a.txt", "x")

        assert coordinator.request_clear(always(False)) == 0
        assert len(project) == 1


class TestPreview:
    """Test which HTML the preview pane shows"""

    def test_no_html(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("main.py", "print(1)")

        assert coordinator.preview_content() is None

    def test_prefers_index_html(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("about.html", "<p>about</p>")
        project.create_file("index.html", "<p>home</p>")

        assert coordinator.preview_content() == "<p>home</p>"

    def test_falls_back_to_first_html(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("pages/about.html", "<p>about</p>")

        assert coordinator.preview_content() == "<p>about</p>"

    def test_open_html_buffer_wins(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("index.html", "<p>home</p>")
        project.create_file("about.html", "<p>about</p>")
        coordinator.open_file("about.html")
        coordinator.update_buffer("<p>draft</p>")

        assert coordinator.preview_content() == "<p>draft</p>"

    def test_detach_stops_listening(self, project: Project, coordinator: WorkspaceCoordinator):
        project.create_file("a.txt", "x")
        coordinator.open_file("a.txt")
        coordinator.detach()

        project.delete_file("a.txt")

        assert coordinator.open_path == "a.txt"
