"""
Slash Commands Handler

Available commands:
  /tree           Show the file explorer
  /toggle <dir>   Expand or collapse a folder
  /expand         Expand every folder
  /collapse       Collapse every folder
  /open <path>    Open a file in the editor
  /show           Show the open file
  /edit           Edit the open file's buffer
  /save           Save the open file
  /close          Close the open file
  /new <path>     Create a file
  /delete [path]  Delete a file (defaults to the open file)
  /clear          Delete all files
  /logs           Show the console log
  /projects       Show recent projects
  /preview        Show the HTML preview
  /help           Show available commands
  /quit           Exit
"""

from typing import TYPE_CHECKING, Awaitable, Callable, Dict

if TYPE_CHECKING:
    from cli.app import PromptIDECLI


class SlashCommandHandler:
    """Handles slash commands"""

    def __init__(self, cli: "PromptIDECLI"):
        self.cli = cli
        self.console = cli.console
        self.renderer = cli.renderer

        self.commands: Dict[str, Callable[[str], Awaitable[None]]] = {
            "/tree": self.cmd_tree,
            "/ls": self.cmd_tree,
            "/toggle": self.cmd_toggle,
            "/expand": self.cmd_expand,
            "/collapse": self.cmd_collapse,
            "/open": self.cmd_open,
            "/show": self.cmd_show,
            "/edit": self.cmd_edit,
            "/save": self.cmd_save,
            "/close": self.cmd_close,
            "/new": self.cmd_new,
            "/delete": self.cmd_delete,
            "/rm": self.cmd_delete,
            "/clear": self.cmd_clear,
            "/logs": self.cmd_logs,
            "/projects": self.cmd_projects,
            "/preview": self.cmd_preview,
            "/help": self.cmd_help,
            "/h": self.cmd_help,
            "/?": self.cmd_help,
            "/quit": self.cmd_quit,
            "/exit": self.cmd_quit,
            "/q": self.cmd_quit,
        }

        self.descriptions = {
            "/tree": "Show the file explorer",
            "/toggle <folder>": "Expand or collapse a folder",
            "/expand": "Expand every folder",
            "/collapse": "Collapse every folder",
            "/open <path>": "Open a file (unsaved edits are discarded)",
            "/show": "Show the open file",
            "/edit": "Edit the open file's buffer",
            "/save": "Save the open file",
            "/close": "Close the open file",
            "/new <path>": "Create a new file",
            "/delete [path]": "Delete a file (defaults to the open one)",
            "/clear": "Delete all files",
            "/logs": "Show the console log",
            "/projects": "Show recent projects",
            "/preview": "Show the HTML preview",
            "/help": "Show this help message",
            "/quit": "Exit",
        }

    @property
    def session(self):
        return self.cli.session

    @property
    def coordinator(self):
        return self.cli.session.coordinator

    async def handle(self, command_line: str) -> bool:
        """Run one slash command. Returns False for unknown commands."""
        parts = command_line.strip().split(maxsplit=1)
        cmd = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else ""

        handler = self.commands.get(cmd)
        if handler is None:
            self.renderer.render_error(f"Unknown command: {cmd}. Type /help for the list.")
            return False

        await handler(arg)
        return True

    # ==================== EXPLORER ====================

    async def cmd_tree(self, arg: str):
        self.renderer.render_tree(self.coordinator.visible_rows(), self.session.project.name)

    async def cmd_toggle(self, arg: str):
        if not arg:
            self.renderer.render_error("Usage: /toggle <folder>")
            return
        folder = arg.rstrip("/")
        if not self.session.project.is_folder(folder):
            self.renderer.render_error(f"No such folder: {folder}")
            return
        self.coordinator.toggle_folder(folder)
        await self.cmd_tree("")

    async def cmd_expand(self, arg: str):
        self.coordinator.expand_all()
        await self.cmd_tree("")

    async def cmd_collapse(self, arg: str):
        self.coordinator.collapse_all()
        await self.cmd_tree("")

    # ==================== EDITOR ====================

    async def cmd_open(self, arg: str):
        if not arg:
            self.renderer.render_error("Usage: /open <path>")
            return
        if self.session.project.get(arg) is None:
            self.renderer.render_error(f"No such file: {arg}")
            return
        if self.coordinator.is_dirty():
            self.renderer.render_warning(f"Unsaved changes to {self.coordinator.open_path} discarded")
        self.coordinator.open_file(arg)
        await self.cmd_show("")

    async def cmd_show(self, arg: str):
        handle = self.coordinator.open_file_handle
        if handle is None:
            self.console.print("[dim]No file open. Use /open <path>.[/dim]")
            return
        self.renderer.render_file(handle, dirty=self.coordinator.is_dirty())

    async def cmd_edit(self, arg: str):
        handle = self.coordinator.open_file_handle
        if handle is None:
            self.renderer.render_error("No file open")
            return
        new_buffer = await self.cli.edit_text(handle.buffer)
        if new_buffer is None:
            return
        self.coordinator.update_buffer(new_buffer)
        if self.coordinator.is_dirty():
            self.console.print(f"[yellow]{handle.path} modified - /save to keep the changes[/yellow]")

    async def cmd_save(self, arg: str):
        if self.coordinator.open_file_handle is None:
            self.renderer.render_error("No file open")
            return
        self.coordinator.save_open_file()

    async def cmd_close(self, arg: str):
        if self.coordinator.open_file_handle is None:
            return
        if self.coordinator.is_dirty() and not self.cli.confirm("Discard unsaved changes?"):
            return
        self.coordinator.close_file()

    # ==================== FILES ====================

    async def cmd_new(self, arg: str):
        if not arg:
            self.renderer.render_error("Usage: /new <path>")
            return
        await self.session.create_file(arg)

    async def cmd_delete(self, arg: str):
        path = arg or self.coordinator.open_path
        if not path:
            self.renderer.render_error("Usage: /delete <path>")
            return
        if self.session.project.get(path) is None:
            self.renderer.render_error(f"No such file: {path}")
            return
        self.coordinator.request_delete(path, self.cli.confirm)

    async def cmd_clear(self, arg: str):
        if not self.coordinator.request_clear(self.cli.confirm):
            self.console.print("[dim]Nothing cleared[/dim]")

    # ==================== PANES ====================

    async def cmd_logs(self, arg: str):
        self.renderer.render_console(self.session.console.entries)

    async def cmd_projects(self, arg: str):
        self.renderer.render_projects(self.cli.recent.all(), current_id=self.session.workspace_id)

    async def cmd_preview(self, arg: str):
        self.renderer.render_preview(self.coordinator.preview_content())

    async def cmd_help(self, arg: str):
        self.renderer.render_help(self.descriptions)

    async def cmd_quit(self, arg: str):
        self.cli.quit()
