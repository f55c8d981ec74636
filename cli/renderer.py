"""
Workspace Renderer - terminal views of the explorer, editor, console and
preview panes.
"""

from typing import Dict, Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from rich.box import ROUNDED

from cli.config import CLIConfig
from promptide.workspace.coordinator import TreeRow
from promptide.workspace.models import ConsoleLogEntry, LogSeverity, OpenFileHandle, PromptOutcome, RecentProject


SEVERITY_STYLES = {
    LogSeverity.SUCCESS: ("green", "✓"),
    LogSeverity.ERROR: ("red", "✗"),
    LogSeverity.INFO: ("cyan", "ℹ"),
}

# Syntax lexer names that differ from our language tags
LEXER_NAMES = {
    "text": "text",
    "markdown": "markdown",
    "typescript": "tsx",
    "javascript": "jsx",
}

GENERATOR_LABELS = {
    "template": "local templates",
    "remote": "chat service",
    "claude": "Claude",
}


class WorkspaceRenderer:
    """Renders workspace state with rich"""

    def __init__(self, console: Console, config: CLIConfig):
        self.console = console
        self.config = config

    def render_welcome(self, project_name: str, api_url: str, generator: str):
        self.console.print(Panel(
            f"[bold white]PromptIDE[/bold white] [dim]v1.0.0[/dim]\n"
            f"[dim]Project:[/dim] [green]{project_name}[/green]\n"
            f"[dim]File store:[/dim] {api_url}\n"
            f"[dim]Generator:[/dim] {GENERATOR_LABELS.get(generator, generator)}",
            box=ROUNDED,
            border_style="cyan",
        ))
        self.console.print("[dim]  Type a prompt to generate files, /help for commands, /quit to exit[/dim]\n")

    # ==================== EXPLORER ====================

    def format_row(self, row: TreeRow) -> Text:
        indent = "  " * row.depth
        if row.kind == "folder":
            marker = "▾" if row.expanded else "▸"
            label = f"{indent}{marker} 📁 {row.name}/"
            if row.child_count and not row.expanded:
                label += f" ({row.child_count})"
            style = "bold blue"
        else:
            label = f"{indent}  📄 {row.name}"
            style = "bold green" if row.is_open else ""
        if row.disabled:
            style = "dim"
        return Text(label, style=style)

    def render_tree(self, rows: Iterable[TreeRow], project_name: str):
        rows = list(rows)
        self.console.print(f"[bold]Files[/bold] [dim]- {project_name}[/dim]")
        for row in rows:
            self.console.print(self.format_row(row))
        if rows and all(row.disabled for row in rows):
            self.console.print("[dim]  (no files yet - describe what to build)[/dim]")

    # ==================== EDITOR ====================

    def render_file(self, handle: OpenFileHandle, dirty: bool = False):
        lexer = LEXER_NAMES.get(handle.language, handle.language)
        syntax = Syntax(
            handle.buffer,
            lexer,
            theme=self.config.syntax_theme,
            line_numbers=True,
            word_wrap=False,
        )
        title = f"{handle.path}{' [modified]' if dirty else ''}"
        self.console.print(Panel(syntax, title=title, subtitle=handle.language, border_style="blue"))

    # ==================== CONSOLE ====================

    def format_entry(self, entry: ConsoleLogEntry) -> Text:
        color, icon = SEVERITY_STYLES.get(entry.severity, ("white", "•"))
        text = Text()
        text.append(f"[{entry.timestamp.strftime('%H:%M:%S')}] ", style="dim")
        text.append(f"{icon} {entry.message}", style=color)
        return text

    def render_entry(self, entry: ConsoleLogEntry):
        self.console.print(self.format_entry(entry))

    def render_console(self, entries: Iterable[ConsoleLogEntry]):
        entries = list(entries)
        if not entries:
            self.console.print("[dim]Console is empty[/dim]")
            return
        for entry in entries:
            self.render_entry(entry)

    # ==================== PREVIEW ====================

    def render_preview(self, html: Optional[str]):
        if html is None:
            self.console.print("[dim]No HTML file to preview[/dim]")
            return
        lines = html.splitlines()
        shown = "\n".join(lines[:self.config.max_preview_lines])
        if len(lines) > self.config.max_preview_lines:
            shown += f"\n<!-- ... {len(lines) - self.config.max_preview_lines} more lines -->"
        self.console.print(Panel(Syntax(shown, "html", theme=self.config.syntax_theme), title="Preview"))

    def render_projects(self, projects: Iterable[RecentProject], current_id: Optional[str] = None):
        table = Table(title="Recent Projects", box=ROUNDED)
        table.add_column("Name", style="green")
        table.add_column("Description")
        table.add_column("Modified", style="dim")

        for project in projects:
            name = f"{project.name} (current)" if project.id == current_id else project.name
            table.add_row(name, project.description, project.last_modified.strftime("%Y-%m-%d %H:%M"))

        if table.row_count == 0:
            self.console.print("[dim]No recent projects[/dim]")
            return
        self.console.print(table)

    # ==================== MISC ====================

    def render_outcome(self, outcome: PromptOutcome):
        if outcome.discarded:
            self.console.print("[yellow]Workspace closed before the response arrived[/yellow]")
            return
        if outcome.created:
            self.console.print(f"[green]Generated {len(outcome.created)} file(s)[/green]")
        if outcome.opened:
            self.console.print(f"[dim]Opened {outcome.opened} in the editor[/dim]")

    def render_help(self, commands: Dict[str, str]):
        table = Table(title="Commands", box=ROUNDED)
        table.add_column("Command", style="cyan")
        table.add_column("Description")

        for cmd, desc in commands.items():
            table.add_row(cmd, desc)

        self.console.print(table)

    def render_error(self, message: str):
        self.console.print(f"[red]✗ {message}[/red]")

    def render_warning(self, message: str):
        self.console.print(f"[yellow]⚠ {message}[/yellow]")
