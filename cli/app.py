"""
PromptIDE CLI - Core Application

Terminal version of the browser workspace: the prompt line plays the chat
panel, slash commands drive the explorer, editor and preview panes, and the
console log is printed as entries arrive.
"""

from typing import Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.prompt import Confirm

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style
from prompt_toolkit.formatted_text import HTML

from cli.config import CLIConfig
from cli.commands import SlashCommandHandler
from cli.renderer import WorkspaceRenderer
from promptide.workspace.classifier import create_classifier
from promptide.workspace.file_store import FileStoreClient
from promptide.workspace.models import PromptOutcome
from promptide.workspace.recent import RecentProjects
from promptide.workspace.session import WorkspaceSession


class PromptIDECLI:
    """Main CLI Application"""

    def __init__(self, config: CLIConfig, console: Optional[Console] = None,
                 recent: Optional[RecentProjects] = None,
                 session: Optional[WorkspaceSession] = None):
        self.config = config
        self.console = console or Console()
        self.renderer = WorkspaceRenderer(self.console, config)
        self.recent = recent if recent is not None else RecentProjects.load_or_seed(config.recent_projects_file)
        self.session = session or self._create_session()
        if self.session.recent is None:
            self.session.recent = self.recent
        self.command_handler = SlashCommandHandler(self)
        self._running = True

        self.session.console.subscribe(self.renderer.render_entry)

        self.key_bindings = self._create_key_bindings()
        self.prompt_style = Style.from_dict({
            'prompt': '#00D9FF bold',
            'project': '#4ADE80',
            'file': '#FF79C6',
        })

    def _create_session(self) -> WorkspaceSession:
        store = FileStoreClient(base_url=self.config.api_base_url)
        classifier = create_classifier(self.config.classifier_mode, base_url=self.config.api_base_url)
        return WorkspaceSession(
            store=store,
            classifier=classifier,
            project_name=self.config.project_name,
            timeout=self.config.timeout,
            recent=self.recent,
        )

    def _create_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add('c-l')
        def clear_screen(event):
            """Clear screen"""
            self.console.clear()

        return kb

    def _get_prompt_text(self) -> HTML:
        open_path = self.session.coordinator.open_path
        if open_path:
            return HTML(f'<prompt>❯</prompt> <project>{self.session.project.name}</project> <file>[{open_path}]</file> ')
        return HTML(f'<prompt>❯</prompt> <project>{self.session.project.name}</project> ')

    # ==================== USER INTERACTION ====================

    def confirm(self, message: str) -> bool:
        """Confirmation gate for destructive actions"""
        if self.config.non_interactive:
            return True
        return Confirm.ask(f"[yellow]{message}[/yellow]", console=self.console)

    async def edit_text(self, text: str) -> Optional[str]:
        """Multiline editor seeded with the current buffer; None when cancelled"""
        self.console.print("[dim]Editing - press Esc then Enter to finish, Ctrl+C to cancel[/dim]")
        editor = PromptSession(multiline=True)
        try:
            return await editor.prompt_async("", default=text)
        except (KeyboardInterrupt, EOFError):
            self.console.print("[yellow]Edit cancelled[/yellow]")
            return None

    # ==================== RUN MODES ====================

    async def start(self) -> int:
        return await self.session.mount()

    async def run_interactive(self):
        """Run interactive REPL mode"""
        self.renderer.render_welcome(self.session.project.name, self.config.api_base_url, self.session.classifier.name)
        await self.start()
        await self.command_handler.handle("/tree")

        prompt_session = PromptSession(
            history=FileHistory(self.config.history_file),
            auto_suggest=AutoSuggestFromHistory(),
            key_bindings=self.key_bindings,
            style=self.prompt_style,
            multiline=False,
            enable_history_search=True,
        )

        try:
            while self._running:
                try:
                    user_input = await prompt_session.prompt_async(self._get_prompt_text())
                except KeyboardInterrupt:
                    self.console.print("\n[yellow]Use /quit to exit or Ctrl+D[/yellow]")
                    continue
                except EOFError:
                    break

                if not user_input.strip():
                    continue

                if user_input.startswith('/'):
                    await self.command_handler.handle(user_input)
                    continue

                await self.process_prompt(user_input)
        finally:
            await self.session.aclose()

        self.console.print("\n[cyan]Goodbye! 👋[/cyan]")

    async def run_single(self, prompt: str) -> PromptOutcome:
        """Run a single prompt, show the resulting tree and exit"""
        try:
            await self.start()
            outcome = await self.process_prompt(prompt)
            if outcome.created:
                await self.command_handler.handle("/tree")
            return outcome
        finally:
            await self.session.aclose()

    async def process_prompt(self, prompt: str) -> PromptOutcome:
        with self.console.status("[cyan]Generating...[/cyan]", spinner="dots"):
            outcome = await self.session.submit_prompt(prompt)

        if outcome.created and outcome.message:
            self.console.print(Markdown(outcome.message))
        self.renderer.render_outcome(outcome)
        return outcome

    def quit(self):
        """Quit the CLI"""
        self._running = False
