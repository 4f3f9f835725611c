"""Scan screen — per-repository progress while a project is audited."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, Log, ProgressBar


class LoadingScreen(Screen):
    """Shows how many repositories are done and a running log of status notes."""

    BINDINGS = [
        ("b", "go_back", "Back"),
    ]

    CSS = """
    LoadingScreen {
        layout: vertical;
        padding: 1 2;
    }
    #scan-summary {
        text-style: bold;
        margin-bottom: 1;
    }
    #repo-progress {
        margin-bottom: 1;
    }
    #scan-log {
        height: 1fr;
        border: round $primary;
    }
    #hint-label {
        color: $text-muted;
        margin-top: 1;
    }
    """

    def __init__(self, project: str = "", **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.project = project

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical():
            yield Label(f"Listing repositories in {self.project} …", id="scan-summary")
            yield ProgressBar(total=None, show_eta=False, id="repo-progress")
            yield Log(id="scan-log", highlight=False)
            yield Label("", id="hint-label")
        yield Footer()

    def add_status(self, message: str) -> None:
        """Append one status note to the log."""
        try:
            self.query_one("#scan-log", Log).write_line(message)
        except NoMatches:
            # Screen already dismissed
            pass

    def set_progress(self, done: int, total: int) -> None:
        """Show ``done`` of ``total`` repositories processed."""
        try:
            self.query_one("#repo-progress", ProgressBar).update(total=max(total, 1), progress=done)
            self.query_one("#scan-summary", Label).update(
                f"Repositories processed: {done} / {total}"
            )
        except NoMatches:
            pass

    def show_failure(self, message: str) -> None:
        try:
            self.query_one("#scan-summary", Label).update(message)
            self.query_one("#hint-label", Label).update(
                "Press [b]  b  [/b] to go back and try again."
            )
        except NoMatches:
            pass

    def action_go_back(self) -> None:
        self.app.pop_screen()
