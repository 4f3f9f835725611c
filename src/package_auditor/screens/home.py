"""Home screen — Bitbucket connection and package selection."""

from typing import Optional

from textual import on
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, Select, Static

from package_auditor.models import AuditConfig, OutputKind


class HomeScreen(Screen):
    """Initial screen to collect the audit settings."""

    CSS = """
    HomeScreen {
        align: center middle;
    }
    #home-container {
        width: 72;
        height: auto;
        padding: 1 4;
        border: round $primary;
        background: $surface;
    }
    #title {
        text-align: center;
        color: $accent;
        text-style: bold;
    }
    #subtitle {
        text-align: center;
        color: $text-muted;
        margin-bottom: 1;
    }
    .field-label {
        margin-top: 1;
        color: $text;
    }
    #start-btn {
        margin-top: 2;
        width: 100%;
    }
    #error-label {
        color: $error;
        text-align: center;
        margin-top: 1;
    }
    """

    FIELDS = [
        ("base_url", "Bitbucket URL:", "e.g. bitbucket.example.com", False),
        ("project", "Project key:", "e.g. PLAT", False),
        ("package", "Package name (exact):", "e.g. Newtonsoft.Json", False),
        ("token", "Access token:", "HTTP access token", True),
        ("ignore_repo_prefix", "Ignore repos starting with (optional):", "e.g. archive-", False),
    ]
    REQUIRED = ("base_url", "project", "package", "token")

    OUTPUT_OPTIONS = [
        ("Show in terminal", OutputKind.console.value),
        ("Tab separated (.txt)", OutputKind.txt.value),
        ("Markdown (.md)", OutputKind.md.value),
    ]

    def __init__(self, defaults: Optional[dict[str, str]] = None, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.defaults = defaults or {}

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="home-container"):
                yield Static("📦  Package Auditor", id="title")
                yield Static(
                    "Which version of a package does each repo use?",
                    id="subtitle",
                )
                for key, label, placeholder, secret in self.FIELDS:
                    yield Label(label, classes="field-label")
                    yield Input(
                        value=self.defaults.get(key, ""),
                        placeholder=placeholder,
                        password=secret,
                        id=f"{key.replace('_', '-')}-input",
                    )
                yield Label("Report:", classes="field-label")
                yield Select(self.OUTPUT_OPTIONS, value=OutputKind.console.value, id="output-select")
                yield Button("▶  Start Audit", id="start-btn", variant="primary")
                yield Label("", id="error-label")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#base-url-input", Input).focus()

    def _value(self, key: str) -> str:
        return self.query_one(f"#{key.replace('_', '-')}-input", Input).value.strip()

    @on(Button.Pressed, "#start-btn")
    def start_audit(self) -> None:
        error_label = self.query_one("#error-label", Label)
        missing = [key for key in self.REQUIRED if not self._value(key)]
        if missing:
            names = ", ".join(k.replace("_", " ") for k in missing)
            error_label.update(f"⚠  Required: {names}")
            return
        error_label.update("")

        kind = self.query_one("#output-select", Select).value
        if kind is Select.BLANK:
            kind = OutputKind.console.value

        config = AuditConfig(
            base_url=self._value("base_url"),
            project=self._value("project"),
            package=self._value("package"),
            token=self._value("token"),
            ignore_repo_prefix=self._value("ignore_repo_prefix") or None,
            output_kind=OutputKind(kind),
        )
        self.app.start_audit(config)  # type: ignore[attr-defined]

    @on(Input.Submitted)
    def submit_on_enter(self) -> None:
        self.start_audit()
