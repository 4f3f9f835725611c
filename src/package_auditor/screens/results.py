"""Results screen — the report as a table, with save shortcuts."""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Label, Markdown, Static

from package_auditor.errors import OutputError
from package_auditor.models import AuditConfig, AuditResult, OutputKind, ReportFormat
from package_auditor.output import deliver_report


def markdown_preview(result: AuditResult) -> str:
    """The report as it would be saved to a .md file."""
    return result.report.render(ReportFormat.markdown)


class ResultsScreen(Screen):
    """Displays the references found, in report order."""

    CSS = """
    ResultsScreen {
        layout: vertical;
    }
    #results-header {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    #references-table {
        height: auto;
        margin: 1 0;
    }
    #markdown-preview {
        border: round $secondary;
        padding: 0 1;
    }
    #save-label {
        color: $success;
        margin: 1 0;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("b", "go_back", "Back"),
        ("t", "save('txt')", "Save .txt"),
        ("m", "save('md')", "Save .md"),
    ]

    def __init__(self, result: AuditResult, config: AuditConfig, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.result = result
        self.config = config

    def compose(self) -> ComposeResult:
        report = self.result.report
        yield Header(show_clock=True)
        yield Static(
            f"  📦  {self.config.package}  ·  project {self.result.project}  ",
            id="results-header",
        )
        with VerticalScroll():
            yield Label(
                f"References: {len(report.references)}  ·  "
                f"Repos using it: {len(report.repo_slugs)}  ·  "
                f"Scanned: {len(self.result.scanned_repos)}  ·  "
                f"Ignored: {len(self.result.ignored_repos)}  ·  "
                f"Unreadable files: {self.result.skipped_files}"
            )
            yield Static("REFERENCES", classes="section-title")
            if not report.references:
                yield Label("No references found.")
            else:
                table = DataTable(id="references-table")
                table.add_columns("Repository", "File", "Package", "Version")
                for ref in report.references:
                    table.add_row(ref.repo_slug, ref.file_path, ref.package_name, ref.version)
                yield table
            yield Static("MARKDOWN PREVIEW", classes="section-title")
            yield Markdown(markdown_preview(self.result), id="markdown-preview")
            yield Label("", id="save-label")
        yield Footer()

    def on_mount(self) -> None:
        if self.config.output_kind is not OutputKind.console:
            self.action_save(self.config.output_kind.value)

    def action_save(self, kind: str) -> None:
        label = self.query_one("#save-label", Label)
        try:
            path = deliver_report(
                self.result.report, OutputKind(kind), self.config.output_file_name
            )
        except OutputError as e:
            label.update(f"❌ {e}")
            return
        label.update(f"💾 Report written to {path}")

    def action_go_back(self) -> None:
        self.app.pop_screen()
