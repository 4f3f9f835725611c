"""Textual TUI for package-auditor."""

from typing import Optional

from textual.app import App

from package_auditor.auditor import run_audit
from package_auditor.errors import AuditError, AuthError, NotFoundError, TransportError
from package_auditor.models import AuditConfig, AuditResult
from package_auditor.screens.home import HomeScreen
from package_auditor.screens.loading import LoadingScreen
from package_auditor.screens.results import ResultsScreen


def describe_error(error: Exception, config: AuditConfig) -> str:
    """User-facing message for a failed audit."""
    if isinstance(error, AuthError):
        return (
            "❌ Bitbucket rejected the token. Check that it is valid and has "
            f"read access to project '{config.project}'."
        )
    if isinstance(error, NotFoundError):
        return f"❌ Project '{config.project}' was not found on {config.base_url}."
    if isinstance(error, TransportError):
        if error.status_code is None:
            return f"❌ Could not connect to {config.base_url}. Check the URL and your network."
        return f"❌ Bitbucket API error ({error.status_code}): {error}"
    if isinstance(error, AuditError):
        return f"❌ {error}"
    return f"❌ Unexpected error: {error}"


class PackageAuditorApp(App):
    """TUI application for auditing package versions across a project."""

    TITLE = "Package Auditor"
    SUB_TITLE = "Bitbucket · .csproj · PackageReference"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, defaults: Optional[dict[str, str]] = None, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.defaults = defaults or {}

    def on_mount(self) -> None:
        self.push_screen(HomeScreen(defaults=self.defaults))

    def start_audit(self, config: AuditConfig) -> None:
        """Kick off the audit — called from HomeScreen."""
        loading = LoadingScreen(project=config.project)
        self.push_screen(loading)

        async def _do_work() -> None:
            def on_status(msg: str) -> None:
                self.call_from_thread(loading.add_status, msg)

            def on_progress(done: int, total: int) -> None:
                self.call_from_thread(loading.set_progress, done, total)

            try:
                result = await run_audit(config, on_status=on_status, on_progress=on_progress)
                self.call_from_thread(self._show_results, result, config)
            except Exception as e:
                self.call_from_thread(loading.show_failure, describe_error(e, config))

        self.run_worker(_do_work(), thread=True)

    def _show_results(self, result: AuditResult, config: AuditConfig) -> None:
        """Replace loading screen with results."""
        self.pop_screen()
        self.push_screen(ResultsScreen(result, config))
