"""Delivering a rendered report to the console or to disk."""

from pathlib import Path
from typing import Callable, Optional

from package_auditor.errors import OutputError
from package_auditor.models import OutputKind, PackageVersionReport


def output_path(
    kind: OutputKind, base_name: str, directory: Optional[Path] = None
) -> Path:
    """File path for a file-backed output kind."""
    if kind.extension is None:
        raise ValueError(f"Output kind {kind.value!r} is not written to a file")
    return (directory or Path.cwd()) / f"{base_name}{kind.extension}"


def deliver_report(
    report: PackageVersionReport,
    kind: OutputKind,
    base_name: str,
    directory: Optional[Path] = None,
    echo: Callable[[str], None] = print,
) -> Optional[Path]:
    """Print the report or write it to ``<base_name>.<ext>``.

    Returns the written path, or None for console output.
    """
    text = report.render(kind.report_format)
    if kind is OutputKind.console:
        echo(text)
        return None

    path = output_path(kind, base_name, directory)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Could not write report to {path}: {e}") from e
    return path
