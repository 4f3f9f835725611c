"""Text renderings of a package version report.

Every renderer emits records in the order it receives them.
"""

import csv
import io
from typing import Sequence

from package_auditor.models import ReportFormat, RepoPackageReference

COLUMNS = ("Repository", "File", "Package", "Version")


def _row(ref: RepoPackageReference) -> tuple[str, str, str, str]:
    return (ref.repo_slug, ref.file_path, ref.package_name, ref.version)


def _title(package: str) -> str:
    return f"Package version report: {package}" if package else "Package version report"


def render_console(references: Sequence[RepoPackageReference], package: str = "") -> str:
    """Aligned plain-text columns for terminal output."""
    rows = [_row(r) for r in references]
    widths = [len(c) for c in COLUMNS]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def fmt(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    lines = [_title(package), "", fmt(COLUMNS), fmt(["-" * w for w in widths])]
    if rows:
        lines.extend(fmt(row) for row in rows)
    else:
        lines.append("(no references found)")
    return "\n".join(lines) + "\n"


def render_delimited(references: Sequence[RepoPackageReference]) -> str:
    """Tab separated values with a header row."""
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter="\t", lineterminator="\n")
    writer.writerow([c.lower() for c in COLUMNS])
    for ref in references:
        writer.writerow(_row(ref))
    return buf.getvalue()


def _md_cell(text: str) -> str:
    return text.replace("\\", "\\\\").replace("|", "\\|")


def render_markdown(references: Sequence[RepoPackageReference], package: str = "") -> str:
    """Markdown document with a single table; the table header is always present."""
    heading = f"# Package version report: `{package}`" if package else "# Package version report"
    lines = [
        heading,
        "",
        "| " + " | ".join(COLUMNS) + " |",
        "| " + " | ".join("---" for _ in COLUMNS) + " |",
    ]
    for ref in references:
        lines.append("| " + " | ".join(_md_cell(c) for c in _row(ref)) + " |")
    return "\n".join(lines) + "\n"


def render_report(
    references: Sequence[RepoPackageReference],
    fmt: ReportFormat,
    package: str = "",
) -> str:
    fmt = ReportFormat(fmt)
    if fmt is ReportFormat.console:
        return render_console(references, package)
    if fmt is ReportFormat.delimited:
        return render_delimited(references)
    if fmt is ReportFormat.markdown:
        return render_markdown(references, package)
    raise ValueError(f"Unsupported report format: {fmt!r}")
