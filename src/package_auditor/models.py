"""Data models for package-auditor."""

from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_OUTPUT_FILE_NAME = "package-version-report"


# ── Output selection ──────────────────────────────────────────────────────

class ReportFormat(str, Enum):
    """Textual rendering of a report."""

    console = "console"
    delimited = "delimited"
    markdown = "markdown"


class OutputKind(str, Enum):
    """Where the rendered report goes."""

    console = "console"
    txt = "txt"
    md = "md"

    @property
    def report_format(self) -> ReportFormat:
        return {
            OutputKind.console: ReportFormat.console,
            OutputKind.txt: ReportFormat.delimited,
            OutputKind.md: ReportFormat.markdown,
        }[self]

    @property
    def extension(self) -> Optional[str]:
        """File extension, or None when the report is only printed."""
        if self is OutputKind.console:
            return None
        return f".{self.value}"


# ── Configuration ─────────────────────────────────────────────────────────

class AuditConfig(BaseModel):
    """Validated settings for one audit run."""

    base_url: str
    project: str
    package: str
    token: str = ""
    ignore_repo_prefix: Optional[str] = None
    output_kind: OutputKind = OutputKind.console
    output_file_name: str = DEFAULT_OUTPUT_FILE_NAME


# ── Raw Bitbucket data ────────────────────────────────────────────────────

class Repository(BaseModel):
    """A repository inside a Bitbucket project."""

    model_config = ConfigDict(frozen=True)

    slug: str
    name: str = ""
    project: str = ""

    @classmethod
    def from_api(cls, item: dict) -> "Repository":
        return cls(
            slug=item["slug"],
            name=item.get("name", ""),
            project=(item.get("project") or {}).get("key", ""),
        )


class RepoFile(BaseModel):
    """A file fetched from a repository, split into its source lines."""

    path: str
    lines: list[str] = Field(default_factory=list)


# ── Extracted references ──────────────────────────────────────────────────

class PackageReference(BaseModel):
    """A package name and version declared on a single line."""

    model_config = ConfigDict(frozen=True)

    package_name: str
    version: str

    @field_validator("package_name", "version")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value


class RepoPackageReference(BaseModel):
    """A PackageReference located in a repository file."""

    model_config = ConfigDict(frozen=True)

    repo_slug: str
    file_path: str
    package_name: str
    version: str

    @classmethod
    def from_reference(
        cls, repo_slug: str, file_path: str, reference: PackageReference
    ) -> "RepoPackageReference":
        return cls(
            repo_slug=repo_slug,
            file_path=file_path,
            package_name=reference.package_name,
            version=reference.version,
        )


# ── Report ────────────────────────────────────────────────────────────────

class PackageVersionReport(BaseModel):
    """Append-only, insertion-ordered collection of package references."""

    package: str = ""
    references: list[RepoPackageReference] = Field(default_factory=list)

    def append(self, record: RepoPackageReference) -> None:
        self.references.append(record)

    def extend(self, records: Iterable[RepoPackageReference]) -> None:
        self.references.extend(records)

    @property
    def repo_slugs(self) -> list[str]:
        """Distinct repository slugs, in the order they were first appended."""
        return list(dict.fromkeys(r.repo_slug for r in self.references))

    def render(self, fmt: ReportFormat = ReportFormat.console) -> str:
        """Render the report as text without modifying it."""
        from package_auditor.analysis.report import render_report

        return render_report(self.references, fmt, package=self.package)


class AuditResult(BaseModel):
    """Outcome of a full audit run."""

    project: str
    report: PackageVersionReport
    scanned_repos: list[str] = Field(default_factory=list)
    ignored_repos: list[str] = Field(default_factory=list)
    skipped_files: int = 0
    generated_at: datetime = Field(default_factory=datetime.now)
