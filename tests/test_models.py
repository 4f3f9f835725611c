"""Tests for the data models."""

import pytest
from pydantic import ValidationError

from package_auditor.models import (
    AuditConfig,
    OutputKind,
    PackageReference,
    PackageVersionReport,
    ReportFormat,
    RepoPackageReference,
    Repository,
)


def _ref(repo: str, path: str = "a.csproj", version: str = "1.0.0") -> RepoPackageReference:
    return RepoPackageReference(
        repo_slug=repo, file_path=path, package_name="Foo", version=version
    )


class TestOutputKind:
    def test_report_formats(self):
        assert OutputKind.console.report_format is ReportFormat.console
        assert OutputKind.txt.report_format is ReportFormat.delimited
        assert OutputKind.md.report_format is ReportFormat.markdown

    def test_extensions(self):
        assert OutputKind.console.extension is None
        assert OutputKind.txt.extension == ".txt"
        assert OutputKind.md.extension == ".md"


class TestAuditConfig:
    def test_defaults(self):
        cfg = AuditConfig(base_url="bb", project="P", package="Foo")
        assert cfg.output_kind is OutputKind.console
        assert cfg.output_file_name == "package-version-report"
        assert cfg.ignore_repo_prefix is None
        assert cfg.token == ""

    def test_output_kind_from_string(self):
        cfg = AuditConfig(base_url="bb", project="P", package="Foo", output_kind="md")
        assert cfg.output_kind is OutputKind.md


class TestRepository:
    def test_from_api(self):
        repo = Repository.from_api(
            {"slug": "my-repo", "name": "My Repo", "project": {"key": "PRJ"}}
        )
        assert repo.slug == "my-repo"
        assert repo.name == "My Repo"
        assert repo.project == "PRJ"

    def test_from_api_minimal(self):
        repo = Repository.from_api({"slug": "x"})
        assert repo.name == ""
        assert repo.project == ""

    def test_immutable(self):
        repo = Repository(slug="x")
        with pytest.raises(ValidationError):
            repo.slug = "y"


class TestPackageReference:
    def test_create(self):
        ref = PackageReference(package_name="Foo", version="1.2.3")
        assert ref.package_name == "Foo"

    @pytest.mark.parametrize("name, version", [("", "1.0"), ("Foo", "")])
    def test_empty_fields_rejected(self, name, version):
        with pytest.raises(ValidationError):
            PackageReference(package_name=name, version=version)

    def test_repo_reference_from_reference(self):
        ref = PackageReference(package_name="Foo", version="1.2.3")
        rec = RepoPackageReference.from_reference("a", "src/a.csproj", ref)
        assert rec == RepoPackageReference(
            repo_slug="a", file_path="src/a.csproj", package_name="Foo", version="1.2.3"
        )


class TestPackageVersionReport:
    def test_append_keeps_order(self):
        report = PackageVersionReport()
        for slug in ("b", "a", "c"):
            report.append(_ref(slug))
        assert [r.repo_slug for r in report.references] == ["b", "a", "c"]

    def test_no_deduplication(self):
        report = PackageVersionReport()
        report.append(_ref("a"))
        report.append(_ref("a"))
        assert len(report.references) == 2

    def test_extend(self):
        report = PackageVersionReport()
        report.append(_ref("a"))
        report.extend([_ref("b"), _ref("c")])
        assert [r.repo_slug for r in report.references] == ["a", "b", "c"]

    def test_repo_slugs_first_seen_order(self):
        report = PackageVersionReport()
        report.extend([_ref("b"), _ref("a"), _ref("b", "other.csproj")])
        assert report.repo_slugs == ["b", "a"]

    @pytest.mark.parametrize("fmt", list(ReportFormat))
    def test_render_is_repeatable_and_pure(self, fmt):
        report = PackageVersionReport(package="Foo")
        report.extend([_ref("a"), _ref("b", version="2.0.0")])
        before = list(report.references)
        first = report.render(fmt)
        second = report.render(fmt)
        assert first == second
        assert report.references == before

    @pytest.mark.parametrize("fmt", list(ReportFormat))
    def test_render_empty(self, fmt):
        text = PackageVersionReport().render(fmt)
        assert isinstance(text, str)
        assert text
