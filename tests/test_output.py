"""Tests for output.py — printing and writing reports."""

from pathlib import Path
from unittest.mock import patch

import pytest

from package_auditor.errors import OutputError
from package_auditor.models import OutputKind, PackageVersionReport, RepoPackageReference
from package_auditor.output import deliver_report, output_path


@pytest.fixture
def report():
    r = PackageVersionReport(package="Foo")
    r.append(
        RepoPackageReference(repo_slug="a", file_path="pkg.csproj", package_name="Foo", version="1.2.3")
    )
    return r


class TestOutputPath:
    def test_txt(self, tmp_path):
        assert output_path(OutputKind.txt, "report", tmp_path) == tmp_path / "report.txt"

    def test_md(self, tmp_path):
        assert output_path(OutputKind.md, "report", tmp_path) == tmp_path / "report.md"

    def test_defaults_to_cwd(self):
        assert output_path(OutputKind.md, "r") == Path.cwd() / "r.md"

    def test_console_has_no_path(self):
        with pytest.raises(ValueError):
            output_path(OutputKind.console, "report")


class TestDeliverReport:
    def test_console_echoes(self, report):
        printed: list[str] = []
        path = deliver_report(report, OutputKind.console, "unused", echo=printed.append)
        assert path is None
        assert printed == [report.render(OutputKind.console.report_format)]

    def test_console_writes_nothing(self, report, tmp_path):
        deliver_report(report, OutputKind.console, "r", directory=tmp_path, echo=lambda _: None)
        assert list(tmp_path.iterdir()) == []

    def test_txt_written_as_delimited(self, report, tmp_path):
        path = deliver_report(report, OutputKind.txt, "r", directory=tmp_path)
        assert path == tmp_path / "r.txt"
        assert path.read_text(encoding="utf-8").splitlines()[1] == "a\tpkg.csproj\tFoo\t1.2.3"

    def test_md_written_as_markdown(self, report, tmp_path):
        path = deliver_report(report, OutputKind.md, "r", directory=tmp_path)
        assert path == tmp_path / "r.md"
        assert "| a | pkg.csproj | Foo | 1.2.3 |" in path.read_text(encoding="utf-8")

    def test_empty_report_written(self, tmp_path):
        path = deliver_report(PackageVersionReport(), OutputKind.md, "r", directory=tmp_path)
        assert "| Repository | File | Package | Version |" in path.read_text(encoding="utf-8")

    def test_write_failure(self, report, tmp_path):
        with pytest.raises(OutputError):
            deliver_report(report, OutputKind.txt, "r", directory=tmp_path / "missing")

    def test_write_failure_keeps_cause(self, report, tmp_path):
        with patch.object(Path, "write_text", side_effect=PermissionError("denied")):
            with pytest.raises(OutputError) as exc_info:
                deliver_report(report, OutputKind.md, "r", directory=tmp_path)
        assert isinstance(exc_info.value.__cause__, PermissionError)
