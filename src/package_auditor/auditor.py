"""Audit pipeline.

Walks every repository of a Bitbucket project, pulls its .csproj files and
collects the declared version of one package into a PackageVersionReport.
Repositories are processed one after another; the files of a single
repository are fetched concurrently.
"""

import asyncio
import os
from typing import Callable, Iterable, Optional

from package_auditor.analysis.extractor import extract_references
from package_auditor.analysis.filters import is_ignored_repo, matches_package
from package_auditor.errors import AuditError
from package_auditor.fetcher import BitbucketFetcher
from package_auditor.logging import get_logger
from package_auditor.models import (
    AuditConfig,
    AuditResult,
    PackageVersionReport,
    RepoFile,
    RepoPackageReference,
)

BUILD_FILE_SUFFIX = ".csproj"

logger = get_logger("auditor")


class Auditor:
    """Runs one audit for the given configuration."""

    def __init__(
        self,
        config: AuditConfig,
        on_status: Optional[Callable[[str], None]] = None,
        fetcher: Optional[BitbucketFetcher] = None,
        on_progress: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        self.config = config
        self.token = config.token or os.environ.get("BITBUCKET_TOKEN") or ""
        self._on_status = on_status or (lambda _: None)
        self._on_progress = on_progress or (lambda done, total: None)
        self._fetcher = fetcher or BitbucketFetcher(config.base_url, self.token)

    # ── Status helper ─────────────────────────────────────────────────────

    def _status(self, msg: str) -> None:
        self._on_status(msg)

    async def close(self) -> None:
        await self._fetcher.close()

    # ── Full audit ────────────────────────────────────────────────────────

    async def audit(self) -> AuditResult:
        """Scan the whole project.

        Failing to list repositories or files aborts the run; a file whose
        content cannot be read is left out of the report.
        """
        cfg = self.config
        result = AuditResult(project=cfg.project, report=PackageVersionReport(package=cfg.package))
        report = result.report

        self._status(f"Listing repositories in {cfg.project} …")
        repos = await self._fetcher.list_repositories(cfg.project)
        self._status(f"Found {len(repos)} repositories")
        self._on_progress(0, len(repos))

        for done, repo in enumerate(repos, start=1):
            if is_ignored_repo(repo.slug, cfg.ignore_repo_prefix):
                result.ignored_repos.append(repo.slug)
                self._status(f"Ignored repo: {repo.slug}")
                self._on_progress(done, len(repos))
                continue

            files, skipped = await self._fetch_build_files(repo.slug)
            result.skipped_files += skipped
            report.extend(collect_references(repo.slug, files, cfg.package))
            result.scanned_repos.append(repo.slug)
            self._status(f"Done processing files from repo: {repo.slug}")
            self._on_progress(done, len(repos))

        self._status(
            f"Audit complete: {len(report.references)} references "
            f"in {len(result.scanned_repos)} repositories"
        )
        return result

    async def _fetch_build_files(self, repo_slug: str) -> tuple[list[RepoFile], int]:
        """Fetch every build file of a repo at once and wait for all of them.

        Returns the files that were read, in listing order, and how many
        could not be read.
        """
        project = self.config.project
        paths = await self._fetcher.list_files(project, repo_slug, BUILD_FILE_SUFFIX)
        if not paths:
            return [], 0

        self._status(f"Fetching {len(paths)} {BUILD_FILE_SUFFIX} files from {repo_slug} …")
        results = await asyncio.gather(
            *(self._fetcher.get_repo_file(project, repo_slug, p) for p in paths),
            return_exceptions=True,
        )

        files: list[RepoFile] = []
        skipped = 0
        for path, res in zip(paths, results):
            if isinstance(res, AuditError):
                logger.debug("Skipping %s/%s: %s", repo_slug, path, res)
                skipped += 1
                continue
            if isinstance(res, BaseException):
                raise res
            files.append(res)
        return files, skipped


def collect_references(
    repo_slug: str, files: Iterable[RepoFile], package: str
) -> list[RepoPackageReference]:
    """References to ``package`` in ``files``, in file then line order."""
    found: list[RepoPackageReference] = []
    for f in files:
        for ref in extract_references(f.lines):
            if matches_package(ref, package):
                found.append(RepoPackageReference.from_reference(repo_slug, f.path, ref))
    return found


async def run_audit(
    config: AuditConfig,
    on_status: Optional[Callable[[str], None]] = None,
    on_progress: Optional[Callable[[int, int], None]] = None,
) -> AuditResult:
    """Create an Auditor, run it and release its HTTP client."""
    auditor = Auditor(config, on_status=on_status, on_progress=on_progress)
    try:
        return await auditor.audit()
    finally:
        await auditor.close()
