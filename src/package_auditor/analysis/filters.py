"""Predicates applied while walking a project."""

from typing import Optional

from package_auditor.models import PackageReference


def is_ignored_repo(slug: str, ignore_prefix: Optional[str]) -> bool:
    """True when the repo slug starts with the configured ignore prefix."""
    if not ignore_prefix:
        return False
    return slug.startswith(ignore_prefix)


def matches_package(reference: PackageReference, package: str) -> bool:
    """Exact, case-sensitive package name comparison."""
    return reference.package_name == package
