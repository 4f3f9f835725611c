"""Package reference extraction from .csproj lines.

Build files are scanned as plain text, one line at a time. A declaration
counts only when the whole ``<PackageReference ... />`` element sits on a
single line, which is the convention for SDK-style projects. Declarations
whose Version is a child element spanning several lines are not reported.
"""

import re
from typing import Iterable, Optional

from package_auditor.models import PackageReference

_COMMENT_RE = re.compile(r"<!--.*?-->")
_ELEMENT_RE = re.compile(r"<PackageReference\b(?P<attrs>[^>]*?)/?>")
_ATTR_RE = re.compile(
    r"""(?P<name>[A-Za-z_][\w.:-]*)\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')"""
)


def _strip_comments(line: str) -> str:
    """Drop comment text that is visible from this line alone."""
    text = _COMMENT_RE.sub("", line)
    # Tail of a comment opened on an earlier line
    if "-->" in text:
        text = text.rsplit("-->", 1)[1]
    # Comment opened here and closed on a later line
    if "<!--" in text:
        text = text.split("<!--", 1)[0]
    return text


def _attributes(raw: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(raw):
        value = m.group("dq") if m.group("dq") is not None else m.group("sq")
        attrs.setdefault(m.group("name"), value)
    return attrs


def parse_package_reference(line: str) -> Optional[PackageReference]:
    """Return the (Include, Version) pair declared on ``line``, if any."""
    match = _ELEMENT_RE.search(_strip_comments(line))
    if not match:
        return None

    attrs = _attributes(match.group("attrs"))
    name = attrs.get("Include", "").strip()
    version = attrs.get("Version", "").strip()
    if not name or not version:
        return None
    return PackageReference(package_name=name, version=version)


def extract_references(lines: Iterable[str]) -> list[PackageReference]:
    """Parse every line in order, keeping only the matches."""
    refs: list[PackageReference] = []
    for line in lines:
        ref = parse_package_reference(line)
        if ref is not None:
            refs.append(ref)
    return refs
