"""Bitbucket Server data fetching via REST API."""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from package_auditor.errors import AuthError, NotFoundError, TransportError
from package_auditor.models import RepoFile, Repository

API_PREFIX = "/rest/api/1.0"


def normalize_base_url(base_url: str) -> str:
    """Accept a bare host (``bitbucket.example.com``) or a full URL."""
    url = base_url.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


class BitbucketFetcher:
    """Lists repositories and files of a project and reads file contents."""

    def __init__(
        self,
        base_url: str,
        token: str,
        page_limit: int = 100,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = normalize_base_url(base_url)
        self.token = token
        self.page_limit = page_limit
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {"Accept": "application/json"}
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
            )
        return self._client

    async def _get(self, path: str, **kwargs) -> httpx.Response:  # type: ignore[no-untyped-def]
        """GET that turns every failure into an AuditError subclass."""
        client = await self._client_instance()
        try:
            resp = await client.get(path, **kwargs)
        except httpx.TransportError as e:
            raise TransportError(f"Could not reach {self.base_url}: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request to {path} failed: {e}") from e

        if resp.is_success:
            return resp
        status = resp.status_code
        if status in (401, 403):
            raise AuthError(
                f"Bitbucket denied access to {path} ({status}). "
                "Check that the token is valid and can read the project.",
                status_code=status,
            )
        if status == 404:
            raise NotFoundError(f"Not found: {path}", status_code=status)
        raise TransportError(
            f"Bitbucket API error ({status}) for {path}: {resp.reason_phrase}",
            status_code=status,
        )

    async def _get_json(self, path: str, **kwargs) -> dict[str, Any]:  # type: ignore[no-untyped-def]
        resp = await self._get(path, **kwargs)
        try:
            data = resp.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {path}", status_code=resp.status_code) from e
        if not isinstance(data, dict):
            raise TransportError(
                f"Expected a JSON object from {path}, got {type(data).__name__}",
                status_code=resp.status_code,
            )
        return data

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BitbucketFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── Paginated helper ──────────────────────────────────────────────────

    async def _paginate(
        self,
        path: str,
        key: str = "values",
        params: Optional[dict[str, str]] = None,
    ) -> list[Any]:
        """Fetch every page of a Bitbucket paged endpoint, in API order."""
        params = dict(params or {})
        params.setdefault("limit", str(self.page_limit))

        results: list[Any] = []
        start = 0
        while True:
            params["start"] = str(start)
            data = await self._get_json(path, params=params)
            page = data.get(key) or []
            if not isinstance(page, list):
                raise TransportError(f"Expected a list under '{key}' from {path}")
            results.extend(page)
            if data.get("isLastPage", True):
                break
            next_start = data.get("nextPageStart")
            if next_start is None:
                break
            if int(next_start) <= start:
                raise TransportError(
                    f"Bitbucket paging did not advance for {path} (start={start}, next={next_start})"
                )
            start = int(next_start)
        return results

    # ── Repositories ──────────────────────────────────────────────────────

    async def list_repositories(self, project: str) -> list[Repository]:
        """All repositories of a project, in the order Bitbucket returns them."""
        raw = await self._paginate(f"{API_PREFIX}/projects/{quote(project)}/repos")
        return [Repository.from_api(item) for item in raw]

    # ── Files ─────────────────────────────────────────────────────────────

    async def list_files(
        self,
        project: str,
        repo_slug: str,
        suffix: Optional[str] = None,
    ) -> list[str]:
        """Repository-relative paths, optionally only those ending in ``suffix``."""
        paths: list[str] = await self._paginate(
            f"{API_PREFIX}/projects/{quote(project)}/repos/{quote(repo_slug)}/files"
        )
        if suffix:
            paths = [p for p in paths if p.endswith(suffix)]
        return paths

    async def get_file_content(
        self, project: str, repo_slug: str, path: str
    ) -> list[str]:
        """The file's lines, exactly as Bitbucket splits them."""
        raw = await self._paginate(
            f"{API_PREFIX}/projects/{quote(project)}/repos/{quote(repo_slug)}"
            f"/browse/{quote(path, safe='/')}",
            key="lines",
        )
        if not all(isinstance(line, dict) for line in raw):
            raise TransportError(f"Malformed line entries in {repo_slug}/{path}")
        return [line.get("text", "") for line in raw]

    async def get_repo_file(
        self, project: str, repo_slug: str, path: str
    ) -> RepoFile:
        lines = await self.get_file_content(project, repo_slug, path)
        return RepoFile(path=path, lines=lines)
