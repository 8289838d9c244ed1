# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Package version resolution against a PyPI-compatible JSON index.

``GET {index_url}/{name}/json`` returns every release with its files; the
latest version that is not a pre-release and still has a non-yanked file wins.
Lookups for distinct names run concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import httpx
from packaging.version import InvalidVersion, Version

from grpcwizard.errors import VersionLookupError

logger = logging.getLogger(__name__)

DEFAULT_INDEX_URL = "https://pypi.org/pypi"


class VersionResolver(Protocol):
    """Anything that can resolve latest stable versions for package names."""

    async def resolve_many(self, names: list[str]) -> dict[str, str]: ...


def latest_stable_version(name: str, releases: dict[str, list[dict[str, Any]]]) -> str:
    """
    Pick the latest stable, non-yanked version from a ``releases`` mapping.

    Raises:
        VersionLookupError: If no release qualifies
    """
    candidates: list[Version] = []
    for raw_version, files in releases.items():
        try:
            version = Version(raw_version)
        except InvalidVersion:
            logger.debug("Skipping unparseable version %r of %s", raw_version, name)
            continue
        if version.is_prerelease:
            continue
        if not any(not file.get("yanked", False) for file in files):
            continue
        candidates.append(version)

    if not candidates:
        raise VersionLookupError(name, "no stable, non-yanked release found")
    return str(max(candidates))


class PackageVersionResolver:
    """
    Resolve latest stable package versions over HTTP.

    Handles:
    - One JSON request per distinct package name, issued concurrently
    - HTTP and decoding failures (VersionLookupError)
    - Pre-release and yanked release filtering
    """

    def __init__(
        self,
        index_url: str = DEFAULT_INDEX_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            index_url: Base URL of the JSON API (no trailing slash needed)
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.index_url = index_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def latest_version(self, name: str, client: httpx.AsyncClient | None = None) -> str:
        """Resolve one package; opens a client when none is passed."""
        if client is None:
            async with self._client() as owned:
                return await self._lookup(owned, name)
        return await self._lookup(client, name)

    async def resolve_many(self, names: list[str]) -> dict[str, str]:
        """
        Resolve several packages concurrently.

        Args:
            names: Package names; duplicates are looked up once

        Returns:
            Mapping of package name to version, in first-occurrence order

        Raises:
            VersionLookupError: If any lookup fails
        """
        distinct = list(dict.fromkeys(names))
        if not distinct:
            return {}

        async with self._client() as client:
            versions = await asyncio.gather(
                *(self._lookup(client, name) for name in distinct)
            )
        resolved = dict(zip(distinct, versions))
        logger.info("Resolved %d package version(s)", len(resolved))
        return resolved

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def _lookup(self, client: httpx.AsyncClient, name: str) -> str:
        url = f"{self.index_url}/{name}/json"
        logger.debug("Looking up %s at %s", name, url)
        try:
            response = await client.get(url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise VersionLookupError(
                name, f"index returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise VersionLookupError(name, f"request failed: {e}") from e
        except ValueError as e:
            raise VersionLookupError(name, "index returned invalid JSON") from e

        releases = payload.get("releases") if isinstance(payload, dict) else None
        if not isinstance(releases, dict):
            raise VersionLookupError(name, "index response has no releases")

        version = latest_stable_version(name, releases)
        logger.debug("Latest stable version of %s is %s", name, version)
        return version
