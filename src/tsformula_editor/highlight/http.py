"""HttpHighlighter: remote syntax highlighting over HTTP via ``httpx``.

Posts the rendered formula as a plain-text body to
``<base_url>/tsformula/pygmentize`` and expects a JSON string holding the
highlighted markup.  Every failure mode (connection error, timeout, non-2xx
status, body that is not a JSON string) is raised as ``HighlightError`` so
the controller can show it instead of the highlighted code.

No retry is attempted: the next render tick sends a fresh request as soon
as the formula changes again.

Example::

    async with HttpHighlighter("http://localhost:5000") as highlighter:
        markup = await highlighter.highlight("add(3, 4)")
"""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import Any

import httpx

from tsformula_editor.errors import HighlightError

__all__ = ["ENDPOINT", "HttpHighlighter"]

logger = logging.getLogger(__name__)

ENDPOINT = "/tsformula/pygmentize"


class HttpHighlighter:
    """Highlighting collaborator reached over HTTP.

    Satisfies the ``Highlighter`` Protocol structurally.

    Args:
        base_url: URL prefix of the formula server, e.g. ``"http://host/api"``.
            A trailing slash is ignored.
        timeout:  Request timeout in seconds.
        client:   Optional ``httpx.AsyncClient`` to use instead of an owned
            one (e.g. with a ``MockTransport`` in tests).  A supplied client
            is never closed by this object.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = base_url.rstrip("/") + ENDPOINT
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = client
        self._owns_client = client is None

    def __repr__(self) -> str:
        return f"HttpHighlighter(url={self._url!r})"

    @property
    def url(self) -> str:
        return self._url

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def highlight(self, text: str) -> str:
        """POST ``text`` and return the markup carried by the JSON response.

        Raises:
            HighlightError: On transport failure, error status or a body that
                is not a JSON string.
        """
        client = self._get_client()
        try:
            response = await client.post(
                self._url,
                content=text.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise HighlightError(f"highlighting failed: HTTP {status}") from exc
        except (httpx.HTTPError, httpx.StreamError, httpx.InvalidURL) as exc:
            raise HighlightError(f"highlighting failed: {exc!r}") from exc

        try:
            body: Any = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise HighlightError("highlighting failed: response is not JSON") from exc
        if not isinstance(body, str):
            msg = f"highlighting failed: expected a JSON string, got {type(body).__name__}"
            raise HighlightError(msg)
        logger.debug("highlighted %d chars into %d chars", len(text), len(body))
        return body

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpHighlighter:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
