"""Synchronous API client for the pdf-sidebyside merge service."""

from __future__ import annotations

from typing import Any

import httpx

from pdf_sidebyside.exceptions import ServiceAPIError, ServiceConnectionError

_MERGE_PATH = "/api/merge-pdfs"
_PDF_MEDIA_TYPE = "application/pdf"


class SideBySideClient:
    """Synchronous wrapper around the merge service HTTP API.

    Usage::

        with SideBySideClient("http://localhost:8000") as client:
            merged = client.compose(english_pdf, german_pdf)
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> SideBySideClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # -- Internal helpers -----------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and translate errors into our exception hierarchy."""
        try:
            resp = self._client.request(method, path, **kwargs)
        except httpx.ConnectError as exc:
            raise ServiceConnectionError(
                f"Cannot connect to {self._base_url}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise ServiceConnectionError(
                f"Request to {self._base_url} timed out"
            ) from exc

        if resp.status_code >= 400:
            detail = resp.text[:500]
            category = ""
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                detail = str(body.get("detail") or body.get("error") or detail)
                category = str(body.get("category", ""))
            raise ServiceAPIError(resp.status_code, detail, category)

        return resp

    # -- Public API -----------------------------------------------------------

    def health(self) -> dict[str, Any]:
        """Return the service health payload."""
        return self._request("GET", "/health").json()

    def compose(
        self,
        pdf_a: bytes,
        pdf_b: bytes,
        *,
        filenames: tuple[str, str] = ("a.pdf", "b.pdf"),
    ) -> bytes:
        """Upload two PDFs and return the side-by-side merge.

        ``pdf_a`` ends up on the left of every output page, ``pdf_b`` on
        the right.
        """
        files = {
            "pdf1": (filenames[0], pdf_a, _PDF_MEDIA_TYPE),
            "pdf2": (filenames[1], pdf_b, _PDF_MEDIA_TYPE),
        }
        resp = self._request("POST", _MERGE_PATH, files=files)
        return resp.content
