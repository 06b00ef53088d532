# src/taskflow/store/client.py

"""
HTTP client for the spreadsheet web-app endpoint.

Wire format:
- GET  <url>?sheet=<name>&action=fetch             -> {"success": bool, "data": [[...]], "error": str}
- POST <url> form: sheetName, action, rowIndex?, rowData | rowsData (JSON) -> {"success": bool, "error": str}

The endpoint interprets an empty cell in rowData as "leave this cell alone".
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..core.ports import RawRow, RowTarget, WriteResult

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for store failures."""


class StoreTransportError(StoreError):
    """HTTP / network / decoding failure."""


class StoreRejectedError(StoreError):
    """The store answered but reported success=false."""


def _make_timeout(seconds: float) -> httpx.Timeout:
    s = max(1.0, float(seconds))
    return httpx.Timeout(s, connect=min(s, 10.0))


class SheetsClient:
    """
    Async SheetStore implementation over httpx.

    One AsyncClient is created lazily and reused; call aclose() on shutdown.
    A custom transport can be injected (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not (base_url or "").strip():
            raise ValueError("Store URL is not set. Set TASKFLOW_STORE_URL in your .env.")
        self._base_url = base_url.strip()
        self._timeout = _make_timeout(timeout_seconds)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # Apps Script answers with a redirect to the actual content host.
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ---- low-level ----

    async def _request(self, method: str, **kwargs: Any) -> dict[str, Any]:
        client = self._get_client()
        try:
            resp = await client.request(method, self._base_url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Store %s failed: %s", method, e)
            raise StoreTransportError(str(e) or e.__class__.__name__) from e

        if resp.status_code >= 400:
            logger.warning("Store %s returned HTTP %s", method, resp.status_code)
            raise StoreTransportError(f"HTTP error! status: {resp.status_code}")

        try:
            payload = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StoreTransportError("Store returned a non-JSON response") from e

        if not isinstance(payload, dict):
            raise StoreTransportError("Store returned an unexpected response shape")
        return payload

    async def _post(self, form: dict[str, str]) -> WriteResult:
        payload = await self._request("POST", data=form)
        if payload.get("success"):
            return WriteResult(success=True)
        error = str(payload.get("error") or "Unknown error")
        logger.info("Store rejected %s on %s: %s", form.get("action"), form.get("sheetName"), error)
        return WriteResult(success=False, error=error)

    # ---- SheetStore ----

    async def fetch_rows(self, sheet: str) -> list[RawRow]:
        payload = await self._request("GET", params={"sheet": sheet, "action": "fetch"})
        data = payload.get("data")
        if not payload.get("success") or data is None:
            raise StoreRejectedError(str(payload.get("error") or "Failed to fetch data"))
        if not isinstance(data, list):
            raise StoreTransportError("Store returned rows in an unexpected shape")
        rows = [r if isinstance(r, list) else [] for r in data]
        logger.debug("Fetched %d rows from sheet=%s", len(rows), sheet)
        return rows

    async def write_row(self, sheet: str, row_index: RowTarget, values: list[str]) -> WriteResult:
        form = {"sheetName": sheet, "rowData": json.dumps(values, ensure_ascii=False)}
        if row_index == "append":
            form["action"] = "insert"
        else:
            form["action"] = "update"
            form["rowIndex"] = str(int(row_index))
        logger.debug("Store write sheet=%s action=%s row=%s", sheet, form["action"], row_index)
        return await self._post(form)

    async def append_rows(self, sheet: str, rows: list[list[str]]) -> WriteResult:
        form = {
            "sheetName": sheet,
            "action": "insertMultiple",
            "rowsData": json.dumps(rows, ensure_ascii=False),
        }
        logger.debug("Store insertMultiple sheet=%s rows=%d", sheet, len(rows))
        return await self._post(form)
