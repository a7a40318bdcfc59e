"""Delivery of finished-session results to the progress collaborator.

Sessions hand their :class:`PuzzleResult` to an injected sink exactly once,
when they reach ``FINISHED``. Two sinks ship with the package:

- :class:`JsonResultStore` writes one JSON document per result under
  ``local_db/collections/puzzle_results/``.
- :class:`HttpResultSink` POSTs the payload to a progress service.
"""

from __future__ import annotations

import json
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import requests

from ..core.exceptions import ResultSinkError
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..engine.session import PuzzleResult


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections/puzzle_results")


class JsonResultStore:
    """Save puzzle results as structured JSON documents."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def save(self, result: "PuzzleResult") -> str:
        doc_id = self._new_id()
        doc = {
            "id": doc_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "result": result.to_jsonable(),
        }
        path = self.store_dir / f"{doc_id}.json"
        try:
            path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            raise ResultSinkError(f"Could not write {path}: {exc}") from exc
        LOGGER.info("Puzzle result saved: %s", doc_id)
        return doc_id

    def load(self, doc_id: str) -> dict:
        path = self.store_dir / f"{doc_id}.json"
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _new_id() -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        return f"{ts}_{short_uuid}"


class HttpResultSink:
    """Minimal client posting results to a progress-tracking endpoint."""

    def __init__(
        self,
        url: str,
        token_env: str = "WORDGRID_PROGRESS_TOKEN",
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.token_env = token_env
        self.timeout_seconds = timeout_seconds
        self._token = os.environ.get(token_env)
        self._http = session or requests.Session()

    def save(self, result: "PuzzleResult") -> str:
        headers = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        try:
            response = self._http.post(
                self.url,
                json=result.to_jsonable(),
                headers=headers,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ResultSinkError(f"Progress upload failed: {exc}") from exc

        ref = self._extract_ref(response)
        LOGGER.info("Puzzle result uploaded to %s (%s)", self.url, ref or "no id")
        return ref

    @staticmethod
    def _extract_ref(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return ""
        if isinstance(payload, dict):
            return str(payload.get("id") or "")
        return ""
