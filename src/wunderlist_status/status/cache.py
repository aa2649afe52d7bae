"""Single-record disk cache for the last successful render."""

from __future__ import annotations

import json
import logging
import tempfile
from datetime import datetime
from pathlib import Path

from wunderlist_status.status.models import CachedRender

logger = logging.getLogger(__name__)

RESULT_FIELD = "result"
DATE_FIELD = "date"


class CacheFormatError(ValueError):
    """Cache file exists but does not hold a valid render record."""


class RenderCache:
    """Stores one render record at a fixed path; the last write wins."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def save(self, text: str, saved_at: datetime) -> None:
        """Replace the record atomically.

        The record is written to a sibling temporary file first, so an
        interrupted save leaves the previous record intact. Raises `OSError`
        when the file cannot be written.
        """

        record = {RESULT_FIELD: text, DATE_FIELD: saved_at.isoformat()}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        handle = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            delete=False,
        )
        staged = Path(handle.name)
        try:
            with handle:
                handle.write(json.dumps(record))
            staged.replace(self._path)
        except BaseException:
            staged.unlink(missing_ok=True)
            raise
        logger.debug("Saved render cache to %s", self._path)

    def load(self) -> CachedRender:
        """Read the record.

        Raises `OSError` when the file is absent or unreadable and
        `CacheFormatError` when its content is not a render record.
        """

        raw = self._path.read_bytes()
        try:
            record = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as error:
            raise CacheFormatError(f"Render cache {self._path} is not valid JSON") from error
        if not isinstance(record, dict):
            raise CacheFormatError(f"Render cache {self._path} does not hold an object")

        text = record.get(RESULT_FIELD)
        saved_at_raw = record.get(DATE_FIELD)
        if not isinstance(text, str) or not isinstance(saved_at_raw, str):
            raise CacheFormatError(
                f"Render cache {self._path} lacks {RESULT_FIELD!r} or {DATE_FIELD!r}",
            )
        try:
            saved_at = datetime.fromisoformat(saved_at_raw)
        except ValueError as error:
            raise CacheFormatError(
                f"Render cache {self._path} has invalid date {saved_at_raw!r}",
            ) from error
        return CachedRender(text=text, saved_at=saved_at)
