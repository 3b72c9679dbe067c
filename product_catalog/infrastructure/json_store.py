"""JSON Entity Store — whole-collection file persistence for one entity type.

Invariants:
    - One store instance owns exactly one file (data_dir / file_name)
    - The file always holds a JSON array; absent/empty/whitespace files become "[]"
    - read() re-parses from disk every time (no caching at this layer)
    - write() replaces the whole collection, never appends
    - Malformed content is discarded: the file is reset to "[]" and the read fails
    - Expected failures return RepositoryResult(500); only cancellation raises

Design Decisions:
    - Temp file + os.replace for writes: a failed write leaves the previous file intact
    - Blocking file IO runs in asyncio.to_thread so the event loop never stalls
    - pydantic TypeAdapter(list[model]) for parse/dump: one schema for file and API shapes
    - Failures built as StorageError first, then enveloped: one place for message + log fields
"""

import asyncio
import contextlib
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from product_catalog.core.cancellation import raise_if_cancelled
from product_catalog.core.errors import StorageError
from product_catalog.core.results import RepositoryResult

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

EMPTY_ARRAY = "[]"


class JsonEntityStore(Generic[M]):
    """File-backed EntityStore for one pydantic entity model."""

    def __init__(
        self,
        model: type[M],
        data_dir: str | os.PathLike,
        file_name: str,
        indent: int | None = 2,
    ):
        self.model = model
        self.data_dir = Path(data_dir)
        self.file_path = self.data_dir / file_name
        self.indent = indent
        self.lock = asyncio.Lock()
        self._adapter = TypeAdapter(list[model])
        try:
            self.ensure_initialized()
        except OSError as e:
            # read() retries initialization and reports the failure as a result
            logger.warning(
                f"Could not initialize store file: {e}",
                extra={"path": str(self.file_path)},
            )

    def __repr__(self) -> str:
        return f"JsonEntityStore({self.model.__name__}, {str(self.file_path)!r})"

    def ensure_initialized(self) -> None:
        """Create data_dir and an empty-array file; repair empty/whitespace files."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists():
            self.file_path.write_text(EMPTY_ARRAY, encoding="utf-8")
            return
        if not self.file_path.read_text(encoding="utf-8").strip():
            self.file_path.write_text(EMPTY_ARRAY, encoding="utf-8")

    # ─── Read ───────────────────────────────────────────────────

    async def read(
        self, cancel: asyncio.Event | None = None,
    ) -> RepositoryResult[list[M]]:
        """Parse the whole collection from disk."""
        raise_if_cancelled(cancel, "read")
        try:
            entities = await asyncio.to_thread(self._read_sync)
        except (ValidationError, UnicodeDecodeError) as e:
            await asyncio.to_thread(self._reset_after_parse_error)
            return self._failure(f"Invalid JSON: {e}", "read", logging.WARNING)
        except PermissionError as e:
            return self._failure(f"Permission error: {e}", "read")
        except OSError as e:
            return self._failure(f"File error: {e}", "read")
        except Exception as e:
            logger.error(
                f"Unexpected error reading {self.file_path}: {e}", exc_info=True,
            )
            return self._failure(f"Unexpected error while reading: {e}", "read")
        raise_if_cancelled(cancel, "read")
        return RepositoryResult.ok(entities)

    def _read_sync(self) -> list[M]:
        self.ensure_initialized()
        raw = self.file_path.read_text(encoding="utf-8")
        return self._adapter.validate_json(raw)

    def _reset_after_parse_error(self) -> None:
        try:
            self.file_path.write_text(EMPTY_ARRAY, encoding="utf-8")
        except OSError as e:
            logger.error(
                f"Could not reset malformed store file: {e}",
                extra={"path": str(self.file_path)},
            )

    # ─── Write ──────────────────────────────────────────────────

    async def write(
        self, entities: Sequence[M], cancel: asyncio.Event | None = None,
    ) -> RepositoryResult[None]:
        """Replace the stored collection with `entities`."""
        raise_if_cancelled(cancel, "write")
        try:
            payload = self._adapter.dump_json(list(entities), indent=self.indent)
            await asyncio.to_thread(self._replace_file, payload)
        except Exception as e:
            return self._failure(f"Could not save to file: {e}", "write")
        return RepositoryResult.no_content()

    def _replace_file(self, payload: bytes) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{self.file_path.name}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.file_path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise

    # ─── Helpers ────────────────────────────────────────────────

    def _failure(
        self, message: str, operation: str, level: int = logging.ERROR,
    ) -> RepositoryResult:
        error = StorageError(message, operation, str(self.file_path))
        logger.log(
            level, f"Store {operation} failed: {message}",
            extra={
                **error.log_fields(),
                "operation": operation,
                "entity_type": self.model.__name__.lower(),
            },
        )
        return RepositoryResult.from_error(error)
