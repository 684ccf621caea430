"""JSON-file persistence: one document per record plus an in-memory mirror.

Each repository owns one directory under the data root and keeps every
record it has loaded or written in a dict keyed by id. The directory is
scanned once, lazily, on the first call to any public operation; later calls
are served from the mirror. Blocking file I/O runs in a worker thread so
callers only suspend at I/O boundaries.
"""

import asyncio
import logging
import os
import uuid
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter

from app.errors import DocumentRemovalError, RecordValidationError
from app.models.common import touch, utcnow, validate_record

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

# A model class, or a TypeAdapter over a union of model classes.
Schema = type[BaseModel] | TypeAdapter


class JsonFileRepository(Generic[RecordT]):
    """Generic file-backed collection. Subclasses bind the models and the directory name."""

    collection: ClassVar[str]
    record_model: ClassVar[Schema]
    new_model: ClassVar[Schema]
    update_model: ClassVar[type[BaseModel]]

    # Assigned by the repository; dropped from caller payloads.
    managed_fields: ClassVar[frozenset[str]] = frozenset(
        {"id", "created_at", "createdAt", "updated_at", "updatedAt"}
    )
    # Settable on create only; dropped when save() merges into an existing record.
    immutable_fields: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, data_dir: Path | str) -> None:
        self._dir = Path(data_dir) / self.collection
        self._records: dict[str, RecordT] = {}
        self._loaded = False
        self._loading: asyncio.Future | None = None
        # Held from document write to mirror update.
        self._write_lock = asyncio.Lock()
        self.load_count = 0

    @property
    def directory(self) -> Path:
        return self._dir

    def document_path(self, record_id: str) -> Path:
        return self._dir / f"{record_id}.json"

    # ─── Initialization ───────────────────────────────────────────────

    async def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        if self._loading is None:
            self._loading = asyncio.ensure_future(self._load())
        loading = self._loading
        try:
            # Concurrent first callers all wait on the same scan.
            await asyncio.shield(loading)
        except Exception:
            if self._loading is loading:
                self._loading = None
            raise

    async def _load(self) -> None:
        await asyncio.to_thread(self._dir.mkdir, parents=True, exist_ok=True)
        self.load_count += 1
        paths = await asyncio.to_thread(self._list_documents)
        skipped = 0
        for path in paths:
            record = await self._read_document(path)
            if record is None:
                skipped += 1
                continue
            self._records[record.id] = record
        self._loaded = True
        logger.info(
            "Loaded %d %s from %s (%d skipped)",
            len(self._records),
            self.collection,
            self._dir,
            skipped,
        )

    def _list_documents(self) -> list[Path]:
        return sorted(
            p for p in self._dir.iterdir() if p.is_file() and p.suffix == ".json"
        )

    async def _read_document(self, path: Path) -> RecordT | None:
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s: %s", path, e)
            return None

        result = validate_record(self.record_model, text)
        if not result.ok:
            logger.warning("Skipping invalid document %s: %s", path.name, result.errors)
            return None

        record = result.record
        if record.id != path.stem:
            # delete() removes <id>.json, so a misnamed document would outlive it.
            logger.warning(
                "Skipping invalid document %s: holds record %s", path.name, record.id
            )
            return None
        return record

    # ─── Reads ────────────────────────────────────────────────────────
    # Callers get copies; the mirror only changes through the write path.

    async def find_by_id(self, record_id: str) -> RecordT | None:
        await self._ensure_loaded()
        record = self._records.get(record_id)
        return None if record is None else record.model_copy(deep=True)

    async def find_all(self) -> list[RecordT]:
        await self._ensure_loaded()
        return [r.model_copy(deep=True) for r in self._records.values()]

    async def _find_first(self, predicate: Callable[[RecordT], bool]) -> RecordT | None:
        await self._ensure_loaded()
        for record in self._records.values():
            if predicate(record):
                return record.model_copy(deep=True)
        return None

    async def _find_where(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        await self._ensure_loaded()
        return [r.model_copy(deep=True) for r in self._records.values() if predicate(r)]

    # ─── Writes ───────────────────────────────────────────────────────

    async def create(self, data: Mapping[str, Any] | BaseModel) -> RecordT:
        await self._ensure_loaded()
        fields = self._coerce(self.new_model, data).model_dump()
        now = utcnow()
        record = self._build(
            {**fields, "id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        )
        self._check_constraints(record)
        await self._store(record)
        logger.info("Created %s record %s", self.collection, record.id)
        return record.model_copy(deep=True)

    async def update(
        self, record_id: str, changes: Mapping[str, Any] | BaseModel
    ) -> RecordT | None:
        await self._ensure_loaded()
        existing = self._records.get(record_id)
        if existing is None:
            return None

        patch = self._coerce(self.update_model, changes).model_dump(exclude_unset=True)
        record = self._build(
            {
                **existing.model_dump(),
                **patch,
                "id": existing.id,
                "created_at": existing.created_at,
                "updated_at": touch(existing.updated_at),
            }
        )
        self._check_constraints(record)
        await self._store(record)
        logger.debug("Updated %s record %s (%s)", self.collection, record.id, sorted(patch))
        return record.model_copy(deep=True)

    async def save(self, data: Mapping[str, Any] | BaseModel) -> RecordT:
        """Upsert: merge into the record named by ``id`` if it is known, else create."""
        await self._ensure_loaded()
        payload = self._raw(data)
        record_id = payload.get("id")
        fields = {k: v for k, v in payload.items() if k not in self.managed_fields}

        if record_id and record_id in self._records:
            fields = {k: v for k, v in fields.items() if k not in self.immutable_fields}
            return await self.update(record_id, fields)

        if record_id:
            logger.warning(
                "Unknown %s id %s on save, creating a new record", self.collection, record_id
            )
        return await self.create(fields)

    async def delete(self, record_id: str) -> bool:
        await self._ensure_loaded()
        async with self._write_lock:
            if record_id not in self._records:
                return False

            # Document first, mirror second: a failed removal leaves both intact.
            try:
                await asyncio.to_thread(self.document_path(record_id).unlink, missing_ok=True)
            except OSError as e:
                logger.error(
                    "Failed to remove document for %s %s: %s", self.collection, record_id, e
                )
                raise DocumentRemovalError(record_id) from e

            removed = self._records.pop(record_id, None) is not None
        if removed:
            logger.info("Deleted %s record %s", self.collection, record_id)
        return removed

    # ─── Helpers ──────────────────────────────────────────────────────

    def _check_constraints(self, record: RecordT) -> None:
        """Hook for collection-level invariants such as unique keys."""

    @staticmethod
    def _raw(data: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_unset=True)
        return dict(data)

    def _coerce(self, model: Schema, data: Mapping[str, Any] | BaseModel) -> BaseModel:
        if isinstance(model, type) and isinstance(data, model):
            return data
        payload = {k: v for k, v in self._raw(data).items() if k not in self.managed_fields}
        result = validate_record(model, payload)
        if not result.ok:
            raise RecordValidationError(result.errors)
        return result.record

    def _build(self, payload: dict[str, Any]) -> RecordT:
        result = validate_record(self.record_model, payload)
        if not result.ok:
            raise RecordValidationError(result.errors)
        return result.record

    async def _store(self, record: RecordT) -> None:
        async with self._write_lock:
            await asyncio.to_thread(self._write_document, record)
            self._records[record.id] = record

    def _write_document(self, record: RecordT) -> None:
        path = self.document_path(record.id)
        # One temp file per write; concurrent writes for an id must not share it.
        tmp = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            tmp.write_text(record.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
            os.replace(tmp, path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
