"""
Cache store - versioned persistence for analysis records.

Every record lives inside one envelope stored under a single well-known key:

    {"schema_version": 1, "entries": {"<url>": {...AnalysisRecord...}}}

Rules:
    - An envelope whose schema_version is missing or different is discarded
      whole and replaced by an empty one. There is no field-level migration.
    - Writes are read-modify-write cycles over the whole envelope and are
      serialized by one asyncio.Lock, so concurrent put/purge never lose
      updates and readers only ever see a complete envelope.
    - Substrate failures surface as StoreUnavailable.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, List, Optional

from pydantic import ValidationError

from creal.config import STORAGE_KEY, STORAGE_SCHEMA_VERSION
from creal.core import (
    Clock,
    SchemaVersionMismatch,
    StoreUnavailable,
    get_logger,
    system_clock,
)
from creal.models import AnalysisRecord, CacheEnvelope, StorageStats

from .kv_store import KeyValueStore

logger = get_logger(__name__, component="cache_store")


class CacheStore:
    """TTL-agnostic record store; freshness is decided by the caller."""

    def __init__(
        self,
        substrate: KeyValueStore,
        clock: Clock = system_clock,
        storage_key: str = STORAGE_KEY,
        schema_version: int = STORAGE_SCHEMA_VERSION,
    ):
        self.substrate = substrate
        self.clock = clock
        self.storage_key = storage_key
        self.schema_version = schema_version
        self._write_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Envelope I/O
    # ------------------------------------------------------------------

    def _empty_envelope(self) -> CacheEnvelope:
        return CacheEnvelope(schema_version=self.schema_version, entries={})

    def _parse_envelope(self, raw: Any) -> CacheEnvelope:
        if raw is None:
            return self._empty_envelope()
        found = raw.get("schema_version") if isinstance(raw, dict) else None
        if found != self.schema_version:
            raise SchemaVersionMismatch(found, self.schema_version)
        return CacheEnvelope.model_validate(raw)

    async def _load(self) -> CacheEnvelope:
        try:
            raw = await self.substrate.get(self.storage_key)
        except Exception as e:
            raise StoreUnavailable(f"Failed to read cache envelope: {e}") from e

        try:
            return self._parse_envelope(raw)
        except SchemaVersionMismatch as e:
            logger.debug("Discarding cache envelope", extra={"reason": str(e)})
            return self._empty_envelope()
        except ValidationError as e:
            logger.warning(
                "Discarding malformed cache envelope",
                extra={"errors": e.error_count()},
            )
            return self._empty_envelope()

    async def _save(self, envelope: CacheEnvelope) -> None:
        try:
            await self.substrate.set(self.storage_key, envelope.model_dump(mode="json"))
        except Exception as e:
            raise StoreUnavailable(f"Failed to write cache envelope: {e}") from e

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Optional[AnalysisRecord]:
        envelope = await self._load()
        return envelope.entries.get(key)

    async def list_records(self) -> List[AnalysisRecord]:
        """All records, newest first."""
        envelope = await self._load()
        return sorted(envelope.entries.values(), key=lambda r: r.created_at, reverse=True)

    async def stats(self) -> StorageStats:
        envelope = await self._load()
        timestamps = [record.created_at for record in envelope.entries.values()]
        return StorageStats(
            count=len(timestamps),
            oldest_timestamp=min(timestamps) if timestamps else None,
            newest_timestamp=max(timestamps) if timestamps else None,
            estimated_size_bytes=len(json.dumps(envelope.model_dump(mode="json"))),
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def put(self, record: AnalysisRecord) -> None:
        """Upsert a record; the last writer for a key wins."""
        async with self._write_lock:
            envelope = await self._load()
            envelope.entries[record.key] = record
            await self._save(envelope)

    async def delete(self, key: str) -> bool:
        async with self._write_lock:
            envelope = await self._load()
            if envelope.entries.pop(key, None) is None:
                return False
            await self._save(envelope)
            return True

    async def clear(self) -> None:
        async with self._write_lock:
            await self._save(self._empty_envelope())

    async def purge_older_than(self, horizon_seconds: float) -> int:
        """Remove records created before now - horizon; persists at most once."""
        async with self._write_lock:
            envelope = await self._load()
            cutoff = self.clock() - horizon_seconds
            expired = [key for key, record in envelope.entries.items() if record.created_at < cutoff]
            for key in expired:
                del envelope.entries[key]

            if expired:
                await self._save(envelope)
                logger.info("Purged expired analyses", extra={"removed": len(expired)})

            return len(expired)
