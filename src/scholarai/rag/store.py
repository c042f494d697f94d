"""JSON file document store."""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from .base import BaseDocumentStore
from .document import Document, DocumentSummary

logger = logging.getLogger(__name__)


class JSONDocumentStore(BaseDocumentStore):
    """Document store persisted as a single JSON file.

    Every operation reads the whole file and every mutation rewrites it.
    Writes go to ``<path>.tmp`` first and are then renamed over the real
    file, so readers never see a half-written store. A missing, empty or
    corrupt file is replaced by an empty store.

    Read-modify-write sequences are serialized by a lock owned by the
    store; callers must do slow work (extraction, embedding) before calling
    :meth:`append`, never while holding the store.
    """

    def __init__(self, path: str | Path):
        """Initialize the store.

        Args:
            path: Location of the JSON file (parent directories are created)
        """
        self.path = Path(path)
        self.tmp_path = self.path.with_name(self.path.name + ".tmp")
        self._lock = asyncio.Lock()

    def _ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _write(self, documents: list[Document]) -> None:
        """Atomically replace the store file with the given documents."""
        self._ensure_dir()
        payload: dict[str, Any] = {
            "docs": [doc.model_dump(by_alias=True) for doc in documents],
        }
        with open(self.tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        os.replace(self.tmp_path, self.path)

    def _read(self) -> list[Document]:
        """Read the store file, reinitializing it when unusable."""
        self._ensure_dir()
        try:
            raw = self.path.read_text(encoding="utf-8").strip()
            if not raw:
                raise ValueError("empty store")

            parsed = json.loads(raw)
            if not isinstance(parsed, dict):
                raise ValueError("store root is not an object")

            docs = parsed.get("docs") or []
            if not isinstance(docs, list):
                raise ValueError("store docs is not a list")

            return [Document.model_validate(doc) for doc in docs]
        except (OSError, ValueError) as e:
            logger.warning(f"Reinitializing document store at {self.path}: {e}")
            self._write([])
            return []

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def initialize(self) -> None:
        """Create the store file if it does not exist yet."""
        async with self._lock:
            if not self.path.exists():
                await self._run(self._write, [])
                logger.info(f"Created document store at {self.path}")

    async def load(self) -> list[Document]:
        async with self._lock:
            return await self._run(self._read)

    async def save(self, documents: list[Document]) -> None:
        """Replace the stored documents wholesale."""
        async with self._lock:
            await self._run(self._write, documents)

    async def append(self, documents: list[Document]) -> None:
        if not documents:
            return

        async with self._lock:
            # Reload inside the lock so concurrent appends see each other
            current = await self._run(self._read)
            current.extend(documents)
            await self._run(self._write, current)

        logger.info(f"Stored {len(documents)} new documents ({len(current)} total)")

    async def list_documents(self) -> list[DocumentSummary]:
        return [doc.summary() for doc in await self.load()]

    async def get(self, document_id: str) -> Optional[Document]:
        for doc in await self.load():
            if doc.id == document_id:
                return doc
        return None

    async def count(self) -> int:
        """Return the number of stored documents."""
        return len(await self.load())
