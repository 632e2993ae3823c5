"""SQLite-backed vector store with exact cosine similarity search.

All chunks live in a single ``chunks`` table. Embeddings are stored as
little-endian float32 blobs. Search is a full scan: every stored chunk is
scored against the query and the results are sorted, so ranking is exact.
Replacing ``search`` internals with an approximate index is possible as long
as ordering, cosine scores and top_k truncation stay the same.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path

import numpy as np

from src.exceptions import DatabaseError
from src.models.chunk import DocumentChunk
from src.models.search import DocumentSummary, SearchResult
from src.vectorstore.similarity import cosine_similarity

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"

_EMBEDDING_DTYPE = np.dtype("<f4")

_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS chunks (
    id TEXT PRIMARY KEY,
    document_id TEXT NOT NULL,
    document_name TEXT NOT NULL,
    content TEXT NOT NULL,
    embedding BLOB NOT NULL,
    chunk_index INTEGER NOT NULL,
    token_count INTEGER NOT NULL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_chunks_document_id ON chunks(document_id);
CREATE INDEX IF NOT EXISTS idx_chunks_document_name ON chunks(document_name);
"""

_CHUNK_COLUMNS = "id, document_id, document_name, content, embedding, chunk_index, token_count"


def embedding_to_bytes(embedding: list[float]) -> bytes:
    return np.asarray(embedding, dtype=_EMBEDDING_DTYPE).tobytes()


def bytes_to_embedding(data: bytes) -> list[float]:
    usable = len(data) - len(data) % _EMBEDDING_DTYPE.itemsize
    return np.frombuffer(data[:usable], dtype=_EMBEDDING_DTYPE).tolist()


def _row_to_chunk(row: tuple) -> DocumentChunk:
    chunk_id, document_id, document_name, content, embedding, chunk_index, token_count = row
    return DocumentChunk(
        id=chunk_id,
        document_id=document_id,
        document_name=document_name,
        content=content,
        embedding=bytes_to_embedding(embedding),
        chunk_index=chunk_index,
        token_count=token_count,
    )


def _chunk_to_row(chunk: DocumentChunk) -> tuple:
    return (
        chunk.id,
        chunk.document_id,
        chunk.document_name,
        chunk.content,
        embedding_to_bytes(chunk.embedding),
        chunk.chunk_index,
        chunk.token_count,
    )


class SQLiteVectorStore:
    """Durable chunk storage in one local SQLite file.

    A single connection is shared by every caller and serialized with a
    re-entrant lock, so concurrent upserts, removals and searches from
    threads or async handlers see a consistent table.
    """

    def __init__(self, path: str = "./data/vectors.db"):
        self._path = str(path)
        self._lock = threading.RLock()

        try:
            if self._path != MEMORY_PATH:
                Path(self._path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self._path, check_same_thread=False)
        except (sqlite3.Error, OSError) as e:
            raise DatabaseError(f"Failed to open database: {e}") from e

        try:
            if self._path != MEMORY_PATH:
                self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.executescript(_SCHEMA_SQL)
            self._conn.commit()
        except sqlite3.Error as e:
            self._conn.close()
            raise DatabaseError(f"Failed to create schema: {e}") from e

        logger.info("Vector store opened at %s", self._path)

    @property
    def path(self) -> str:
        return self._path

    @contextmanager
    def _cursor(self, action: str):
        """Run statements under the lock, committing on success."""
        with self._lock:
            try:
                cur = self._conn.cursor()
                yield cur
                self._conn.commit()
            except sqlite3.Error as e:
                try:
                    self._conn.rollback()
                except sqlite3.Error:
                    logger.debug("Rollback failed after error in %s", action)
                raise DatabaseError(f"Failed to {action}: {e}") from e

    def upsert(self, chunk: DocumentChunk) -> None:
        """Insert a chunk, replacing any stored chunk with the same id."""
        with self._cursor("store chunk") as cur:
            cur.execute(
                f"INSERT OR REPLACE INTO chunks ({_CHUNK_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                _chunk_to_row(chunk),
            )

    def upsert_many(self, chunks: list[DocumentChunk]) -> int:
        """Insert or replace several chunks in one transaction.

        Returns the number of chunks written.
        """
        if not chunks:
            return 0
        with self._cursor("store chunks") as cur:
            cur.executemany(
                f"INSERT OR REPLACE INTO chunks ({_CHUNK_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                [_chunk_to_row(c) for c in chunks],
            )
        return len(chunks)

    def remove_by_document(self, document_id: str) -> int:
        """Delete every chunk of a document. Returns the number removed."""
        with self._cursor("remove document") as cur:
            cur.execute("DELETE FROM chunks WHERE document_id = ?", (document_id,))
            removed = cur.rowcount
        if removed:
            logger.info("Removed %d chunks for document %s", removed, document_id)
        return removed

    def search(self, query_embedding: list[float], top_k: int = 5) -> list[SearchResult]:
        """Score every stored chunk against the query and keep the best top_k.

        Results are sorted by descending cosine similarity. The sort is
        stable, so exact ties keep storage order.
        """
        if top_k <= 0:
            return []

        with self._cursor("query chunks") as cur:
            cur.execute(f"SELECT {_CHUNK_COLUMNS} FROM chunks ORDER BY rowid")
            rows = cur.fetchall()

        results = []
        for row in rows:
            chunk = _row_to_chunk(row)
            results.append(SearchResult(
                chunk=chunk,
                score=cosine_similarity(query_embedding, chunk.embedding),
            ))

        results.sort(key=lambda r: r.score, reverse=True)
        return results[:top_k]

    def count(self) -> int:
        """Return the total number of stored chunks."""
        with self._cursor("count chunks") as cur:
            cur.execute("SELECT COUNT(*) FROM chunks")
            return cur.fetchone()[0]

    def get_document_chunks(self, document_id: str) -> list[DocumentChunk]:
        """Retrieve all chunks of a document ordered by chunk_index."""
        with self._cursor("query chunks") as cur:
            cur.execute(
                f"SELECT {_CHUNK_COLUMNS} FROM chunks WHERE document_id = ? ORDER BY chunk_index",
                (document_id,),
            )
            rows = cur.fetchall()
        return [_row_to_chunk(row) for row in rows]

    def find_by_document_name(self, document_name: str) -> list[DocumentChunk]:
        """Retrieve chunks by their display label, grouped per document."""
        with self._cursor("query chunks") as cur:
            cur.execute(
                f"SELECT {_CHUNK_COLUMNS} FROM chunks WHERE document_name = ? "
                "ORDER BY document_id, chunk_index",
                (document_name,),
            )
            rows = cur.fetchall()
        return [_row_to_chunk(row) for row in rows]

    def has_document(self, document_id: str) -> bool:
        """Check if any chunk of the given document is stored."""
        with self._cursor("check document") as cur:
            cur.execute(
                "SELECT 1 FROM chunks WHERE document_id = ? LIMIT 1",
                (document_id,),
            )
            return cur.fetchone() is not None

    def list_documents(self) -> list[DocumentSummary]:
        """List indexed documents with their chunk counts."""
        with self._cursor("list documents") as cur:
            cur.execute(
                "SELECT document_id, MIN(document_name), COUNT(*) FROM chunks "
                "GROUP BY document_id ORDER BY MIN(rowid)"
            )
            rows = cur.fetchall()
        return [
            DocumentSummary(document_id=doc_id, document_name=name, chunk_count=n)
            for doc_id, name, n in rows
        ]

    def embedding_dimension(self) -> int | None:
        """Return the vector length of the oldest stored chunk, if any."""
        with self._cursor("read embedding dimension") as cur:
            cur.execute("SELECT length(embedding) FROM chunks ORDER BY rowid LIMIT 1")
            row = cur.fetchone()
        if row is None:
            return None
        return row[0] // _EMBEDDING_DTYPE.itemsize

    def clear(self) -> int:
        """Delete every stored chunk. Returns the number removed."""
        with self._cursor("clear chunks") as cur:
            cur.execute("DELETE FROM chunks")
            removed = cur.rowcount
        logger.info("Cleared %d chunks from %s", removed, self._path)
        return removed

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
