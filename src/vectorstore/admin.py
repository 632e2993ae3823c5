"""Administrative operations on the on-disk index."""

import logging
from pathlib import Path

from src.exceptions import DatabaseError
from src.models.search import IndexStats
from src.vectorstore.sqlite_store import MEMORY_PATH, SQLiteVectorStore

logger = logging.getLogger(__name__)

# SQLite WAL mode keeps two sidecar files next to the database
_SIDECAR_SUFFIXES = ("-wal", "-shm")


def clear_index(path: str | Path) -> bool:
    """Delete the whole store file.

    Returns True if a database file was removed, False if none existed.
    The store must not be open in this process when it is deleted.
    """
    if str(path) == MEMORY_PATH:
        return False

    db_path = Path(path)
    removed = False
    try:
        for candidate in [db_path, *(Path(f"{db_path}{s}") for s in _SIDECAR_SUFFIXES)]:
            if candidate.exists():
                candidate.unlink()
                removed = removed or candidate == db_path
    except OSError as e:
        raise DatabaseError(f"Failed to delete index {db_path}: {e}") from e

    if removed:
        logger.info("Deleted index at %s", db_path)
    return removed


def get_index_stats(path: str | Path) -> IndexStats:
    """Report the chunk count of the store at ``path``.

    A store that does not exist or cannot be opened reports as empty.
    """
    if str(path) != MEMORY_PATH and not Path(path).exists():
        return IndexStats(chunk_count=0)

    try:
        with SQLiteVectorStore(str(path)) as store:
            return IndexStats(chunk_count=store.count())
    except DatabaseError as e:
        logger.warning("Could not read index stats from %s: %s", path, e)
        return IndexStats(chunk_count=0)
