"""Indexing pipeline orchestrator.

Wires together: extractor → chunker → embedding provider → vector store.
"""

import logging
from pathlib import Path

from src.embedding.provider import EmbeddingProvider
from src.exceptions import DatabaseError, EmbeddingError, ExtractionError
from src.ingestion.chunker import chunk_text
from src.ingestion.extractor import extract_text
from src.models.chunk import DocumentChunk
from src.models.search import IndexResult
from src.vectorstore.sqlite_store import SQLiteVectorStore

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 512
DEFAULT_CHUNK_OVERLAP = 50


def index_document(
    document_id: str,
    document_name: str,
    text: str,
    embedding_provider: EmbeddingProvider,
    store: SQLiteVectorStore,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> IndexResult:
    """Index one document's text, replacing whatever was indexed before.

    Steps:
    1. Remove existing chunks for document_id
    2. Chunk the text
    3. Embed each chunk; a chunk whose embedding fails is skipped
    4. Store each embedded chunk with its position as chunk_index

    Never raises. The result is successful when at least one chunk was
    stored; an unsuccessful document can simply be indexed again later.
    A DatabaseError ends the run unsuccessfully and removes the chunks
    already stored for the document.
    """
    result = IndexResult(document_id=document_id)

    try:
        store.remove_by_document(document_id)

        drafts = chunk_text(text, max_tokens=chunk_size, overlap_tokens=chunk_overlap)
        if not drafts:
            logger.warning("No chunks produced for %s", document_name)
            result.error = "Document contains no text to index"
            return result

        stored_dimension = store.embedding_dimension()

        for index, draft in enumerate(drafts):
            try:
                embedding = embedding_provider.embed(draft.text)
            except EmbeddingError as e:
                logger.warning(
                    "Skipping chunk %d of %s: %s", index, document_name, e
                )
                result.chunks_failed += 1
                continue

            if stored_dimension is None:
                stored_dimension = len(embedding)
            elif len(embedding) != stored_dimension:
                logger.warning(
                    "Embedding dimension %d for %s differs from stored dimension %d",
                    len(embedding), document_name, stored_dimension,
                )

            store.upsert(DocumentChunk(
                id=draft.id,
                document_id=document_id,
                document_name=document_name,
                content=draft.text,
                embedding=embedding,
                chunk_index=index,
                token_count=draft.token_count,
            ))
            result.chunks_created += 1
    except DatabaseError as e:
        logger.error("Error indexing %s: %s", document_name, e)
        result.error = str(e)
        _discard_partial(document_id, store, result)
        return result
    except ValueError as e:
        logger.error("Error indexing %s: %s", document_name, e)
        result.error = str(e)

    result.success = result.chunks_created > 0
    if not result.success and result.error is None:
        result.error = f"All {result.chunks_failed} chunk embeddings failed"

    logger.info(
        "Indexed %s: %d chunks stored, %d skipped",
        document_name, result.chunks_created, result.chunks_failed,
    )
    return result


def _discard_partial(document_id: str, store: SQLiteVectorStore, result: IndexResult) -> None:
    """Remove whatever a failed run stored so the document is either whole or absent."""
    if result.chunks_created == 0:
        return
    try:
        store.remove_by_document(document_id)
    except DatabaseError as e:
        logger.error("Could not remove partial chunks of %s: %s", document_id, e)
        return
    result.chunks_created = 0


def index_file(
    file_path: str | Path,
    embedding_provider: EmbeddingProvider,
    store: SQLiteVectorStore,
    document_id: str | None = None,
    document_name: str | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> IndexResult:
    """Extract a file's text and index it.

    The document id defaults to the resolved file path so re-indexing the
    same file replaces its chunks; the name defaults to the file name.
    """
    path = Path(file_path)
    document_id = document_id or str(path.resolve())
    document_name = document_name or path.name

    try:
        text = extract_text(path)
    except ExtractionError as e:
        logger.warning("Could not extract %s: %s", path, e)
        return IndexResult(document_id=document_id, error=str(e))

    return index_document(
        document_id=document_id,
        document_name=document_name,
        text=text,
        embedding_provider=embedding_provider,
        store=store,
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
    )


def index_files(
    file_paths: list[str | Path],
    embedding_provider: EmbeddingProvider,
    store: SQLiteVectorStore,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[IndexResult]:
    """Index a batch of files. A failing file never stops the batch."""
    results = []
    for file_path in file_paths:
        results.append(index_file(
            file_path,
            embedding_provider=embedding_provider,
            store=store,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
        ))

    succeeded = sum(1 for r in results if r.success)
    logger.info("Indexed %d of %d files", succeeded, len(results))
    return results
