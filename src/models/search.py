"""Search and indexing result models."""

from dataclasses import dataclass

from src.models.chunk import DocumentChunk


@dataclass
class SearchResult:
    """A stored chunk paired with its cosine similarity to a query."""

    chunk: DocumentChunk
    score: float


@dataclass
class IndexResult:
    """Outcome of indexing one document. Indexing reports, it never raises."""

    document_id: str
    chunks_created: int = 0
    chunks_failed: int = 0
    success: bool = False
    error: str | None = None


@dataclass
class IndexStats:
    """Diagnostic counters for the whole index."""

    chunk_count: int = 0

    @property
    def indexed(self) -> bool:
        return self.chunk_count > 0

    def to_dict(self) -> dict:
        return {"chunk_count": self.chunk_count, "indexed": self.indexed}


@dataclass
class DocumentSummary:
    """One indexed document as listed by the vector store."""

    document_id: str
    document_name: str
    chunk_count: int
