"""Document chunk data models."""

import uuid
from dataclasses import dataclass, field


@dataclass
class ChunkDraft:
    """A segment produced by the chunker, before it has been embedded."""

    text: str
    token_count: int
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class DocumentChunk:
    """A segment of an indexed document stored with its embedding."""

    document_id: str
    document_name: str
    content: str
    chunk_index: int
    token_count: int
    embedding: list[float] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if not self.content:
            raise ValueError("content must not be empty")
        if self.chunk_index < 0:
            raise ValueError("chunk_index must be >= 0")
        if self.token_count < 0:
            raise ValueError("token_count must be >= 0")
