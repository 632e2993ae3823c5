"""Shared pytest fixtures for OmniRecall tests."""

import re

import pytest

from src.embedding.provider import EmbeddingProvider
from src.exceptions import EmbeddingError
from src.models.enums import EmbeddingErrorKind
from src.vectorstore.sqlite_store import SQLiteVectorStore

VOCABULARY = ["inflation", "rate", "labor", "market", "policy", "python", "database", "garden"]

FAIL_MARKER = "EMBEDFAIL"


# -- Deterministic embedding provider for tests --

class KeywordEmbeddingProvider(EmbeddingProvider):
    """Counts vocabulary words; a small constant dimension keeps vectors non-zero.

    Texts containing FAIL_MARKER raise a rate-limit error.
    """

    def __init__(self):
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if FAIL_MARKER in text:
            raise EmbeddingError(EmbeddingErrorKind.RATE_LIMITED, "test quota exhausted")
        words = re.findall(r"[a-z]+", text.lower())
        return [float(words.count(w)) for w in VOCABULARY] + [0.1]

    @property
    def dimension(self) -> int:
        return len(VOCABULARY) + 1


@pytest.fixture
def embedding_provider():
    return KeywordEmbeddingProvider()


@pytest.fixture
def memory_store():
    store = SQLiteVectorStore(path=":memory:")
    yield store
    store.close()


@pytest.fixture
def file_store(tmp_path):
    store = SQLiteVectorStore(path=str(tmp_path / "index" / "vectors.db"))
    yield store
    store.close()
