"""Sentence Transformer embedding provider implementation."""

import logging

from sentence_transformers import SentenceTransformer

from src.embedding.provider import EmbeddingProvider
from src.exceptions import EmbeddingError
from src.models.enums import EmbeddingErrorKind

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_MODEL = "all-MiniLM-L6-v2"


class SentenceTransformerEmbeddingProvider(EmbeddingProvider):
    """Embedding provider running a sentence-transformers model in-process.

    Default model: all-MiniLM-L6-v2 (384 dimensions, ~80MB). Needs no API
    key; the model is downloaded on first use when it is not cached.
    """

    def __init__(self, model_name: str = DEFAULT_LOCAL_MODEL):
        logger.info("Loading embedding model: %s", model_name)
        try:
            self._model = SentenceTransformer(model_name, local_files_only=True)
        except OSError:
            self._model = SentenceTransformer(model_name)
        self._model_name = model_name
        self._dimension = self._model.get_sentence_embedding_dimension()

    @property
    def model_name(self) -> str:
        return self._model_name

    def embed(self, text: str) -> list[float]:
        return self.embed_batch([text])[0]

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        try:
            embeddings = self._model.encode(texts, show_progress_bar=False)
        except (RuntimeError, ValueError) as e:
            raise EmbeddingError(EmbeddingErrorKind.BAD_RESPONSE, str(e)) from e
        return embeddings.tolist()

    @property
    def dimension(self) -> int:
        return self._dimension
