"""Abstract embedding provider interface."""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Interface for text embedding generation.

    Implementations wrap a specific backend (a hosted embedding API or a
    local model). Swap backends by changing the provider tag in
    configuration, see ``src.embedding.config``.
    """

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Generate the embedding of a single text.

        Returns:
            A vector of floats whose length equals ``dimension``.

        Raises:
            EmbeddingError: If the backend is rate limited, rejects the
                credentials, is unreachable, or answers with something
                that is not an embedding.
        """
        ...

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed several texts, one call at a time.

        Fails on the first text that cannot be embedded.
        """
        return [self.embed(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        """Generate the embedding of a search query.

        Some models expect a query-specific prefix; override this method to
        add it. Default delegates to embed().
        """
        return self.embed(text)

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the embedding dimension (e.g., 768)."""
        ...
